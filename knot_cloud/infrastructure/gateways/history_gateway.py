"""
Infrastructure Gateway - Sensor History over HTTP

This module implements the history gateway on top of the broker's HTTP
API, which exposes the data stored for each device under ``/data/{uuid}``.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
import structlog

from knot_cloud.domain.entities.errors import BrokerError
from knot_cloud.domain.entities.session import SessionCredentials
from knot_cloud.domain.gateways.history_gateway import IHistoryGateway
from knot_cloud.shared.consts import AUTH_TOKEN_HEADER, AUTH_UUID_HEADER

logger = structlog.get_logger(__name__)


class HttpHistoryGateway(IHistoryGateway):
    """Implementation of the history gateway using an HTTP client."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 30.0):
        """
        Initialize the history gateway.

        Args:
            base_url: Base URL of the HTTP API (e.g., "http://knot-cloud:3000").
                Defaults to ``http://{host}:{port}`` of the session.
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = timeout

    def _url_for(self, credentials: SessionCredentials, address: str) -> str:
        base_url = self.base_url or f"http://{credentials.host}:{credentials.port}"
        return f"{base_url}/data/{quote(address, safe='')}"

    async def fetch_data(
        self,
        credentials: SessionCredentials,
        address: str,
        limit: int = 10,
        start: str = "",
        finish: str = "",
    ) -> List[Dict[str, Any]]:
        """Read the data recorded for ``address``."""
        url = self._url_for(credentials, address)
        params = {"limit": str(limit), "start": start, "finish": finish}
        headers = {
            AUTH_UUID_HEADER: credentials.uuid,
            AUTH_TOKEN_HEADER: credentials.token,
        }

        logger.info("history.fetch_started", url=url, params=params)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.RequestError as e:
            logger.error("history.request_error", error=str(e), url=url)
            raise BrokerError(f"History request failed: {str(e)}") from e

        if response.status_code != 200:
            logger.error(
                "history.http_error",
                status_code=response.status_code,
                response_text=response.text,
                url=url,
            )
            raise BrokerError(
                f"History HTTP error {response.status_code}: {response.text}",
                details={"status_code": response.status_code},
            )

        try:
            body = response.json()
        except ValueError as e:
            logger.error("history.invalid_body", error=str(e), url=url)
            raise BrokerError(f"History response is not JSON: {str(e)}") from e

        records = body.get("data") if isinstance(body, dict) else body
        if not isinstance(records, list):
            logger.error("history.unexpected_body", url=url)
            raise BrokerError("History response carries no data list")

        logger.info("history.fetch_completed", url=url, count=len(records))
        return records
