"""
Session Use Cases - Application Layer

This module manages the lifecycle of the authenticated broker connection
shared by every other operation of the client.
"""

import asyncio
from typing import Optional, Set

from knot_cloud.domain.entities.errors import (
    AuthorizationError,
    DomainError,
    NotConnectedError,
)
from knot_cloud.domain.entities.session import SessionCredentials
from knot_cloud.domain.gateways.broker_gateway import IBrokerConnection, IBrokerTransport
from knot_cloud.shared import get_logger

logger = get_logger(__name__)


class SessionManager:
    """Owns the single broker connection of a client."""

    def __init__(self, credentials: SessionCredentials, transport: IBrokerTransport):
        """
        Initialize the session with its dependencies.

        Args:
            credentials: Identity presented to the broker
            transport: Factory of broker connections
        """
        self.credentials = credentials
        self.transport = transport
        self._connection: Optional[IBrokerConnection] = None
        self._lock = asyncio.Lock()
        self._closing: Set[asyncio.Task] = set()

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    async def connect(self) -> None:
        """
        Open the broker connection unless one is already open.

        Raises:
            AuthorizationError: If the broker rejects the credentials
        """
        async with self._lock:
            if self._connection is not None:
                return

            logger.info(
                "session.connect_started",
                host=self.credentials.host,
                port=self.credentials.port,
            )
            connection = self.transport.create_connection(self.credentials)
            ready = await connection.wait_ready()
            if not ready:
                self._close_in_background(connection)
                raise AuthorizationError()

            self._connection = connection
            logger.info("session.connect.ready", host=self.credentials.host)

    async def close(self) -> None:
        """
        Close the broker connection. Does nothing when disconnected.

        Failures reported by the connection are logged; the session is
        considered closed either way.
        """
        async with self._lock:
            if self._connection is None:
                return
            connection, self._connection = self._connection, None
            try:
                await connection.close()
            except DomainError as exc:
                logger.warning(
                    "session.close_failed",
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                return
            logger.info("session.closed", host=self.credentials.host)

    def require_connection(self) -> IBrokerConnection:
        """
        Return the open connection.

        Raises:
            NotConnectedError: If no connection is open
        """
        if self._connection is None:
            raise NotConnectedError()
        return self._connection

    def _close_in_background(self, connection: IBrokerConnection) -> None:
        task = asyncio.ensure_future(connection.close())
        self._closing.add(task)
        task.add_done_callback(self._on_background_close)

    def _on_background_close(self, task: asyncio.Task) -> None:
        self._closing.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(
                "session.rejected_close_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
