"""
Domain Gateway - Sensor History

This module defines the gateway interface for reading the sensor data a
device has stored in the broker.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from knot_cloud.domain.entities.session import SessionCredentials


class IHistoryGateway(ABC):
    """Interface for the historical data query service."""

    @abstractmethod
    async def fetch_data(
        self,
        credentials: SessionCredentials,
        address: str,
        limit: int = 10,
        start: str = "",
        finish: str = "",
    ) -> List[Dict[str, Any]]:
        """
        Read the data recorded for a device.

        Args:
            credentials: Session identity used to authenticate the request
            address: Broker address of the device
            limit: Maximum number of records to return
            start: Lower bound of the time range (empty for unbounded)
            finish: Upper bound of the time range (empty for unbounded)

        Returns:
            Records exactly as the service returned them

        Raises:
            BrokerError: When the service answers with a non-success status
                or cannot be reached
        """
        pass
