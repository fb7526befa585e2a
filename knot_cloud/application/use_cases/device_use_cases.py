"""
Device Use Cases - Application Layer

This module defines use cases for device operations.
It queries the device graph visible to the session, keeps only the
registered devices and maps caller-facing ids to broker addresses.
"""

from typing import Any, Dict, List, Mapping

from knot_cloud.application.use_cases.session_use_cases import SessionManager
from knot_cloud.domain.entities.device import Device
from knot_cloud.domain.entities.errors import BrokerError, NotFoundError
from knot_cloud.domain.services.addressing import gateway_address_for
from knot_cloud.shared import get_logger
from knot_cloud.shared.consts import WILDCARD_GATEWAY

logger = get_logger(__name__)


class DeviceCatalog:
    """Use case for enumerating the devices exposed to the session."""

    def __init__(self, session: SessionManager):
        self.session = session

    async def query_raw_devices(self) -> List[Dict[str, Any]]:
        """
        Query every device reachable through any gateway.

        Returns:
            The raw broker records, unfiltered and in broker order

        Raises:
            NotConnectedError: If no session is open
            BrokerError: If the broker reports an error
        """
        connection = self.session.require_connection()
        reply = await connection.devices({"gateways": [WILDCARD_GATEWAY]})

        if isinstance(reply, Mapping):
            if reply.get("error"):
                raise BrokerError(str(reply["error"]), details={"reply": dict(reply)})
            reply = reply.get("devices") or []

        records = [record for record in reply or [] if isinstance(record, Mapping)]
        logger.debug("devices.query_completed", count=len(records))
        return records

    async def list_devices(self) -> List[Device]:
        """Return the registered devices, projected to their public fields."""
        devices = []
        for record in await self.query_raw_devices():
            device = Device.from_record(record)
            if device is not None:
                devices.append(device)

        logger.info("devices.listed", count=len(devices))
        return devices

    async def get_device(self, device_id: str) -> Device:
        """
        Return the registered device whose id matches ``device_id``.

        Raises:
            NotFoundError: If no registered device matches
        """
        for device in await self.list_devices():
            if device.matches(device_id):
                return device
        raise NotFoundError(device_id)


class AddressResolver:
    """Maps caller-facing device ids to broker addresses."""

    def __init__(self, catalog: DeviceCatalog):
        self.catalog = catalog

    async def resolve_address(self, device_id: str) -> str:
        """
        Return the broker address of the device identified by ``device_id``.

        The lookup covers every raw record, registered or not. Records without
        an address are skipped.

        Raises:
            NotFoundError: If no addressable record carries a matching id
        """
        for record in await self.catalog.query_raw_devices():
            address = record.get("uuid")
            if address and Device.id_matches(record.get("id"), device_id):
                return str(address)
        raise NotFoundError(device_id)

    @staticmethod
    def gateway_address_for(address: str) -> str:
        return gateway_address_for(address)
