"""
Client - Application Layer

This module exposes the ``Client`` facade, which owns one broker session
and delegates every operation to the use case responsible for it.
"""

from typing import Any, Dict, List, Tuple

from knot_cloud.application.use_cases import (
    AddressResolver,
    DataChannel,
    DeviceCatalog,
    EventHandler,
    SessionManager,
    SubscriptionManager,
)
from knot_cloud.domain.entities.device import Device
from knot_cloud.domain.entities.session import SessionCredentials
from knot_cloud.domain.gateways.broker_gateway import IBrokerTransport
from knot_cloud.domain.gateways.history_gateway import IHistoryGateway


class Client:
    """
    Client of the device registry and messaging broker.

    Usage::

        async with Client(credentials, transport, history_gateway) as client:
            await client.subscribe("0123456789abcdef")
            client.on_event(print)
    """

    def __init__(
        self,
        credentials: SessionCredentials,
        transport: IBrokerTransport,
        history_gateway: IHistoryGateway,
    ):
        self.session = SessionManager(credentials, transport)
        self.catalog = DeviceCatalog(self.session)
        self.resolver = AddressResolver(self.catalog)
        self.data = DataChannel(self.session, self.resolver, history_gateway)
        self.subscriptions_manager = SubscriptionManager(self.session, self.resolver)

    async def __aenter__(self) -> "Client":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def is_connected(self) -> bool:
        return self.session.is_connected

    @property
    def subscriptions(self) -> Tuple[str, ...]:
        """Addresses currently subscribed, in subscription order."""
        return self.subscriptions_manager.subscriptions

    async def connect(self) -> None:
        await self.session.connect()

    async def close(self) -> None:
        await self.session.close()

    async def list_devices(self) -> List[Device]:
        return await self.catalog.list_devices()

    async def get_device(self, device_id: str) -> Device:
        return await self.catalog.get_device(device_id)

    async def read_history(
        self, device_id: str, limit: int = 10, start: str = "", finish: str = ""
    ) -> List[Dict[str, Any]]:
        return await self.data.read_history(device_id, limit, start, finish)

    async def write_data(self, device_id: str, points: Any) -> None:
        await self.data.write_data(device_id, points)

    async def request_data(self, device_id: str, sensor_ids: Any) -> None:
        await self.data.request_data(device_id, sensor_ids)

    async def set_metadata(self, device_id: str, metadata: Any) -> None:
        await self.data.set_metadata(device_id, metadata)

    async def subscribe(self, device_id: str) -> None:
        await self.subscriptions_manager.subscribe(device_id)

    def on_event(self, handler: EventHandler) -> None:
        self.subscriptions_manager.on_event(handler)
