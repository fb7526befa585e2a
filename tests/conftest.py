from __future__ import annotations

import sys
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from knot_cloud.application.client import Client
from knot_cloud.domain.entities.session import SessionCredentials
from knot_cloud.domain.gateways.broker_gateway import (
    IBrokerConnection,
    IBrokerTransport,
    MessageListener,
)
from knot_cloud.domain.gateways.history_gateway import IHistoryGateway

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


RAW_DEVICES: List[Dict[str, Any]] = [
    {
        "uuid": "abcd1234ef56",
        "_id": "5b2c0c9b",
        "id": "Sensor-1",
        "name": "Thermometer",
        "schema": [
            {"sensor_id": 1, "value_type": 2, "unit": 1, "type_id": 9, "name": "temp"}
        ],
        "metadata": {"room": "lab"},
        "owner": "owner-uuid",
        "type": "knot:thing",
        "ipAddress": "10.0.0.7",
        "token": "device-token",
        "meshblu": {"version": "2.0.0"},
        "discoverWhitelist": ["*"],
        "configureWhitelist": ["*"],
        "socketid": "socket-1",
        "secure": False,
        "get_data": [{"sensor_id": 1}],
        "set_data": [],
    },
    {
        "uuid": "ffff0000aaaa",
        "id": "pending-2",
        "name": "Unregistered",
        "schema": [],
    },
    {
        "uuid": "eeee0000bbbb",
        "name": "Without id",
        "schema": [{"sensor_id": 1, "name": "temp"}],
    },
    {
        "uuid": "dddd0000cccc",
        "id": "nameless-3",
        "name": "",
        "schema": [{"sensor_id": 1, "name": "temp"}],
    },
]


class FakeBrokerConnection(IBrokerConnection):
    def __init__(self, ready: bool = True, devices_reply: Any = None) -> None:
        self.ready = ready
        self.devices_reply = (
            deepcopy(RAW_DEVICES) if devices_reply is None else devices_reply
        )
        self.update_reply: Any = {}
        self.subscribe_reply: Any = {}
        self.device_queries: List[Dict[str, Any]] = []
        self.updates: List[Dict[str, Any]] = []
        self.subscriptions: List[Dict[str, Any]] = []
        self.listeners: List[MessageListener] = []
        self.close_calls = 0
        self.close_error: Optional[Exception] = None

    async def wait_ready(self) -> bool:
        return self.ready

    async def devices(self, query: Dict[str, Any]) -> Any:
        self.device_queries.append(query)
        return self.devices_reply

    async def update(self, patch: Dict[str, Any]) -> Any:
        self.updates.append(patch)
        return self.update_reply

    async def subscribe(self, subscription: Dict[str, Any]) -> Any:
        self.subscriptions.append(subscription)
        return self.subscribe_reply

    def on_message(self, listener: MessageListener) -> None:
        self.listeners.append(listener)

    async def close(self) -> None:
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error

    def emit(self, payload: Any) -> None:
        for listener in list(self.listeners):
            listener({"payload": payload})


class FakeBrokerTransport(IBrokerTransport):
    def __init__(self, connection: FakeBrokerConnection) -> None:
        self.connection = connection
        self.created: List[SessionCredentials] = []

    def create_connection(self, credentials: SessionCredentials) -> FakeBrokerConnection:
        self.created.append(credentials)
        return self.connection


class FakeHistoryGateway(IHistoryGateway):
    def __init__(self, records: Optional[List[Dict[str, Any]]] = None) -> None:
        self.records = records or []
        self.calls: List[Dict[str, Any]] = []

    async def fetch_data(
        self,
        credentials: SessionCredentials,
        address: str,
        limit: int = 10,
        start: str = "",
        finish: str = "",
    ) -> List[Dict[str, Any]]:
        self.calls.append(
            {
                "credentials": credentials,
                "address": address,
                "limit": limit,
                "start": start,
                "finish": finish,
            }
        )
        return deepcopy(self.records)


@pytest.fixture()
def credentials() -> SessionCredentials:
    return SessionCredentials(
        host="knot.local", port=3000, uuid="user-uuid", token="user-token"
    )


@pytest.fixture()
def connection() -> FakeBrokerConnection:
    return FakeBrokerConnection()


@pytest.fixture()
def transport(connection: FakeBrokerConnection) -> FakeBrokerTransport:
    return FakeBrokerTransport(connection)


@pytest.fixture()
def history_gateway() -> FakeHistoryGateway:
    return FakeHistoryGateway()


@pytest.fixture()
def client(
    credentials: SessionCredentials,
    transport: FakeBrokerTransport,
    history_gateway: FakeHistoryGateway,
) -> Client:
    return Client(credentials, transport, history_gateway)


@pytest.fixture()
def raw_devices() -> List[Dict[str, Any]]:
    return deepcopy(RAW_DEVICES)


class RecordingLogger:
    def __init__(self) -> None:
        self.events: List[tuple] = []

    def _record(self, level: str, event: str, **kwargs: Any) -> None:
        self.events.append((level, event, kwargs))

    def debug(self, event: str, **kwargs: Any) -> None:
        self._record("debug", event, **kwargs)

    def info(self, event: str, **kwargs: Any) -> None:
        self._record("info", event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._record("warning", event, **kwargs)


@pytest.fixture()
def recording_logger() -> RecordingLogger:
    return RecordingLogger()
