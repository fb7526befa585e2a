from __future__ import annotations

import asyncio

import pytest

from knot_cloud.application.use_cases.session_use_cases import SessionManager
from knot_cloud.domain.entities.errors import (
    AuthorizationError,
    BrokerError,
    NotConnectedError,
)


@pytest.mark.asyncio
async def test_connect_keeps_ready_connection(credentials, transport, connection) -> None:
    session = SessionManager(credentials, transport)

    await session.connect()

    assert session.is_connected
    assert session.require_connection() is connection
    assert transport.created == [credentials]


@pytest.mark.asyncio
async def test_connect_twice_opens_one_connection(credentials, transport) -> None:
    session = SessionManager(credentials, transport)

    await asyncio.gather(session.connect(), session.connect())
    await session.connect()

    assert len(transport.created) == 1


@pytest.mark.asyncio
async def test_connect_rejected_raises_and_closes(
    credentials, transport, connection
) -> None:
    connection.ready = False
    session = SessionManager(credentials, transport)

    with pytest.raises(AuthorizationError) as exc:
        await session.connect()

    await asyncio.sleep(0)

    assert exc.value.message == "Connection not authorized"
    assert not session.is_connected
    assert connection.close_calls == 1


@pytest.mark.asyncio
async def test_close_is_idempotent(credentials, transport, connection) -> None:
    session = SessionManager(credentials, transport)
    await session.close()

    await session.connect()
    await session.close()
    await session.close()

    assert connection.close_calls == 1
    assert not session.is_connected


def test_require_connection_without_session(credentials, transport) -> None:
    session = SessionManager(credentials, transport)

    with pytest.raises(NotConnectedError):
        session.require_connection()


@pytest.mark.asyncio
async def test_close_logs_connection_failure(
    monkeypatch, credentials, transport, connection, recording_logger
) -> None:
    monkeypatch.setattr(
        "knot_cloud.application.use_cases.session_use_cases.logger", recording_logger
    )
    connection.close_error = BrokerError("Broker disconnection failed: lost")
    session = SessionManager(credentials, transport)
    await session.connect()

    await session.close()

    assert not session.is_connected
    assert connection.close_calls == 1
    assert ("warning", "session.close_failed") in [
        (level, event) for level, event, _ in recording_logger.events
    ]
