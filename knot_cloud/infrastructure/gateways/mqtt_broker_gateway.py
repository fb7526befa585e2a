"""
Infrastructure Gateway - MQTT Broker Transport

This module implements the broker transport over MQTT using aiomqtt.

Framing:
- The session authenticates with its uuid as username and its token as
  password. A CONNACK refusing the credentials means "not ready".
- Requests are JSON frames ``{"callbackId": ..., "data": ...}`` published
  to the verb topic (``devices``, ``update``, ``subscribe``).
- Replies and broadcast messages arrive on the inbox topic named after the
  session uuid as ``{"topic": ..., "callbackId": ..., "data": ...}``.
  Frames whose topic is ``message`` are broadcasts.
"""

import asyncio
import contextlib
import json
from typing import Any, Dict, List, Optional
from uuid import uuid4

import aiomqtt
import structlog

from knot_cloud.domain.entities.errors import BrokerError
from knot_cloud.domain.entities.session import SessionCredentials
from knot_cloud.domain.gateways.broker_gateway import (
    IBrokerConnection,
    IBrokerTransport,
    MessageListener,
)

logger = structlog.get_logger(__name__)

DEVICES_TOPIC = "devices"
UPDATE_TOPIC = "update"
SUBSCRIBE_TOPIC = "subscribe"
BROADCAST_FRAME_TOPIC = "message"

# CONNACK codes for rejected credentials (MQTT 3.1.1 and their MQTT 5 mapping)
NOT_AUTHORIZED_CODES = frozenset({4, 5, 134, 135})


def _reason_code(error: aiomqtt.MqttCodeError) -> Optional[int]:
    rc = getattr(error, "rc", None)
    rc = getattr(rc, "value", rc)
    return rc if isinstance(rc, int) else None


class MqttBrokerConnection(IBrokerConnection):
    """Broker connection over a single MQTT client."""

    def __init__(self, credentials: SessionCredentials, keepalive: int = 60):
        """
        Initialize the connection. Nothing is sent until ``wait_ready``.

        Args:
            credentials: Session identity and broker location
            keepalive: MQTT keepalive interval in seconds
        """
        self.credentials = credentials
        self.keepalive = keepalive
        self._client: Optional[aiomqtt.Client] = None
        self._stack: Optional[contextlib.AsyncExitStack] = None
        self._reader: Optional[asyncio.Task] = None
        self._pending: Dict[str, asyncio.Future] = {}
        self._listeners: List[MessageListener] = []
        self._ready: Optional[bool] = None

    @property
    def inbox_topic(self) -> str:
        return self.credentials.uuid

    async def wait_ready(self) -> bool:
        if self._ready is not None:
            return self._ready

        client = aiomqtt.Client(
            hostname=self.credentials.host,
            port=self.credentials.port,
            username=self.credentials.uuid,
            password=self.credentials.token,
            identifier=self.credentials.uuid,
            keepalive=self.keepalive,
        )
        stack = contextlib.AsyncExitStack()

        logger.info(
            "broker.connect_started",
            host=self.credentials.host,
            port=self.credentials.port,
        )
        try:
            await stack.enter_async_context(client)
            await client.subscribe(self.inbox_topic, qos=1)
        except aiomqtt.MqttCodeError as e:
            await stack.aclose()
            if _reason_code(e) in NOT_AUTHORIZED_CODES:
                logger.warning(
                    "broker.connect_refused",
                    host=self.credentials.host,
                    reason_code=_reason_code(e),
                )
                self._ready = False
                return False
            logger.error("broker.connect_error", error=str(e), host=self.credentials.host)
            raise BrokerError(f"Broker connection failed: {str(e)}") from e
        except aiomqtt.MqttError as e:
            await stack.aclose()
            logger.error("broker.connect_error", error=str(e), host=self.credentials.host)
            raise BrokerError(f"Broker connection failed: {str(e)}") from e

        self._client = client
        self._stack = stack
        self._reader = asyncio.ensure_future(self._read_messages(client))
        self._ready = True

        logger.info("broker.connected", host=self.credentials.host)
        return True

    async def devices(self, query: Dict[str, Any]) -> Any:
        return await self._request(DEVICES_TOPIC, query)

    async def update(self, patch: Dict[str, Any]) -> Any:
        return await self._request(UPDATE_TOPIC, patch)

    async def subscribe(self, subscription: Dict[str, Any]) -> Any:
        return await self._request(SUBSCRIBE_TOPIC, subscription)

    def on_message(self, listener: MessageListener) -> None:
        self._listeners.append(listener)

    async def close(self) -> None:
        reader, self._reader = self._reader, None
        if reader is not None:
            reader.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reader

        stack, self._stack = self._stack, None
        self._client = None
        self._fail_pending(BrokerError("Broker connection closed"))
        if stack is None:
            return

        try:
            await stack.aclose()
        except aiomqtt.MqttError as e:
            logger.warning("broker.close_error", error=str(e))
            raise BrokerError(f"Broker disconnection failed: {str(e)}") from e

        logger.info("broker.closed", host=self.credentials.host)

    async def _request(self, topic: str, data: Dict[str, Any]) -> Any:
        if self._client is None:
            raise BrokerError("Broker connection is not open")

        callback_id = uuid4().hex
        future = asyncio.get_running_loop().create_future()
        self._pending[callback_id] = future
        frame = json.dumps({"callbackId": callback_id, "data": data})

        try:
            await self._client.publish(topic, frame, qos=1)
            logger.debug("broker.request_sent", topic=topic, callback_id=callback_id)
            return await future
        except aiomqtt.MqttError as e:
            logger.error("broker.request_error", topic=topic, error=str(e))
            raise BrokerError(f"Broker request failed: {str(e)}") from e
        finally:
            self._pending.pop(callback_id, None)

    async def _read_messages(self, client: aiomqtt.Client) -> None:
        try:
            async for message in client.messages:
                self._dispatch(message.payload)
        except aiomqtt.MqttError as e:
            logger.warning("broker.connection_lost", error=str(e))
            self._fail_pending(BrokerError(f"Broker connection lost: {str(e)}"))
        else:
            self._fail_pending(BrokerError("Broker connection closed"))

    def _dispatch(self, payload: Any) -> None:
        try:
            frame = json.loads(payload)
        except (TypeError, ValueError) as e:
            logger.warning("broker.frame_invalid", error=str(e))
            return
        if not isinstance(frame, dict):
            logger.warning("broker.frame_invalid", error="frame is not an object")
            return

        if frame.get("topic") == BROADCAST_FRAME_TOPIC:
            self._notify({"payload": frame.get("data")})
            return

        callback_id = frame.get("callbackId")
        future = self._pending.get(callback_id) if isinstance(callback_id, str) else None
        if future is None or future.done():
            logger.debug("broker.reply_unmatched", callback_id=callback_id)
            return
        future.set_result(frame.get("data"))

    def _notify(self, message: Dict[str, Any]) -> None:
        for listener in list(self._listeners):
            try:
                listener(message)
            except Exception as e:
                logger.exception("broker.listener_failed", error=str(e))

    def _fail_pending(self, error: BrokerError) -> None:
        for future in self._pending.values():
            if not future.done():
                future.set_exception(error)


class MqttBrokerTransport(IBrokerTransport):
    """Factory of MQTT broker connections."""

    def __init__(self, keepalive: int = 60):
        self.keepalive = keepalive

    def create_connection(self, credentials: SessionCredentials) -> MqttBrokerConnection:
        return MqttBrokerConnection(credentials, keepalive=self.keepalive)
