"""
Subscription Use Cases - Application Layer

This module subscribes to the events published by device gateways and
turns the broker's broadcast messages into events addressed by the
caller-facing device id.
"""

import asyncio
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Set, Tuple

from knot_cloud.application.use_cases.device_use_cases import AddressResolver
from knot_cloud.application.use_cases.session_use_cases import SessionManager
from knot_cloud.domain.entities.errors import BrokerError
from knot_cloud.shared import get_logger
from knot_cloud.shared.consts import EnumBrokerEvent

logger = get_logger(__name__)

EventHandler = Callable[[Dict[str, Any]], Any]

EVENT_HIDDEN_FIELDS = ("uuid", "source", "_id")
EVENT_DATA_HIDDEN_FIELDS = ("uuid", "token")


class SubscriptionManager:
    """Use case for device event subscriptions."""

    def __init__(self, session: SessionManager, resolver: AddressResolver):
        self.session = session
        self.resolver = resolver
        # Insertion ordered set of subscribed addresses, bound to the id
        # used on first subscription
        self._subscribed: Dict[str, str] = {}
        self._handler_tasks: Set[asyncio.Future] = set()

    @property
    def subscriptions(self) -> Tuple[str, ...]:
        return tuple(self._subscribed)

    async def subscribe(self, device_id: str) -> None:
        """
        Subscribe to the events the gateway of a device publishes.

        Subscribing twice to the same device keeps a single entry and the id
        bound on the first call.

        Raises:
            NotConnectedError: If no session is open
            NotFoundError: If the device is unknown
            BrokerError: If the broker rejects the subscription
        """
        address = await self.resolver.resolve_address(device_id)
        gateway = self.resolver.gateway_address_for(address)

        reply = await self.session.require_connection().subscribe(
            {"uuid": gateway, "type": [EnumBrokerEvent.SENT.value]}
        )
        if isinstance(reply, Mapping) and reply.get("error"):
            raise BrokerError(
                str(reply["error"]),
                details={"operation": "subscribe", "reply": dict(reply)},
            )

        self._subscribed.setdefault(address, device_id)
        logger.info("subscriptions.added", device_id=device_id, gateway=gateway)

    def on_event(self, handler: EventHandler) -> None:
        """
        Deliver the events of subscribed devices to ``handler``.

        Each call attaches one more listener; handlers are never replaced.
        A coroutine returned by ``handler`` is scheduled on the running loop
        and not awaited.

        Raises:
            NotConnectedError: If no session is open
        """
        connection = self.session.require_connection()

        def listener(message: Dict[str, Any]) -> None:
            event = self.normalize_event(message)
            if event is None:
                return
            result = handler(event)
            if asyncio.iscoroutine(result):
                task = asyncio.ensure_future(result)
                self._handler_tasks.add(task)
                task.add_done_callback(self._on_handler_done)

        connection.on_message(listener)

    def normalize_event(self, message: Any) -> Optional[Dict[str, Any]]:
        """
        Rewrite a broadcast message for delivery.

        Returns:
            The payload without address or credential fields and with
            ``source`` set to the device id, or None when the message is not
            from a subscribed device
        """
        payload = message.get("payload") if isinstance(message, Mapping) else None
        if not isinstance(payload, Mapping):
            return None

        source = payload.get("source")
        device_id = self._subscribed.get(source) if isinstance(source, str) else None
        if device_id is None:
            logger.debug("subscriptions.event_dropped", source=source)
            return None

        event = {
            key: value for key, value in payload.items() if key not in EVENT_HIDDEN_FIELDS
        }
        data = event.get("data")
        if isinstance(data, Mapping):
            event["data"] = {
                key: value
                for key, value in data.items()
                if key not in EVENT_DATA_HIDDEN_FIELDS
            }
        event["source"] = device_id
        return event

    def _on_handler_done(self, task: asyncio.Future) -> None:
        self._handler_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(
                "subscriptions.handler_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
