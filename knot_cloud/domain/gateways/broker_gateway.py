"""
Broker Gateway Interface - Domain Layer

This module defines the contract of the broker transport: how a session is
opened and which request verbs the client relies on.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict

from knot_cloud.domain.entities.session import SessionCredentials

MessageListener = Callable[[Dict[str, Any]], Any]


class IBrokerConnection(ABC):
    """Interface for an authenticated connection to the broker."""

    @abstractmethod
    async def wait_ready(self) -> bool:
        """
        Wait for the broker's verdict on the connection credentials.

        Returns:
            True once the broker signals "ready", False on "not ready".
            Resolves exactly once.
        """
        pass

    @abstractmethod
    async def devices(self, query: Dict[str, Any]) -> Any:
        """
        Query the devices visible to the session.

        Args:
            query: Scope filter, e.g. ``{"gateways": ["*"]}``

        Returns:
            The broker reply. A mapping carrying ``error`` signals failure.
        """
        pass

    @abstractmethod
    async def update(self, patch: Dict[str, Any]) -> Any:
        """Apply ``patch`` to the device addressed by ``patch["uuid"]``."""
        pass

    @abstractmethod
    async def subscribe(self, subscription: Dict[str, Any]) -> Any:
        """Subscribe to the events of the address in ``subscription["uuid"]``."""
        pass

    @abstractmethod
    def on_message(self, listener: MessageListener) -> None:
        """
        Attach a listener invoked with ``{"payload": ...}`` for every inbound
        broadcast message. Listeners accumulate; none is ever replaced.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the connection and wait for the confirmation."""
        pass


class IBrokerTransport(ABC):
    """Factory of broker connections."""

    @abstractmethod
    def create_connection(self, credentials: SessionCredentials) -> IBrokerConnection:
        """
        Create a connection for ``credentials``.

        Authentication completes when the caller awaits ``wait_ready``.
        """
        pass
