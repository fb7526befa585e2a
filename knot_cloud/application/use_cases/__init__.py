"""
Use Cases Package - Application Layer

This package contains the use cases of the client: the broker session,
the device catalog and address resolution, the sensor data protocol and
event subscriptions.
"""

from .data_use_cases import DataChannel
from .device_use_cases import AddressResolver, DeviceCatalog
from .session_use_cases import SessionManager
from .subscription_use_cases import EventHandler, SubscriptionManager

__all__ = [
    "SessionManager",
    "DeviceCatalog",
    "AddressResolver",
    "DataChannel",
    "SubscriptionManager",
    "EventHandler",
]
