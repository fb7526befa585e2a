"""
KNoT Cloud SDK

Asynchronous client for the KNoT Cloud device registry and messaging
broker: list devices, read and write their sensor data and receive the
events they publish.
"""

from knot_cloud.application.client import Client
from knot_cloud.domain.entities import (
    AuthorizationError,
    BrokerError,
    Device,
    DomainError,
    NotConnectedError,
    NotFoundError,
    SessionCredentials,
    ValidationError,
)

__all__ = [
    "Client",
    "Device",
    "SessionCredentials",
    "DomainError",
    "NotConnectedError",
    "AuthorizationError",
    "NotFoundError",
    "ValidationError",
    "BrokerError",
]
