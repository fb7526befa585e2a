"""
Domain Entities Package

This package contains the core domain entities and errors of the SDK.
"""

from .device import Device
from .errors import (
    AuthorizationError,
    BrokerError,
    DomainError,
    NotConnectedError,
    NotFoundError,
    ValidationError,
)
from .sensor import (
    BooleanValue,
    NumberValue,
    OpaqueValue,
    SensorReading,
    SensorValue,
    ValueParseError,
)
from .session import SessionCredentials

__all__ = [
    "Device",
    "SessionCredentials",
    "BooleanValue",
    "NumberValue",
    "OpaqueValue",
    "SensorReading",
    "SensorValue",
    "ValueParseError",
    "DomainError",
    "NotConnectedError",
    "AuthorizationError",
    "NotFoundError",
    "ValidationError",
    "BrokerError",
]
