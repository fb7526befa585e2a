"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides utilities, constants and enums used across the
layers of the SDK:
- Broker protocol constants (wildcard scope, gateway suffix, auth headers)
- Environment and log level enums
- Structured logging setup

It must not depend on Infrastructure or third-party transports.
"""

from .consts import EnumBrokerEvent, EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "EnumBrokerEvent",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
