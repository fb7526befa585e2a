"""
Domain Errors

This module defines the error kinds surfaced by the client. Every failing
operation raises one of them; none are retried internally.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotConnectedError(DomainError):
    """Raised when an operation needs a session but none is open."""

    def __init__(self, message: str = "Not connected", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class AuthorizationError(DomainError):
    """Raised when the broker rejects the session credentials."""

    def __init__(
        self,
        message: str = "Connection not authorized",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class NotFoundError(DomainError):
    """Raised when no device matches the supplied identifier."""

    def __init__(self, device_id: str, details: Optional[Dict[str, Any]] = None):
        self.device_id = device_id
        super().__init__(f"Device {device_id} not found", details)


class ValidationError(DomainError):
    """Raised on malformed caller input."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class BrokerError(DomainError):
    """Raised when the broker or the history service reports a failure."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
