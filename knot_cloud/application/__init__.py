"""
Application Layer Package

This package contains the use cases of the SDK and the ``Client`` facade
that wires them around a single broker session.
"""

# Re-export submodules
from knot_cloud.application import dtos, use_cases
from knot_cloud.application.client import Client

__all__ = ["dtos", "use_cases", "Client"]
