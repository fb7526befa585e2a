"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with the broker's MQTT endpoint and its HTTP API.
"""

from knot_cloud.infrastructure import gateways

__all__ = ["gateways"]
