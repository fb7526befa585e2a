"""
Domain Layer Package

This package contains the core rules of the SDK: the device and sensor
value entities, the error kinds, the broker and history gateway contracts
and pure services. It does not depend on any transport library.
"""

# Re-export submodules
from knot_cloud.domain import entities, gateways, services

__all__ = ["entities", "gateways", "services"]
