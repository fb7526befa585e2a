"""
Main module - Main/Composition Root Layer

This module builds a ready to use client from the environment:
- Loading settings and secret files
- Configuring dependencies and gateways (Composition Root)
- Managing the connection lifecycle of the client
"""

from .config import ClientSettings, get_settings
from .container import ClientContainer, client_lifespan, get_container, init_container

__all__ = [
    "ClientSettings",
    "get_settings",
    "ClientContainer",
    "init_container",
    "get_container",
    "client_lifespan",
]
