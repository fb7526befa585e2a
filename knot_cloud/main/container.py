"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
of the client.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from dependency_injector import containers, providers

from knot_cloud.application.client import Client
from knot_cloud.domain.entities.session import SessionCredentials
from knot_cloud.infrastructure.gateways.history_gateway import HttpHistoryGateway
from knot_cloud.infrastructure.gateways.mqtt_broker_gateway import MqttBrokerTransport
from knot_cloud.shared import get_logger, update_logging_from_settings

from .config import ClientSettings

logger = get_logger(__name__)


def _reveal(secret) -> str:
    return secret.get_secret_value() if hasattr(secret, "get_secret_value") else secret


class ClientContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    # Settings
    config = providers.Configuration()

    credentials = providers.Singleton(
        SessionCredentials,
        host=config.broker.host,
        port=config.broker.port,
        uuid=config.broker.uuid,
        token=providers.Callable(_reveal, config.broker.token),
    )

    # Gateways
    broker_transport = providers.Singleton(
        MqttBrokerTransport,
        keepalive=config.broker.keepalive,
    )

    history_gateway = providers.Singleton(
        HttpHistoryGateway,
        base_url=config.history.url,
        timeout=config.history.timeout,
    )

    # Application
    client = providers.Singleton(
        Client,
        credentials=credentials,
        transport=broker_transport,
        history_gateway=history_gateway,
    )


# -------------------------
# Global Container Instance
# -------------------------
_client_container: ClientContainer | None = None


def init_container(
    settings: ClientSettings, apply_logging_settings: bool = False
) -> ClientContainer:
    """
    Initialize global container with client settings.

    Logging is left to the embedding application unless
    ``apply_logging_settings`` is set.
    """

    global _client_container

    if apply_logging_settings:
        update_logging_from_settings(settings)

    container = ClientContainer()
    container.config.from_pydantic(settings)
    _client_container = container
    return container


def get_container() -> ClientContainer:
    """Get the initialized global container."""

    if _client_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _client_container


@asynccontextmanager
async def client_lifespan() -> AsyncIterator[Client]:
    """
    Connect the container's client and always close it on exit.

    Usage::

        init_container(get_settings())
        async with client_lifespan() as client:
            devices = await client.list_devices()
    """
    container = get_container()
    client = container.client()

    logger.info("container.client.connect")
    await client.connect()
    try:
        yield client
    finally:
        logger.info("container.client.close")
        await client.close()
