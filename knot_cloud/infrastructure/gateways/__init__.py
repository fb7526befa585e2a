"""
Gateways Package - Infrastructure Layer

This package contains concrete implementations of the gateway
interfaces defined in the domain layer. These implementations
handle the details of external service communications.
"""

from .history_gateway import HttpHistoryGateway
from .mqtt_broker_gateway import MqttBrokerConnection, MqttBrokerTransport

__all__ = ["HttpHistoryGateway", "MqttBrokerConnection", "MqttBrokerTransport"]
