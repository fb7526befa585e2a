from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EnumBrokerEvent(str, Enum):
    """Broker event types a subscription can listen to."""

    SENT = "sent"
    RECEIVED = "received"
    BROADCAST = "broadcast"


# Scope used to list every device reachable through any gateway
WILDCARD_GATEWAY = "*"

# Gateway addresses share the device address prefix and end with this suffix
GATEWAY_ADDRESS_SUFFIX = "0000"

# Headers understood by the broker's HTTP API
AUTH_UUID_HEADER = "meshblu_auth_uuid"
AUTH_TOKEN_HEADER = "meshblu_auth_token"
