"""
Client Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from knot_cloud.shared import EnumEnvironment, EnumLogLevel
from knot_cloud.shared.env import load_secret_file_variables


class BrokerSettings(BaseSettings):
    """Broker connection settings."""

    host: str = Field(default="localhost", description="Broker hostname")
    port: int = Field(default=1883, description="Broker MQTT port")
    uuid: str = Field(default="", description="Identity of the session")
    token: SecretStr = Field(
        default=SecretStr(""), description="Secret paired with the identity"
    )
    keepalive: int = Field(default=60, description="MQTT keepalive in seconds")

    model_config = SettingsConfigDict(
        env_prefix="BROKER_", case_sensitive=False, extra="ignore"
    )


class HistorySettings(BaseSettings):
    """Settings of the HTTP API serving recorded sensor data."""

    url: Optional[str] = Field(
        default=None,
        description="Base URL of the HTTP API (defaults to http://{host}:{port})",
    )
    timeout: float = Field(default=30.0, description="Request timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="HISTORY_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class ClientSettings(BaseSettings):
    """Main client settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Runtime environment"
    )

    broker: BrokerSettings = Field(default_factory=BrokerSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> ClientSettings:
    """
    Get client settings instance Factory.

    Credentials given as ``*_FILE`` secrets are resolved first.
    """
    load_secret_file_variables()
    return ClientSettings()
