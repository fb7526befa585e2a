"""
Logging Configuration - Shared Layer

This module provides utilities for configuring structured logging across
the SDK. Credentials flow through several layers, so every event passes a
redaction processor before it is rendered.
"""

import logging
import os
import sys
from typing import Any, Dict, List, MutableMapping, Optional

import structlog
from structlog.types import Processor

from knot_cloud.shared.consts import EnumEnvironment

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

REDACTED = "***"
SENSITIVE_KEYS = frozenset({"token", "password", "uuid", "credentials"})

# Third-party loggers that are too chatty at DEBUG level
NOISY_LOGGERS = ("httpx", "httpcore", "aiomqtt")


def _get_log_config_from_env() -> Dict[str, Optional[str]]:
    """Read the bootstrap logging configuration from environment variables."""
    return {
        "level": os.environ.get("LOG_LEVEL", "INFO"),
        "format": os.environ.get("LOG_FORMAT", DEFAULT_LOG_FORMAT),
        "file_path": os.environ.get("LOG_FILE_PATH"),
    }


def redact_sensitive_fields(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor masking values stored under sensitive keys."""
    for key in list(event_dict.keys()):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
    return event_dict


def _select_renderer(environment: str) -> Processor:
    if environment.lower() == EnumEnvironment.PRODUCTION:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
) -> None:
    """
    Configure stdlib logging and structlog for the SDK.

    Applications embedding the client may skip this and configure logging
    themselves; the SDK only ever calls ``get_logger``.

    Args:
        level: Optional override for the log level.
        format_string: Optional override for the stdlib format wrapping each
            rendered line, e.g. to prefix it with the logger name. Ignored in
            production, where every line is a single JSON document.
        file_path: Optional log file, added next to the console handler.
        environment: development renders for humans, production as JSON.
    """
    env_config = _get_log_config_from_env()

    log_level = level or env_config["level"] or "INFO"
    log_file = file_path or env_config["file_path"]
    is_production = environment.lower() == EnumEnvironment.PRODUCTION
    log_format = (
        "%(message)s"
        if is_production
        else format_string or env_config["format"] or DEFAULT_LOG_FORMAT
    )
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_select_renderer(environment),
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            redact_sensitive_fields,
            timestamper,
        ],
        fmt=log_format,
    )
    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            redact_sensitive_fields,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    quiet_level = max(numeric_level, logging.INFO)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

    logging.info(f"Logging configured with level: {log_level}")
    if log_file:
        logging.info(f"Logging to file: {log_file}")


def update_logging_from_settings(settings: Any) -> None:
    """
    Reconfigure logging from a loaded ``ClientSettings`` object.

    Args:
        settings: Object exposing ``logging`` and ``environment`` attributes.
    """
    try:
        log_level = (
            settings.logging.level.value
            if hasattr(settings.logging.level, "value")
            else settings.logging.level
        )
        environment = (
            settings.environment.value
            if hasattr(settings.environment, "value")
            else settings.environment
        )

        configure_logging(
            level=log_level,
            format_string=settings.logging.format,
            file_path=settings.logging.file_path,
            environment=environment,
        )
        logging.info("Logging configuration updated from client settings")
    except AttributeError as e:
        logging.error(f"Failed to update logging from settings: {e}")


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the SDK."""
    return structlog.get_logger(name)
