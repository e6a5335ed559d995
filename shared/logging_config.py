"""
Centralized logging configuration for the portfolio API.

This module sets up structured logging with:
- Settings-driven configuration (dev vs production)
- JSON formatting for production, pretty console for development
- IP hashing for GDPR compliance in production
- Redaction of credentials and tokens
"""

from __future__ import annotations

import hashlib
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

import structlog
from structlog.types import EventDict, Processor

from config import LoggingSettings

_state = {"production": False}

# Sensitive fields to redact from logs
REDACTED_FIELDS = {
    "password",
    "password_hash",
    "current_password",
    "new_password",
    "token",
    "reset_token",
    "access_token",
    "authorization",
    "cookie",
    "secret",
}

# Keys that contain a sensitive word but are safe to print
_SAFE_KEYS = {"level", "event", "timestamp", "logger", "token_type"}


def hash_ip(ip_address: str) -> str:
    """
    Hash IP address for privacy in production.

    In production, returns SHA-256 hash (first 16 chars).
    In development, returns the original IP for easier debugging.
    """
    if _state["production"] and ip_address:
        return hashlib.sha256(ip_address.encode()).hexdigest()[:16]
    return ip_address


def add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add ISO format timestamp to event dict."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def redact_sensitive_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Redact sensitive fields from logs."""
    for key in list(event_dict.keys()):
        if key in _SAFE_KEYS:
            continue
        lowered = key.lower()
        if lowered in REDACTED_FIELDS or any(
            sensitive in lowered for sensitive in ("password", "token", "secret")
        ):
            event_dict[key] = "***REDACTED***"
    return event_dict


def filter_exceptions(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Format exceptions properly for logging."""
    exc_info = event_dict.pop("exc_info", None)
    if exc_info:
        event_dict["exception"] = structlog.processors.format_exc_info(
            logger, method_name, {"exc_info": exc_info}
        )["exception"]
    return event_dict


def configure_structlog(log_format: str = "console") -> None:
    """
    Configure structlog with appropriate processors for the environment.

    Production: JSON formatting for easy parsing
    Development: Pretty console formatting with colors
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        redact_sensitive_fields,
        filter_exceptions,
    ]

    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            pad_event=15,
            sort_keys=False,
        )

    structlog.configure(
        processors=shared_processors
        + [structlog.processors.format_exc_info, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_stdlib_logging(log_level: str = "INFO") -> None:
    """Route stdlib logging to stdout and quiet noisy third-party loggers."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


def setup_logging(
    settings: Optional[LoggingSettings] = None, *, production: bool = False
) -> None:
    """
    Initialize logging system for the application.

    Called once from create_app() before anything else logs.
    """
    if settings is None:
        settings = LoggingSettings()
    _state["production"] = production

    configure_stdlib_logging(settings.log_level)
    configure_structlog(settings.log_format)

    structlog.get_logger(__name__).info(
        "logging_initialized",
        production=production,
        log_level=settings.log_level,
        log_format=settings.log_format,
    )
