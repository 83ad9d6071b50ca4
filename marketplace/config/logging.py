"""Structured Logging Configuration.

Production-ready logging with:
- JSON format for production (easy parsing by log aggregators)
- Human-readable format for development
- Sensitive data filtering

Modules keep using stdlib loggers with dotted event names:

    logger = logging.getLogger(__name__)
    logger.info("create_listing.completed", extra={"listing_id": str(listing.id)})

`extra` fields land in the structured output via ExtraAdder.

Usage:
    from marketplace.config import setup_logging

    setup_logging()  # Call once at startup
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from structlog.typing import EventDict

from marketplace import __version__

from .settings import Settings, get_settings

SERVICE_NAME = "marketplace-listings"


# ============================================================================
# SENSITIVE DATA FILTER
# ============================================================================


SENSITIVE_KEYS = frozenset({
    "password",
    "secret",
    "api_key",
    "token",
    "authorization",
    "email",
    "phone",
})


def filter_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Filter sensitive data from log output.

    Replaces values of sensitive keys with '[REDACTED]'.
    """
    for key in list(event_dict.keys()):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = "[REDACTED]"
        elif isinstance(event_dict[key], dict):
            event_dict[key] = _filter_dict(event_dict[key])
    return event_dict


def _filter_dict(d: dict[str, Any]) -> dict[str, Any]:
    """Recursively filter sensitive data from nested dicts."""
    result = {}
    for key, value in d.items():
        if key.lower() in SENSITIVE_KEYS:
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = _filter_dict(value)
        else:
            result[key] = value
    return result


# ============================================================================
# CUSTOM PROCESSORS
# ============================================================================


def add_timestamp(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add ISO format timestamp to log events."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def service_context_processor(settings: Settings):
    """Build processor adding service name, environment and version."""

    def add_service_context(
        logger: logging.Logger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict["service"] = SERVICE_NAME
        event_dict["environment"] = settings.environment
        event_dict["version"] = __version__
        return event_dict

    return add_service_context


# ============================================================================
# LOGGING SETUP
# ============================================================================


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure structured logging for the application.

    Call this once at application startup (bootstrap).

    Configuration based on settings.log_format:
    - console: Human-readable output with colors
    - json: JSON output for log aggregation
    """
    settings = settings or get_settings()

    # Common processors for all environments
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_timestamp,
        service_context_processor(settings),
        filter_sensitive_data,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        final_processors = [structlog.processors.format_exc_info, renderer]
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
        final_processors = [renderer]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *final_processors],
    )

    # Configure standard library logging
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.log_level))

    # Reduce noise from third-party libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)

