"""Application Configuration.

Uses pydantic-settings for type-safe configuration from environment variables.
Supports multiple environments: development, staging, production.

Usage:
    from marketplace.config import get_settings, setup_logging
    settings = get_settings()
    setup_logging(settings)  # Call once at startup
"""

from .logging import setup_logging
from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
]
