"""Composition root - wires storage, event bus and handlers.

Викликається один раз при startup будь-якого outer surface (worker, CLI,
тести): налаштовує logging, створює shared store і event bus. Handlers
створюються для кожного use case з новим Unit of Work.

Usage:
    from marketplace.bootstrap import init_dependencies, create_handler

    init_dependencies()
    handler = create_handler(CreateListingHandler)
    dto = await handler.handle(command)
"""

import logging
from typing import Optional, Type, TypeVar

from marketplace.application.listings.handlers.base import ListingHandlerBase
from marketplace.config import Settings, get_settings, setup_logging
from marketplace.infrastructure.messaging import EventBus, get_event_bus
from marketplace.infrastructure.persistence.in_memory import InMemoryListingStore, InMemoryUnitOfWork

logger = logging.getLogger(__name__)

THandler = TypeVar("THandler", bound=ListingHandlerBase)

# ============================================================================
# GLOBAL DEPENDENCIES (initialized in init_dependencies)
# ============================================================================

_settings: Optional[Settings] = None
_store: Optional[InMemoryListingStore] = None
_event_bus: Optional[EventBus] = None


def init_dependencies(
    settings: Optional[Settings] = None,
    store: Optional[InMemoryListingStore] = None,
    event_bus: Optional[EventBus] = None,
    configure_logging: bool = True,
) -> None:
    """Initialize global dependencies.

    Args:
        settings: Settings (default: get_settings()).
        store: Committed listing state (default: new empty store).
        event_bus: Event bus (default: process-wide singleton).
        configure_logging: Call setup_logging(settings).
    """
    global _settings, _store, _event_bus
    _settings = settings or get_settings()
    _store = store or InMemoryListingStore()
    _event_bus = event_bus or get_event_bus()

    if configure_logging:
        setup_logging(_settings)

    logger.info(
        "bootstrap.initialized",
        extra={"environment": _settings.environment, "app_name": _settings.app_name},
    )


def reset_dependencies() -> None:
    """Drop global dependencies (тести, shutdown)."""
    global _settings, _store, _event_bus
    _settings = None
    _store = None
    _event_bus = None


def _require_initialized() -> None:
    if _settings is None or _store is None or _event_bus is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies() first.")


# ============================================================================
# UNIT OF WORK
# ============================================================================


def get_unit_of_work() -> InMemoryUnitOfWork:
    """New Unit of Work over the shared store (one per use case)."""
    _require_initialized()
    return InMemoryUnitOfWork(_store)


# ============================================================================
# HANDLERS
# ============================================================================


def create_handler(handler_cls: Type[THandler]) -> THandler:
    """Build any listing handler with injected dependencies.

    Example:
        >>> handler = create_handler(SearchListingsHandler)
        >>> result = await handler.handle(SearchListingsQuery(search_term="bike"))

    Raises:
        RuntimeError: If dependencies not initialized.
    """
    _require_initialized()
    return handler_cls(uow=get_unit_of_work(), event_bus=_event_bus, settings=_settings)
