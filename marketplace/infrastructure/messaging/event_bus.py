"""Event Bus - in-process dispatcher для domain events.

Event Bus enables event-driven architecture:
- Listing aggregate накопичує events (ListingCreated, ListingStatusChanged, ...)
- Application handler публікує їх ТІЛЬКИ після successful commit
- Subscribers (search indexer, notifications) не відомі domain
"""

import logging
from collections import defaultdict
from typing import Awaitable, Callable, Iterable, Type

from marketplace.domain.shared import DomainEvent

logger = logging.getLogger(__name__)

# Event handler signature: async function that takes DomainEvent
EventHandler = Callable[[DomainEvent], Awaitable[None]]


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__name__", repr(handler))


class EventBus:
    """Event Bus для domain events.

    Dispatch rules:
    - Handler підписаний на base class отримує і всі subclasses
      (subscribe(DomainEvent, audit) = audit log на все)
    - Specific handlers викликаються перед handlers базових класів
    - Events одного publish_all доставляються послідовно, в порядку емісії
    - Failing handler логується і не зупиняє інших

    Example:
        >>> event_bus = EventBus()
        >>> event_bus.subscribe(ListingCreatedEvent, index_listing)
        >>> event_bus.subscribe(ListingStatusChangedEvent, notify_watchers)

        >>> # Publish events (в application layer після commit)
        >>> await event_bus.publish_all(listing.get_domain_events())
        >>> listing.clear_domain_events()
    """

    def __init__(self) -> None:
        """Initialize event bus."""
        # Map: event_type → list of handlers
        self._subscribers: dict[Type[DomainEvent], list[EventHandler]] = defaultdict(list)
        logger.info("event_bus.initialized")

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """Subscribe handler to event type (and its subclasses).

        Args:
            event_type: Type of event (e.g., ListingCreatedEvent).
            handler: Async function to call when event published.
        """
        self._subscribers[event_type].append(handler)
        logger.info(
            "event_bus.subscription_added",
            extra={
                "event_type": event_type.__name__,
                "handler": _handler_name(handler),
            },
        )

    def unsubscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """Unsubscribe handler from event type.

        Args:
            event_type: Type of event.
            handler: Handler to remove.
        """
        handlers = self._subscribers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)
            logger.info(
                "event_bus.subscription_removed",
                extra={
                    "event_type": event_type.__name__,
                    "handler": _handler_name(handler),
                },
            )

    def _handlers_for(self, event_type: Type[DomainEvent]) -> list[EventHandler]:
        handlers: list[EventHandler] = []
        for klass in event_type.__mro__:
            for handler in self._subscribers.get(klass, []):
                if handler not in handlers:
                    handlers.append(handler)
        return handlers

    async def publish(self, event: DomainEvent) -> None:
        """Publish single domain event.

        Args:
            event: Domain event to publish.
        """
        event_type = type(event)
        handlers = self._handlers_for(event_type)

        if not handlers:
            logger.debug(
                "event_bus.no_subscribers",
                extra={"event_type": event_type.__name__},
            )
            return

        logger.info(
            "event_bus.publishing",
            extra={
                "event_type": event_type.__name__,
                "handlers_count": len(handlers),
                "event_id": str(event.event_id),
            },
        )

        for handler in handlers:
            try:
                await handler(event)
                logger.debug(
                    "event_bus.handler_success",
                    extra={
                        "event_type": event_type.__name__,
                        "handler": _handler_name(handler),
                    },
                )
            except Exception as e:
                # Log error but continue with other handlers
                logger.error(
                    "event_bus.handler_failed",
                    extra={
                        "event_type": event_type.__name__,
                        "handler": _handler_name(handler),
                        "event_id": str(event.event_id),
                        "error": str(e),
                    },
                    exc_info=True,
                )

    async def publish_all(self, events: Iterable[DomainEvent]) -> None:
        """Publish multiple domain events sequentially, in order.

        Args:
            events: Domain events (зазвичай listing.get_domain_events()).
        """
        events = list(events)
        if not events:
            return

        logger.info(
            "event_bus.publishing_batch",
            extra={"events_count": len(events)},
        )

        for event in events:
            await self.publish(event)

    def clear_subscribers(self) -> None:
        """Clear all subscribers (useful for testing)."""
        self._subscribers.clear()
        logger.info("event_bus.cleared")

    def get_subscribers_count(self, event_type: Type[DomainEvent]) -> int:
        """Number of handlers that would receive an event of this type."""
        return len(self._handlers_for(event_type))


# Singleton instance (можна inject як dependency)
_event_bus_instance: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get singleton event bus instance."""
    global _event_bus_instance
    if _event_bus_instance is None:
        _event_bus_instance = EventBus()
    return _event_bus_instance


def reset_event_bus() -> None:
    """Reset event bus (for testing).

    Creates new instance, clearing all subscribers.
    """
    global _event_bus_instance
    _event_bus_instance = EventBus()
    logger.info("event_bus.reset")
