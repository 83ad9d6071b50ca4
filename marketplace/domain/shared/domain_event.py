"""Base DomainEvent class for event-driven architecture.

DomainEvent - щось важливе що сталось в domain, про що треба повідомити інші частини системи.
Events - це inert notification values: domain не знає хто і як їх доставляє.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent(ABC):
    """Base class for all domain events.

    Характеристики:
    - **Immutable**: Events не змінюються після створення
    - **Past tense naming**: ListingCreated, not CreateListing
    - **Primitive payload**: UUID, str, Decimal - щоб dispatcher міг серіалізувати
    - **Timestamped**: Коли подія сталась
    - **Unique**: Кожна подія має унікальний ID (для at-least-once dedup)

    Example:
        >>> @dataclass(frozen=True)
        ... class ListingExpiredEvent(DomainEvent):
        ...     listing_id: UUID

        >>> event_bus.subscribe(ListingExpiredEvent, notify_seller)
    """

    event_id: UUID = field(default_factory=uuid4, init=False)
    """Унікальний ID події (auto-generated)."""

    occurred_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), init=False
    )
    """Час коли подія сталась (auto-generated, UTC)."""

    @property
    def event_name(self) -> str:
        """Event class name (e.g., "ListingCreatedEvent")."""
        return self.__class__.__name__

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"{self.event_name}(event_id={self.event_id}, occurred_at={self.occurred_at})"
