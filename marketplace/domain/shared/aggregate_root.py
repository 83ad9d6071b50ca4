"""Base AggregateRoot class for domain model.

AggregateRoot - головний Entity в Aggregate, який контролює доступ до всіх інших
об'єктів всередині aggregate та забезпечує consistency (узгодженість).
"""

from typing import List

from .domain_event import DomainEvent
from .entity import Entity, TId

INITIAL_VERSION = 1


class AggregateRoot(Entity[TId]):
    """Base class for aggregate roots in DDD.

    AggregateRoot - це:
    - **Consistency boundary**: Всередині aggregate invariants завжди виконуються
    - **Transaction boundary**: Aggregate зберігається/завантажується як єдине ціле
    - **Event outbox**: Aggregate накопичує domain events, storage їх не бачить
    - **Version token**: Optimistic concurrency через `version`

    Правила роботи з Aggregates:
    1. Зовнішній код змінює aggregate тільки через його методи
    2. Events публікуються тільки після successful commit
    3. Storage adapter робить compare-and-swap по `version`

    Example:
        >>> listing = Listing.create_fixed_price_listing(...)
        >>> listing.update_price(Money(Decimal("90"), "USD"))
        >>> await uow.listings.update(listing)
        >>> await uow.commit()
        >>> await event_bus.publish_all(listing.get_domain_events())
        >>> listing.clear_domain_events()
    """

    def __init__(self, id: TId | None = None, version: int = INITIAL_VERSION) -> None:
        """Initialize aggregate root.

        Args:
            id: Unique identifier.
            version: Optimistic concurrency token (видається storage).
        """
        super().__init__(id)
        self.version = version
        self._domain_events: List[DomainEvent] = []

    def add_domain_event(self, event: DomainEvent) -> None:
        """Add domain event to pending events list.

        Events додаються в aggregate але не публікуються одразу.
        Вони будуть опубліковані після successful commit.

        Args:
            event: Domain event to add.
        """
        self._domain_events.append(event)

    def get_domain_events(self) -> List[DomainEvent]:
        """Get all pending domain events in emission order.

        Returns:
            Copy of the pending events list.
        """
        return self._domain_events.copy()

    def clear_domain_events(self) -> None:
        """Clear all pending domain events.

        Викликається після того як events були опубліковані,
        щоб вони не публікувались повторно.
        """
        self._domain_events.clear()

    @property
    def has_domain_events(self) -> bool:
        """Check if aggregate has pending domain events."""
        return len(self._domain_events) > 0
