"""Base Command class для CQRS pattern.

Command - запит на зміну стану системи (write operation).
Commands мають side effects (змінюють дані).
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class Command(ABC):
    """Base class для всіх commands.

    Command характеристики:
    - **Immutable**: frozen=True запобігає змінам
    - **Intent**: Чітко виражає намір (CreateListing, UpdateListingPrice)
    - **No business logic**: Тільки data, logic в Handler

    Example:
        >>> @dataclass(frozen=True)
        ... class UpdateListingPriceCommand(Command):
        ...     listing_id: UUID
        ...     amount: Decimal
        ...     currency: str
        ...     expected_version: int | None = None

        >>> dto = await handler.handle(UpdateListingPriceCommand(listing_id, Decimal("90"), "USD"))
    """

    pass
