"""Typed identifiers - opaque wrappers over UUID.

ListingId(uuid) != ItemId(uuid) навіть для однакового UUID: різні типи
не можна переплутати при виклику repository.
"""

from dataclasses import dataclass
from typing import Type, TypeVar
from uuid import UUID, uuid4

from marketplace.domain.shared import (
    InvalidArgumentError,
    ValueObject,
    validate_value_object,
)

TIdentifier = TypeVar("TIdentifier", bound="Identifier")

NIL_UUID = UUID(int=0)


@dataclass(frozen=True)
class Identifier(ValueObject):
    """Base for UUID-backed identifiers.

    Raises:
        InvalidArgumentError: If value is not a UUID or is the nil UUID.
    """

    value: UUID

    def __post_init__(self) -> None:
        validate_value_object(
            isinstance(self.value, UUID),
            f"{type(self).__name__} must wrap a UUID",
            value=self.value,
        )
        validate_value_object(
            self.value != NIL_UUID,
            f"{type(self).__name__} cannot be empty",
        )

    @classmethod
    def new(cls: Type[TIdentifier]) -> TIdentifier:
        """Generate a fresh random identifier."""
        return cls(uuid4())

    @classmethod
    def from_string(cls: Type[TIdentifier], raw: str) -> TIdentifier:
        """Parse identifier from its canonical string form.

        Raises:
            InvalidArgumentError: If raw is not a valid UUID string.
        """
        try:
            parsed = UUID(str(raw))
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid {cls.__name__} format", value=raw) from e
        return cls(parsed)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ListingId(Identifier):
    """Identifier of a Listing aggregate."""


@dataclass(frozen=True)
class ItemId(Identifier):
    """Identifier of the item being sold."""


@dataclass(frozen=True)
class UserId(Identifier):
    """Identifier of a marketplace user."""


SellerId = UserId
"""A seller is a user; alias for readability at call sites."""


@dataclass(frozen=True)
class CategoryId(Identifier):
    """Identifier of a listing category."""
