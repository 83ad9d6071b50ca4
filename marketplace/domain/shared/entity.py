"""Base Entity class for domain model.

Entity - об'єкт з унікальною ідентичністю, який відрізняється від інших
не атрибутами, а ID. Два listings з однаковими title та price але різними
ListingId - це різні listings.
"""

from abc import ABC
from typing import Generic, TypeVar

TId = TypeVar("TId")


class Entity(ABC, Generic[TId]):
    """Base class for all domain entities.

    Entity має унікальний ідентифікатор (id) і порівнюється за ID, а не за значенням атрибутів.
    ID - це typed value object (ListingId, ItemId), не голий UUID.

    Example:
        >>> listing_id = ListingId.new()
        >>> a = Listing.create_fixed_price_listing(listing_id=listing_id, title="Bike", ...)
        >>> b = Listing.create_fixed_price_listing(listing_id=listing_id, title="Chair", ...)
        >>> a == b  # True (same ID)
    """

    def __init__(self, id: TId | None = None) -> None:
        """Initialize entity with optional ID.

        Args:
            id: Unique identifier. None для entities яким storage ще не видав ID.
        """
        self._id = id

    @property
    def id(self) -> TId | None:
        """Get entity ID."""
        return self._id

    def __eq__(self, other: object) -> bool:
        """Entities порівнюються за ID, не за атрибутами.

        Args:
            other: Object to compare with.

        Returns:
            True if same type and same ID, False otherwise.
        """
        if not isinstance(other, Entity) or type(self) is not type(other):
            return False

        # Якщо обидва ID None, рівні тільки якщо це той самий об'єкт
        if self._id is None and other._id is None:
            return self is other

        return self._id == other._id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets/dicts.

        Returns:
            Hash of ID or object id if ID is None.
        """
        if self._id is None:
            return hash(id(self))
        return hash(self._id)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"{self.__class__.__name__}(id={self._id})"
