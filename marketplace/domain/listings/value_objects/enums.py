"""Enums для Listings bounded context."""

from enum import Enum


class ListingType(str, Enum):
    """How a listing is sold."""

    FIXED_PRICE = "fixed_price"
    """Фіксована ціна, купівля одразу."""

    FORWARD_AUCTION = "forward_auction"
    """Ціна росте від starting price до reserve (highest bidder wins)."""

    REVERSE_AUCTION = "reverse_auction"
    """Ціна падає від max price (lowest offer wins)."""

    @property
    def is_auction(self) -> bool:
        """Check if this type requires AuctionSettings."""
        return self in (ListingType.FORWARD_AUCTION, ListingType.REVERSE_AUCTION)


class ListingStatus(str, Enum):
    """Listing lifecycle status.

    State machine:
        DRAFT  → ACTIVE
        DRAFT  → CANCELLED
        ACTIVE → COMPLETED | EXPIRED | CANCELLED

    COMPLETED, EXPIRED, CANCELLED - terminal. Soft delete - окремий flag,
    ортогональний до status.
    """

    DRAFT = "draft"
    """Listing підготовлений але ще не опублікований."""

    ACTIVE = "active"
    """Listing опублікований і доступний для покупців."""

    COMPLETED = "completed"
    """Продано / аукціон виграно."""

    EXPIRED = "expired"
    """Час вийшов без завершення."""

    CANCELLED = "cancelled"
    """Скасовано продавцем."""

    def is_final(self) -> bool:
        """Check if status is terminal (no more transitions)."""
        return self in (
            ListingStatus.COMPLETED,
            ListingStatus.EXPIRED,
            ListingStatus.CANCELLED,
        )

    def can_transition_to(self, target: "ListingStatus") -> bool:
        """Check if transition `self → target` is allowed."""
        return target in _ALLOWED_TRANSITIONS[self]

    def is_editable(self) -> bool:
        """Check if listing content (title, location, terms) can be changed."""
        return self in (ListingStatus.DRAFT, ListingStatus.ACTIVE)


_ALLOWED_TRANSITIONS: dict[ListingStatus, frozenset[ListingStatus]] = {
    ListingStatus.DRAFT: frozenset({ListingStatus.ACTIVE, ListingStatus.CANCELLED}),
    ListingStatus.ACTIVE: frozenset(
        {ListingStatus.COMPLETED, ListingStatus.EXPIRED, ListingStatus.CANCELLED}
    ),
    ListingStatus.COMPLETED: frozenset(),
    ListingStatus.EXPIRED: frozenset(),
    ListingStatus.CANCELLED: frozenset(),
}
