"""Events для Listings bounded context."""

from .listing_events import (
    ListingAuctionSettingsReplacedEvent,
    ListingCreatedEvent,
    ListingDetailsUpdatedEvent,
    ListingLocationUpdatedEvent,
    ListingPriceUpdatedEvent,
    ListingSoftDeletedEvent,
    ListingStatusChangedEvent,
)

__all__ = [
    "ListingCreatedEvent",
    "ListingPriceUpdatedEvent",
    "ListingStatusChangedEvent",
    "ListingDetailsUpdatedEvent",
    "ListingLocationUpdatedEvent",
    "ListingAuctionSettingsReplacedEvent",
    "ListingSoftDeletedEvent",
]
