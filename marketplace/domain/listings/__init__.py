"""Listings Bounded Context - Domain Layer.

Exports:
    Entities: Listing (Aggregate Root)
    Value Objects: Money, Location, BoundingBox, AuctionSettings (Forward | Reverse),
        ListingType, ListingStatus, identifiers
    Specifications: ActiveListing, ByType, NearLocation, BySeller, ...
    Exceptions: InvalidListingStateError, ListingNotFoundError, ListingConcurrencyError, ...
    Events: ListingCreatedEvent, ListingPriceUpdatedEvent, ListingStatusChangedEvent, ...
    Repositories: ListingRepository (interface)
"""

# Entities (Aggregate Roots)
from .entities import Listing

# Value Objects
from .value_objects import (
    AuctionSettings,
    BoundingBox,
    CategoryId,
    ForwardAuctionSettings,
    ItemId,
    ListingId,
    ListingStatus,
    ListingType,
    Location,
    Money,
    ReverseAuctionSettings,
    SellerId,
    UserId,
)

# Exceptions
from .exceptions import (
    CurrencyMismatchError,
    InvalidListingDataError,
    InvalidListingStateError,
    ListingAlreadyExistsError,
    ListingConcurrencyError,
    ListingError,
    ListingNotFoundError,
)

# Events
from .events import (
    ListingAuctionSettingsReplacedEvent,
    ListingCreatedEvent,
    ListingDetailsUpdatedEvent,
    ListingLocationUpdatedEvent,
    ListingPriceUpdatedEvent,
    ListingSoftDeletedEvent,
    ListingStatusChangedEvent,
)

# Specifications
from .specifications import (
    ActiveListingSpecification,
    ExpiredListingSpecification,
    ListingByCategorySpecification,
    ListingByItemSpecification,
    ListingBySellerSpecification,
    ListingByStatusSpecification,
    ListingByTypeSpecification,
    ListingInBoundingBoxSpecification,
    ListingNearLocationSpecification,
    ListingPriceRangeSpecification,
    ListingSearchCriteria,
    ListingSortField,
    ListingTextSearchSpecification,
    NotDeletedListingSpecification,
)

# Repository interfaces
from .repositories import ListingRepository

__all__ = [
    # Entities
    "Listing",
    # Value Objects
    "Money",
    "Location",
    "BoundingBox",
    "AuctionSettings",
    "ForwardAuctionSettings",
    "ReverseAuctionSettings",
    "ListingType",
    "ListingStatus",
    "ListingId",
    "ItemId",
    "UserId",
    "SellerId",
    "CategoryId",
    # Exceptions
    "ListingError",
    "InvalidListingDataError",
    "CurrencyMismatchError",
    "InvalidListingStateError",
    "ListingNotFoundError",
    "ListingAlreadyExistsError",
    "ListingConcurrencyError",
    # Events
    "ListingCreatedEvent",
    "ListingPriceUpdatedEvent",
    "ListingStatusChangedEvent",
    "ListingDetailsUpdatedEvent",
    "ListingLocationUpdatedEvent",
    "ListingAuctionSettingsReplacedEvent",
    "ListingSoftDeletedEvent",
    # Specifications
    "ActiveListingSpecification",
    "ExpiredListingSpecification",
    "NotDeletedListingSpecification",
    "ListingByTypeSpecification",
    "ListingByStatusSpecification",
    "ListingBySellerSpecification",
    "ListingByItemSpecification",
    "ListingByCategorySpecification",
    "ListingNearLocationSpecification",
    "ListingInBoundingBoxSpecification",
    "ListingPriceRangeSpecification",
    "ListingTextSearchSpecification",
    "ListingSearchCriteria",
    "ListingSortField",
    # Repositories
    "ListingRepository",
]
