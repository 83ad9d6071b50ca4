"""Listing domain exceptions."""

from .listing_exceptions import (
    CurrencyMismatchError,
    InvalidListingDataError,
    InvalidListingStateError,
    ListingAlreadyExistsError,
    ListingConcurrencyError,
    ListingError,
    ListingNotFoundError,
)

__all__ = [
    "ListingError",
    "InvalidListingDataError",
    "CurrencyMismatchError",
    "InvalidListingStateError",
    "ListingNotFoundError",
    "ListingAlreadyExistsError",
    "ListingConcurrencyError",
]
