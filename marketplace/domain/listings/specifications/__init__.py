"""Specifications для Listings bounded context."""

from .listing_specifications import (
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
    ListingTextSearchSpecification,
    NotDeletedListingSpecification,
)
from .search_criteria import ListingSearchCriteria, ListingSortField

__all__ = [
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
]
