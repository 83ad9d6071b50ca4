"""Listing queries."""

from .listing_queries import (
    GetListingQuery,
    GetNearbyListingsQuery,
    GetSellerListingsQuery,
    SearchListingsQuery,
)

__all__ = [
    "GetListingQuery",
    "SearchListingsQuery",
    "GetNearbyListingsQuery",
    "GetSellerListingsQuery",
]
