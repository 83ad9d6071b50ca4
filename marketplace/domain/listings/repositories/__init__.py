"""Repository interfaces для Listings bounded context."""

from .listing_repository import ListingRepository

__all__ = ["ListingRepository"]
