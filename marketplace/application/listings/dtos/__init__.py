"""Listing DTOs."""

from .listing_dto import AuctionSettingsDTO, ListingDTO, PagedResult

__all__ = ["ListingDTO", "AuctionSettingsDTO", "PagedResult"]
