"""Entities для Listings bounded context."""

from .listing import MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH, Listing

__all__ = ["Listing", "MAX_TITLE_LENGTH", "MAX_DESCRIPTION_LENGTH"]
