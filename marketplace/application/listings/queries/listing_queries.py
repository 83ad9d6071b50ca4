"""Listing queries (read side, no side effects)."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID

from marketplace.application.shared import Query


@dataclass(frozen=True)
class GetListingQuery(Query):
    """Fetch one listing.

    Soft-deleted listing вважається відсутнім, якщо не `include_deleted`.
    """

    listing_id: UUID
    include_deleted: bool = False


@dataclass(frozen=True)
class SearchListingsQuery(Query):
    """Composite search; всі filters опціональні.

    latitude/longitude/radius_km передаються разом. page_size None →
    Settings.default_page_size, більший за max_page_size обрізається.

    Example:
        >>> query = SearchListingsQuery(search_term="bike", max_price=Decimal("500"))
        >>> result = await handler.handle(query)
        >>> result.total_count, result.has_next_page
    """

    search_term: Optional[str] = None
    category_id: Optional[UUID] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius_km: Optional[float] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    currency: Optional[str] = None
    listing_type: Optional[str] = None
    status: Optional[str] = None
    sort_by: str = "created_at"
    sort_direction: str = "DESC"
    page_number: int = 1
    page_size: Optional[int] = None


@dataclass(frozen=True)
class GetNearbyListingsQuery(Query):
    """Effectively active listings within radius, nearest first."""

    latitude: float
    longitude: float
    radius_km: float
    page_number: int = 1
    page_size: Optional[int] = None


@dataclass(frozen=True)
class GetSellerListingsQuery(Query):
    """Seller's non-deleted listings, newest first."""

    seller_id: UUID
    status: Optional[str] = None
    listing_type: Optional[str] = None
    page_number: int = 1
    page_size: Optional[int] = None
