"""Listing DTOs - data transfer objects між layers."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Generic, Optional, TypeVar
from uuid import UUID

from marketplace.domain.listings import AuctionSettings, Listing
from marketplace.domain.shared import Page

T = TypeVar("T")
S = TypeVar("S")


def _amount(money) -> Optional[Decimal]:
    return money.amount if money is not None else None


@dataclass
class AuctionSettingsDTO:
    """Auction terms flattened to primitives.

    Поля, яких немає у даного shape (reverse: starting/reserve), - None.
    """

    listing_type: str
    currency: str
    duration: timedelta
    allow_auto_bidding: bool
    starting_price: Optional[Decimal] = None
    reserve_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    buy_now_price: Optional[Decimal] = None
    minimum_bid_increment: Optional[Decimal] = None

    @classmethod
    def from_value_object(cls, settings: AuctionSettings) -> "AuctionSettingsDTO":
        return cls(
            listing_type=settings.listing_type.value,
            currency=settings.currency,
            duration=settings.duration,  # type: ignore[attr-defined]
            allow_auto_bidding=settings.allow_auto_bidding,  # type: ignore[attr-defined]
            starting_price=_amount(settings.starting_price),  # type: ignore[attr-defined]
            reserve_price=_amount(settings.reserve_price),  # type: ignore[attr-defined]
            max_price=_amount(getattr(settings, "max_price", None)),
            buy_now_price=_amount(getattr(settings, "buy_now_price", None)),
            minimum_bid_increment=_amount(getattr(settings, "minimum_bid_increment", None)),
        )


@dataclass
class ListingDTO:
    """Listing data transfer object.

    Використовується між application layer і будь-яким outer surface.
    Без business logic.
    """

    id: UUID
    item_id: UUID
    seller_id: UUID
    category_id: UUID
    title: str
    description: str
    latitude: float
    longitude: float
    listing_type: str
    status: str
    price: Decimal
    currency: str
    is_active: bool
    """Effectively active на момент побудови DTO."""

    view_count: int
    version: int
    created_at: datetime
    updated_at: datetime
    expires_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    auction_settings: Optional[AuctionSettingsDTO] = None

    @classmethod
    def from_entity(cls, listing: Listing) -> "ListingDTO":
        return cls(
            id=listing.id.value,
            item_id=listing.item_id.value,
            seller_id=listing.seller_id.value,
            category_id=listing.category_id.value,
            title=listing.title,
            description=listing.description,
            latitude=listing.location.latitude,
            longitude=listing.location.longitude,
            listing_type=listing.listing_type.value,
            status=listing.status.value,
            price=listing.current_price.amount,
            currency=listing.current_price.currency,
            is_active=listing.is_effectively_active(),
            view_count=listing.view_count,
            version=listing.version,
            created_at=listing.created_at,
            updated_at=listing.updated_at,
            expires_at=listing.expires_at,
            completed_at=listing.completed_at,
            deleted_at=listing.deleted_at,
            auction_settings=(
                AuctionSettingsDTO.from_value_object(listing.auction_settings)
                if listing.auction_settings is not None
                else None
            ),
        )


@dataclass
class PagedResult(Generic[T]):
    """One page of DTOs plus paging metadata."""

    items: list[T]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def from_page(cls, page: Page[S], mapper: Callable[[S], T]) -> "PagedResult[T]":
        return cls(
            items=[mapper(item) for item in page.items],
            total_count=page.total_count,
            page_number=page.page_number,
            page_size=page.page_size,
            total_pages=page.total_pages,
            has_next_page=page.has_next_page,
            has_previous_page=page.has_previous_page,
        )
