"""CreateListing Command - виставити item на продаж."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional
from uuid import UUID

from marketplace.application.shared import Command


@dataclass(frozen=True)
class CreateListingCommand(Command):
    """Command для створення listing.

    Для FIXED_PRICE потрібен `price`. Для auctions ціна береться з
    auction terms: forward - `starting_price` + `reserve_price`,
    reverse - `max_price`; `auction_duration` обов'язковий.

    Example:
        >>> command = CreateListingCommand(
        ...     item_id=item_id,
        ...     seller_id=seller_id,
        ...     category_id=category_id,
        ...     title="Road bike",
        ...     latitude=50.45,
        ...     longitude=30.52,
        ...     listing_type="forward_auction",
        ...     starting_price=Decimal("100"),
        ...     reserve_price=Decimal("250"),
        ...     auction_duration=timedelta(days=7),
        ... )
        >>> listing_dto = await handler.handle(command)
    """

    item_id: UUID
    seller_id: UUID
    category_id: UUID
    title: str
    latitude: float
    longitude: float
    listing_type: str
    """fixed_price | forward_auction | reverse_auction."""

    description: str = ""
    currency: Optional[str] = None
    """None → Settings.default_currency."""

    # Fixed price
    price: Optional[Decimal] = None

    # Auction terms
    starting_price: Optional[Decimal] = None
    reserve_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    buy_now_price: Optional[Decimal] = None
    min_increment: Optional[Decimal] = None
    auction_duration: Optional[timedelta] = None
    allow_auto_bidding: bool = False

    expires_at: Optional[datetime] = None
    as_draft: bool = False
    listing_id: Optional[UUID] = None
