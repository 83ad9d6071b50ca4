"""Commands що змінюють ціну чи контент listing."""

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Optional
from uuid import UUID

from marketplace.application.shared import Command


@dataclass(frozen=True)
class UpdateListingPriceCommand(Command):
    """Змінити current price.

    `currency` None → залишається поточна валюта listing.
    `expected_version` задано → mismatch одразу дає ListingConcurrencyError
    (без retry).
    """

    listing_id: UUID
    amount: Decimal
    currency: Optional[str] = None
    expected_version: Optional[int] = None


@dataclass(frozen=True)
class UpdateListingDetailsCommand(Command):
    """Змінити title/description і/або location (тільки DRAFT чи ACTIVE).

    None означає "не змінювати". latitude і longitude передаються разом.
    """

    listing_id: UUID
    title: Optional[str] = None
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    expected_version: Optional[int] = None


@dataclass(frozen=True)
class ReplaceAuctionSettingsCommand(Command):
    """Замінити умови аукціону (shape визначається типом listing).

    Forward: `starting_price` + `reserve_price` (+ optional buy now, max,
    increment). Reverse: тільки `max_price`. Current price скидається на
    initial price нових умов.
    """

    listing_id: UUID
    auction_duration: timedelta
    starting_price: Optional[Decimal] = None
    reserve_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    buy_now_price: Optional[Decimal] = None
    min_increment: Optional[Decimal] = None
    allow_auto_bidding: bool = False
    currency: Optional[str] = None
    """None → валюта listing."""

    expected_version: Optional[int] = None
