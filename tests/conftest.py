"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from marketplace.domain.listings import (
    AuctionSettings,
    CategoryId,
    ItemId,
    Listing,
    ListingId,
    ListingStatus,
    ListingType,
    Location,
    Money,
    UserId,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
"""Fixed reference time для deterministic specification tests."""

KYIV = Location(50.4501, 30.5234)
LVIV = Location(49.8397, 24.0297)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def sample_listing_data():
    """Sample data для створення fixed price listing."""
    return {
        "item_id": ItemId.new(),
        "seller_id": UserId.new(),
        "title": "Road bike",
        "description": "Carbon frame, 54cm",
        "location": KYIV,
        "category_id": CategoryId.new(),
        "price": Money(Decimal("450"), "USD"),
    }


@pytest.fixture
def forward_settings():
    """Forward auction: 100 → reserve 250, 7 days."""
    return AuctionSettings.create_forward_auction(
        starting_price=Money(Decimal("100"), "USD"),
        reserve_price=Money(Decimal("250"), "USD"),
        duration=timedelta(days=7),
    )


@pytest.fixture
def reverse_settings():
    """Reverse auction: max 500, 5 days."""
    return AuctionSettings.create_reverse_auction(
        max_price=Money(Decimal("500"), "USD"),
        duration=timedelta(days=5),
    )


@pytest.fixture
def listing_factory():
    """Factory для reconstituted listings з повним контролем над state.

    Usage:
        listing = listing_factory(status=ListingStatus.EXPIRED, price="10")
    """

    def build(
        *,
        status=ListingStatus.ACTIVE,
        listing_type=ListingType.FIXED_PRICE,
        price="100",
        currency="USD",
        title="Road bike",
        description="",
        location=KYIV,
        seller_id=None,
        category_id=None,
        item_id=None,
        auction_settings=None,
        created_at=NOW - timedelta(days=1),
        expires_at=None,
        deleted_at=None,
        version=1,
    ):
        return Listing(
            id=ListingId.new(),
            item_id=item_id or ItemId.new(),
            seller_id=seller_id or UserId.new(),
            title=title,
            description=description,
            location=location,
            category_id=category_id or CategoryId.new(),
            listing_type=listing_type,
            status=status,
            current_price=Money(Decimal(price), currency),
            auction_settings=auction_settings,
            created_at=created_at,
            updated_at=created_at,
            expires_at=expires_at,
            deleted_at=deleted_at,
            version=version,
        )

    return build
