"""Unit tests для AuctionSettings (Forward | Reverse)."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from marketplace.domain.listings import (
    AuctionSettings,
    CurrencyMismatchError,
    ForwardAuctionSettings,
    ListingType,
    Money,
    ReverseAuctionSettings,
)
from marketplace.domain.shared import InvalidArgumentError


def usd(amount: str) -> Money:
    return Money(Decimal(amount), "USD")


class TestForwardAuction:
    """Tests для forward (rising-price) auction."""

    def test_create_forward_auction_success(self):
        # Act
        settings = AuctionSettings.create_forward_auction(
            starting_price=usd("100"),
            reserve_price=usd("250"),
            duration=timedelta(days=7),
            buy_now_price=usd("400"),
        )

        # Assert
        assert isinstance(settings, ForwardAuctionSettings)
        assert settings.listing_type == ListingType.FORWARD_AUCTION
        assert settings.initial_price == usd("100")
        assert settings.currency == "USD"
        assert settings.allow_auto_bidding is False

    def test_reserve_equal_to_starting_is_allowed(self):
        AuctionSettings.create_forward_auction(usd("100"), usd("100"), timedelta(hours=1))

    def test_reserve_below_starting_fails(self):
        """Test: reserve < starting → InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            AuctionSettings.create_forward_auction(usd("100"), usd("99"), timedelta(days=1))

        assert "Reserve price" in str(exc_info.value)

    def test_buy_now_below_starting_fails(self):
        with pytest.raises(InvalidArgumentError):
            AuctionSettings.create_forward_auction(
                usd("100"), usd("150"), timedelta(days=1), buy_now_price=usd("50")
            )

    @pytest.mark.parametrize("duration", [timedelta(0), timedelta(seconds=-1)])
    def test_non_positive_duration_fails(self, duration):
        with pytest.raises(InvalidArgumentError):
            AuctionSettings.create_forward_auction(usd("100"), usd("150"), duration)

    def test_duration_must_be_timedelta(self):
        with pytest.raises(InvalidArgumentError):
            AuctionSettings.create_forward_auction(usd("100"), usd("150"), 3600)

    def test_mixed_currencies_fail(self):
        """Test: starting USD + reserve EUR → CurrencyMismatchError."""
        with pytest.raises(CurrencyMismatchError):
            AuctionSettings.create_forward_auction(
                usd("100"), Money(Decimal("150"), "EUR"), timedelta(days=1)
            )

    def test_default_increment_is_five_percent(self):
        """Test: 5% від 1000 = 50."""
        settings = AuctionSettings.create_forward_auction(usd("1000"), usd("1000"), timedelta(days=1))

        assert settings.minimum_bid_increment == usd("50.00")

    def test_default_increment_has_floor(self):
        """Test: 5% від 10 = 0.50 < 1.00 → 1.00."""
        settings = AuctionSettings.create_forward_auction(usd("10"), usd("10"), timedelta(days=1))

        assert settings.minimum_bid_increment == usd("1.00")

    def test_default_increment_rounds_to_cents(self):
        """Test: 5% від 123.45 = 6.1725 → 6.17."""
        settings = AuctionSettings.create_forward_auction(
            usd("123.45"), usd("200"), timedelta(days=1)
        )

        assert settings.minimum_bid_increment.amount == Decimal("6.17")

    def test_explicit_zero_increment_fails(self):
        with pytest.raises(InvalidArgumentError):
            AuctionSettings.create_forward_auction(
                usd("100"), usd("150"), timedelta(days=1), min_increment=usd("0")
            )

    def test_minimum_next_bid(self):
        settings = AuctionSettings.create_forward_auction(
            usd("100"), usd("150"), timedelta(days=1), min_increment=usd("5")
        )

        assert settings.minimum_next_bid() == usd("100")
        assert settings.minimum_next_bid(usd("120")) == usd("125")

    def test_is_reserve_met(self):
        settings = AuctionSettings.create_forward_auction(usd("100"), usd("150"), timedelta(days=1))

        assert settings.is_reserve_met(usd("150"))
        assert not settings.is_reserve_met(usd("149.99"))

    def test_ends_at(self):
        settings = AuctionSettings.create_forward_auction(usd("100"), usd("150"), timedelta(days=7))
        started = datetime(2026, 1, 1, tzinfo=timezone.utc)

        assert settings.ends_at(started) == datetime(2026, 1, 8, tzinfo=timezone.utc)

    def test_settings_are_immutable(self, forward_settings):
        with pytest.raises(AttributeError):
            forward_settings.reserve_price = usd("1")


class TestReverseAuction:
    """Tests для reverse (falling-price) auction."""

    def test_create_reverse_auction_success(self):
        settings = AuctionSettings.create_reverse_auction(usd("500"), timedelta(days=5))

        assert isinstance(settings, ReverseAuctionSettings)
        assert settings.listing_type == ListingType.REVERSE_AUCTION
        assert settings.initial_price == usd("500")

    def test_reverse_has_no_starting_or_reserve(self, reverse_settings):
        """Test: Reverse shape не має starting/reserve price."""
        assert reverse_settings.starting_price is None
        assert reverse_settings.reserve_price is None

    def test_non_positive_duration_fails(self):
        with pytest.raises(InvalidArgumentError):
            AuctionSettings.create_reverse_auction(usd("500"), timedelta(0))

    def test_max_price_must_be_money(self):
        with pytest.raises(InvalidArgumentError):
            AuctionSettings.create_reverse_auction(Decimal("500"), timedelta(days=1))

    def test_shapes_are_distinct(self, forward_settings, reverse_settings):
        assert not isinstance(reverse_settings, ForwardAuctionSettings)
        assert not isinstance(forward_settings, ReverseAuctionSettings)
