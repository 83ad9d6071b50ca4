"""Unit tests для ListingSearchCriteria і ListingSortField."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from marketplace.domain.listings import (
    CurrencyMismatchError,
    ListingSearchCriteria,
    ListingSortField,
    ListingStatus,
    ListingType,
    Location,
    Money,
)
from marketplace.domain.shared import InvalidArgumentError, SortDirection

KYIV = Location(50.4501, 30.5234)


def usd(amount: str) -> Money:
    return Money(Decimal(amount), "USD")


class TestSortField:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("created_at", ListingSortField.CREATED_AT),
            ("CreatedAt", ListingSortField.CREATED_AT),
            ("PRICE", ListingSortField.PRICE),
            (" title ", ListingSortField.TITLE),
            ("distance", ListingSortField.DISTANCE),
            (ListingSortField.PRICE, ListingSortField.PRICE),
        ],
    )
    def test_parse(self, raw, expected):
        """Test: Parsing case-insensitive, underscores ignored."""
        assert ListingSortField.parse(raw) == expected

    def test_parse_unknown_fails(self):
        with pytest.raises(InvalidArgumentError):
            ListingSortField.parse("popularity")


class TestSearchCriteriaValidation:
    """Tests для валідації filters."""

    def test_defaults(self):
        criteria = ListingSearchCriteria()

        assert criteria.sort_by == ListingSortField.CREATED_AT
        assert criteria.sort_direction == SortDirection.DESC
        assert not criteria.is_spatial

    def test_sort_options_are_parsed(self):
        criteria = ListingSearchCriteria(sort_by="price", sort_direction="asc")

        assert criteria.sort_by == ListingSortField.PRICE
        assert criteria.sort_direction == SortDirection.ASC

    def test_unknown_direction_fails(self):
        with pytest.raises(InvalidArgumentError):
            ListingSearchCriteria(sort_direction="sideways")

    def test_blank_search_term_is_dropped(self):
        assert ListingSearchCriteria(search_term="   ").search_term is None

    def test_center_without_radius_fails(self):
        """Test: center і radius_km тільки разом."""
        with pytest.raises(InvalidArgumentError):
            ListingSearchCriteria(center=KYIV)

    def test_radius_without_center_fails(self):
        with pytest.raises(InvalidArgumentError):
            ListingSearchCriteria(radius_km=10)

    @pytest.mark.parametrize("radius", [0, -5, float("inf")])
    def test_non_positive_radius_fails(self, radius):
        with pytest.raises(InvalidArgumentError):
            ListingSearchCriteria(center=KYIV, radius_km=radius)

    def test_distance_sort_requires_center(self):
        with pytest.raises(InvalidArgumentError):
            ListingSearchCriteria(sort_by="distance")

    def test_distance_sort_with_center(self):
        criteria = ListingSearchCriteria(center=KYIV, radius_km=25, sort_by="distance")

        assert criteria.is_spatial
        assert criteria.sort_by == ListingSortField.DISTANCE

    def test_min_above_max_fails(self):
        with pytest.raises(InvalidArgumentError):
            ListingSearchCriteria(min_price=usd("10"), max_price=usd("5"))

    def test_price_bounds_in_different_currencies_fail(self):
        with pytest.raises(CurrencyMismatchError):
            ListingSearchCriteria(min_price=usd("1"), max_price=Money(Decimal("5"), "EUR"))


class TestSearchCriteriaSpecification:
    """Tests для to_specification()."""

    def test_without_status_only_active_match(self, listing_factory):
        """Test: Без status filter - тільки effectively active."""
        spec = ListingSearchCriteria().to_specification()

        assert spec.is_satisfied_by(listing_factory())
        assert not spec.is_satisfied_by(listing_factory(status=ListingStatus.DRAFT))

    def test_with_status_filter_matches_non_deleted_in_status(self, listing_factory):
        spec = ListingSearchCriteria(status=ListingStatus.EXPIRED).to_specification()

        assert spec.is_satisfied_by(listing_factory(status=ListingStatus.EXPIRED))
        assert not spec.is_satisfied_by(
            listing_factory(
                status=ListingStatus.EXPIRED,
                deleted_at=datetime.now(timezone.utc) - timedelta(hours=1),
            )
        )
        assert not spec.is_satisfied_by(listing_factory())

    def test_all_filters_compose(self, listing_factory, forward_settings):
        # Arrange
        match = listing_factory(
            title="Carbon road bike",
            listing_type=ListingType.FORWARD_AUCTION,
            auction_settings=forward_settings,
            price="100",
        )
        criteria = ListingSearchCriteria(
            search_term="road",
            category_id=match.category_id,
            center=KYIV,
            radius_km=5,
            min_price=usd("50"),
            max_price=usd("150"),
            listing_type=ListingType.FORWARD_AUCTION,
        )

        # Act
        spec = criteria.to_specification()

        # Assert
        assert spec.is_satisfied_by(match)
        assert not spec.is_satisfied_by(listing_factory(title="Oak table"))
