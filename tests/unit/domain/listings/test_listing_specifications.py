"""Tests для Listing specifications.

Boolean algebra перевіряється на grid listings, що покриває кожен status,
deleted flag, стан expiry, listing type, seller і location bucket. Кожна
specification також має давати той самий результат через predicate tree
(PredicateEvaluator), що і через is_satisfied_by.
"""

import itertools
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from marketplace.domain.listings import (
    ActiveListingSpecification,
    AuctionSettings,
    BoundingBox,
    CategoryId,
    CurrencyMismatchError,
    ExpiredListingSpecification,
    ItemId,
    Listing,
    ListingByCategorySpecification,
    ListingByItemSpecification,
    ListingBySellerSpecification,
    ListingByStatusSpecification,
    ListingByTypeSpecification,
    ListingId,
    ListingInBoundingBoxSpecification,
    ListingNearLocationSpecification,
    ListingPriceRangeSpecification,
    ListingStatus,
    ListingTextSearchSpecification,
    ListingType,
    Location,
    Money,
    NotDeletedListingSpecification,
    UserId,
)
from marketplace.domain.shared import (
    AndSpecification,
    FieldPredicate,
    InvalidArgumentError,
    NotSpecification,
    Operator,
    OrSpecification,
    iter_field_predicates,
)
from marketplace.infrastructure.persistence.in_memory.listing_repository import LISTING_FIELDS
from marketplace.infrastructure.persistence.in_memory.predicate_evaluator import PredicateEvaluator

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
KYIV = Location(50.4501, 30.5234)
LVIV = Location(49.8397, 24.0297)
SELLER_A = UserId.new()
SELLER_B = UserId.new()

EVALUATOR = PredicateEvaluator(LISTING_FIELDS)


def usd(amount: str) -> Money:
    return Money(Decimal(amount), "USD")


def _auction_settings(listing_type):
    if listing_type == ListingType.FORWARD_AUCTION:
        return AuctionSettings.create_forward_auction(usd("100"), usd("200"), timedelta(days=7))
    if listing_type == ListingType.REVERSE_AUCTION:
        return AuctionSettings.create_reverse_auction(usd("500"), timedelta(days=7))
    return None


@pytest.fixture(scope="module")
def listing_grid():
    """Every status × deleted × expiry × type × seller × location."""
    grid = []
    expiries = [None, NOW - timedelta(hours=1), NOW + timedelta(hours=1)]
    combos = itertools.product(
        ListingStatus,
        [False, True],
        expiries,
        ListingType,
        [SELLER_A, SELLER_B],
        [KYIV, LVIV],
    )
    for index, (status, deleted, expires_at, listing_type, seller, location) in enumerate(combos):
        grid.append(
            _build(
                status=status,
                deleted=deleted,
                expires_at=expires_at,
                listing_type=listing_type,
                seller=seller,
                location=location,
                price=["50", "150", "450"][index % 3],
                title=["Road bike", "Oak table"][index % 2],
            )
        )
    return grid


def _build(*, status, deleted, expires_at, listing_type, seller, location, price, title):
    created_at = NOW - timedelta(days=1)
    return Listing(
        id=ListingId.new(),
        item_id=ItemId.new(),
        seller_id=seller,
        title=title,
        description="",
        location=location,
        category_id=CategoryId.new(),
        listing_type=listing_type,
        status=status,
        current_price=usd(price),
        auction_settings=_auction_settings(listing_type),
        created_at=created_at,
        updated_at=created_at,
        expires_at=expires_at,
        deleted_at=created_at if deleted else None,
    )


SPECS = {
    "active": ActiveListingSpecification(now=NOW),
    "expired": ExpiredListingSpecification(now=NOW),
    "not_deleted": NotDeletedListingSpecification(),
    "forward": ListingByTypeSpecification(ListingType.FORWARD_AUCTION),
    "draft": ListingByStatusSpecification(ListingStatus.DRAFT),
    "seller_a": ListingBySellerSpecification(SELLER_A),
    "near_kyiv": ListingNearLocationSpecification(KYIV, 50),
    "west_box": ListingInBoundingBoxSpecification(BoundingBox(45, 20, 55, 27)),
    "cheap": ListingPriceRangeSpecification(max_price=usd("150")),
    "bike": ListingTextSearchSpecification("BIKE"),
}

PAIRS = list(itertools.combinations(sorted(SPECS), 2))


class TestBooleanAlgebra:
    """And / Or / Not підкоряються законам boolean algebra."""

    @pytest.mark.parametrize("left,right", PAIRS)
    def test_and_or(self, listing_grid, left, right):
        a, b = SPECS[left], SPECS[right]

        for listing in listing_grid:
            x, y = a.is_satisfied_by(listing), b.is_satisfied_by(listing)
            assert (a & b).is_satisfied_by(listing) == (x and y)
            assert (a | b).is_satisfied_by(listing) == (x or y)
            assert a.and_(b).is_satisfied_by(listing) == (b & a).is_satisfied_by(listing)

    @pytest.mark.parametrize("left,right", PAIRS)
    def test_de_morgan(self, listing_grid, left, right):
        """Test: ~(a & b) == ~a | ~b, ~(a | b) == ~a & ~b."""
        a, b = SPECS[left], SPECS[right]

        for listing in listing_grid:
            assert (~(a & b)).is_satisfied_by(listing) == (~a | ~b).is_satisfied_by(listing)
            assert (~(a | b)).is_satisfied_by(listing) == (~a & ~b).is_satisfied_by(listing)

    @pytest.mark.parametrize("name", sorted(SPECS))
    def test_double_negation(self, listing_grid, name):
        spec = SPECS[name]

        for listing in listing_grid:
            assert (~~spec).is_satisfied_by(listing) == spec.is_satisfied_by(listing)
            assert spec.not_().is_satisfied_by(listing) != spec.is_satisfied_by(listing)

    def test_operators_build_composites(self):
        a, b = SPECS["active"], SPECS["forward"]

        assert isinstance(a & b, AndSpecification)
        assert isinstance(a | b, OrSpecification)
        assert isinstance(~a, NotSpecification)


class TestPredicateTranslation:
    """Predicate tree дає той самий результат, що й is_satisfied_by."""

    @pytest.mark.parametrize("name", sorted(SPECS))
    def test_single_spec(self, listing_grid, name):
        spec = SPECS[name]
        predicate = spec.to_predicate()

        for listing in listing_grid:
            assert EVALUATOR.evaluate(predicate, listing) == spec.is_satisfied_by(listing)

    @pytest.mark.parametrize("left,right", PAIRS)
    def test_composites(self, listing_grid, left, right):
        a, b = SPECS[left], SPECS[right]
        composites = [a & b, a | b, ~a & b, ~(a | ~b)]

        for spec in composites:
            predicate = spec.to_predicate()
            for listing in listing_grid:
                assert EVALUATOR.evaluate(predicate, listing) == spec.is_satisfied_by(listing)

    def test_iter_field_predicates_tracks_negation(self):
        """Test: Leaf під Not повертається з negated=True."""
        spec = SPECS["seller_a"] & ~SPECS["forward"]

        leaves = [(leaf.field, negated) for leaf, negated in iter_field_predicates(spec.to_predicate())]

        assert leaves == [("seller_id", False), ("listing_type", True)]

    def test_unknown_field_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            EVALUATOR.validate(FieldPredicate("password", Operator.EQ, "x"))


class TestSpecificationSemantics:
    """Окремі правила specifications."""

    def test_active_excludes_deleted_and_overdue(self, listing_factory):
        spec = ActiveListingSpecification(now=NOW)

        assert spec.is_satisfied_by(listing_factory())
        assert not spec.is_satisfied_by(listing_factory(deleted_at=NOW - timedelta(hours=2)))
        assert not spec.is_satisfied_by(listing_factory(expires_at=NOW))
        assert spec.is_satisfied_by(listing_factory(expires_at=NOW + timedelta(seconds=1)))

    def test_expired_is_raw_active_past_deadline(self, listing_factory):
        spec = ExpiredListingSpecification(now=NOW)

        assert spec.is_satisfied_by(listing_factory(expires_at=NOW))
        assert not spec.is_satisfied_by(listing_factory(expires_at=None))
        assert not spec.is_satisfied_by(
            listing_factory(status=ListingStatus.EXPIRED, expires_at=NOW - timedelta(days=1))
        )

    def test_near_location_includes_boundary(self, listing_factory):
        distance = LVIV.distance_to(KYIV)

        assert ListingNearLocationSpecification(KYIV, distance).is_satisfied_by(
            listing_factory(location=LVIV)
        )
        assert not ListingNearLocationSpecification(KYIV, distance - 1).is_satisfied_by(
            listing_factory(location=LVIV)
        )

    def test_near_location_negative_radius_fails(self):
        with pytest.raises(InvalidArgumentError):
            ListingNearLocationSpecification(KYIV, -1)

    def test_price_range_is_inclusive(self, listing_factory):
        spec = ListingPriceRangeSpecification(usd("100"), usd("200"))

        assert spec.is_satisfied_by(listing_factory(price="100"))
        assert spec.is_satisfied_by(listing_factory(price="200"))
        assert not spec.is_satisfied_by(listing_factory(price="200.01"))

    def test_price_range_excludes_other_currency(self, listing_factory):
        spec = ListingPriceRangeSpecification(max_price=usd("1000"))

        assert not spec.is_satisfied_by(listing_factory(price="10", currency="EUR"))

    def test_price_range_requires_bound(self):
        with pytest.raises(InvalidArgumentError):
            ListingPriceRangeSpecification()

    def test_price_range_mixed_currency_fails(self):
        with pytest.raises(CurrencyMismatchError):
            ListingPriceRangeSpecification(usd("1"), Money(Decimal("2"), "EUR"))

    def test_price_range_inverted_fails(self):
        with pytest.raises(InvalidArgumentError):
            ListingPriceRangeSpecification(usd("2"), usd("1"))

    def test_text_search_is_case_insensitive(self, listing_factory):
        spec = ListingTextSearchSpecification("carbon")

        assert spec.is_satisfied_by(listing_factory(description="CARBON frame"))
        assert not spec.is_satisfied_by(listing_factory(description="steel frame"))

    @pytest.mark.parametrize("term", ["", "   "])
    def test_text_search_blank_term_fails(self, term):
        with pytest.raises(InvalidArgumentError):
            ListingTextSearchSpecification(term)

    def test_by_category(self, listing_factory):
        listing = listing_factory()

        assert ListingByCategorySpecification(listing.category_id).is_satisfied_by(listing)

    def test_active_by_item(self, listing_factory):
        item_id = ItemId.new()
        active = listing_factory(item_id=item_id)
        draft = listing_factory(item_id=item_id, status=ListingStatus.DRAFT)
        other_item = listing_factory()
        spec = ActiveListingSpecification(now=NOW) & ListingByItemSpecification(item_id)

        candidates = [active, draft, other_item]
        predicate = spec.to_predicate()

        assert spec.select(candidates) == [active]
        assert [x for x in candidates if EVALUATOR.evaluate(predicate, x)] == [active]

    def test_select_filters_candidates(self, listing_factory):
        active = listing_factory()
        draft = listing_factory(status=ListingStatus.DRAFT)

        assert ActiveListingSpecification(now=NOW).select([active, draft]) == [active]
