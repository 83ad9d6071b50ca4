"""Concrete specifications над Listing.

Кожна specification - immutable strategy (frozen dataclass): і
`is_satisfied_by`, і `to_predicate` описують одне й те саме правило.

Time-dependent specs (Active, Expired) читають "now" один раз на кожен
виклик, якщо `now` не зафіксовано явно. Batch evaluation може перетнути
deadline посередині - це відома апроксимація.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from marketplace.domain.shared import (
    AndPredicate,
    FieldPredicate,
    Operator,
    OrPredicate,
    Predicate,
    Specification,
    validate_value_object,
)

from ..entities import Listing
from ..exceptions import CurrencyMismatchError
from ..value_objects import (
    BoundingBox,
    CategoryId,
    ListingStatus,
    ListingType,
    ItemId,
    Location,
    Money,
    UserId,
)


def _resolve_now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


@dataclass(frozen=True)
class ActiveListingSpecification(Specification[Listing]):
    """Effectively active: ACTIVE і не видалений і (expires_at is None або > now)."""

    now: Optional[datetime] = None
    """Fixed reference time; None = read the clock on every call."""

    def is_satisfied_by(self, candidate: Listing) -> bool:
        return candidate.is_effectively_active(_resolve_now(self.now))

    def to_predicate(self) -> Predicate:
        now = _resolve_now(self.now)
        return AndPredicate(
            AndPredicate(
                FieldPredicate("status", Operator.EQ, ListingStatus.ACTIVE),
                FieldPredicate("deleted_at", Operator.IS_NULL),
            ),
            OrPredicate(
                FieldPredicate("expires_at", Operator.IS_NULL),
                FieldPredicate("expires_at", Operator.GT, now),
            ),
        )


@dataclass(frozen=True)
class ExpiredListingSpecification(Specification[Listing]):
    """Raw status ACTIVE, але expires_at вже настав: кандидати для expiry sweep."""

    now: Optional[datetime] = None

    def is_satisfied_by(self, candidate: Listing) -> bool:
        return candidate.is_overdue(_resolve_now(self.now))

    def to_predicate(self) -> Predicate:
        now = _resolve_now(self.now)
        return AndPredicate(
            FieldPredicate("status", Operator.EQ, ListingStatus.ACTIVE),
            AndPredicate(
                FieldPredicate("expires_at", Operator.IS_NOT_NULL),
                FieldPredicate("expires_at", Operator.LE, now),
            ),
        )


@dataclass(frozen=True)
class NotDeletedListingSpecification(Specification[Listing]):
    def is_satisfied_by(self, candidate: Listing) -> bool:
        return not candidate.is_deleted

    def to_predicate(self) -> Predicate:
        return FieldPredicate("deleted_at", Operator.IS_NULL)


@dataclass(frozen=True)
class ListingByTypeSpecification(Specification[Listing]):
    listing_type: ListingType

    def __post_init__(self) -> None:
        validate_value_object(
            isinstance(self.listing_type, ListingType),
            "Unknown listing type",
            listing_type=self.listing_type,
        )

    def is_satisfied_by(self, candidate: Listing) -> bool:
        return candidate.listing_type == self.listing_type

    def to_predicate(self) -> Predicate:
        return FieldPredicate("listing_type", Operator.EQ, self.listing_type)


@dataclass(frozen=True)
class ListingByStatusSpecification(Specification[Listing]):
    """Raw status match (не враховує deleted_at чи expires_at)."""

    status: ListingStatus

    def __post_init__(self) -> None:
        validate_value_object(
            isinstance(self.status, ListingStatus),
            "Unknown listing status",
            status=self.status,
        )

    def is_satisfied_by(self, candidate: Listing) -> bool:
        return candidate.status == self.status

    def to_predicate(self) -> Predicate:
        return FieldPredicate("status", Operator.EQ, self.status)


@dataclass(frozen=True)
class ListingBySellerSpecification(Specification[Listing]):
    seller_id: UserId

    def is_satisfied_by(self, candidate: Listing) -> bool:
        return candidate.seller_id == self.seller_id

    def to_predicate(self) -> Predicate:
        return FieldPredicate("seller_id", Operator.EQ, self.seller_id)


@dataclass(frozen=True)
class ListingByItemSpecification(Specification[Listing]):
    """All listings of one item, regardless of status."""

    item_id: ItemId

    def is_satisfied_by(self, candidate: Listing) -> bool:
        return candidate.item_id == self.item_id

    def to_predicate(self) -> Predicate:
        return FieldPredicate("item_id", Operator.EQ, self.item_id)


@dataclass(frozen=True)
class ListingByCategorySpecification(Specification[Listing]):
    category_id: CategoryId

    def is_satisfied_by(self, candidate: Listing) -> bool:
        return candidate.category_id == self.category_id

    def to_predicate(self) -> Predicate:
        return FieldPredicate("category_id", Operator.EQ, self.category_id)


@dataclass(frozen=True)
class ListingNearLocationSpecification(Specification[Listing]):
    """Great-circle distance від center <= radius_km.

    Storage adapter може використати bounding box / spatial index як
    prefilter, але результат має збігатися з прямою перевіркою.
    """

    center: Location
    radius_km: float

    def __post_init__(self) -> None:
        validate_value_object(isinstance(self.center, Location), "Center must be a Location")
        validate_value_object(
            isinstance(self.radius_km, (int, float))
            and not isinstance(self.radius_km, bool)
            and math.isfinite(self.radius_km)
            and self.radius_km >= 0,
            "Radius must be a non-negative number",
            radius_km=self.radius_km,
        )
        object.__setattr__(self, "radius_km", float(self.radius_km))

    def is_satisfied_by(self, candidate: Listing) -> bool:
        return candidate.location.distance_to(self.center) <= self.radius_km

    def to_predicate(self) -> Predicate:
        return FieldPredicate("location", Operator.WITHIN_RADIUS, (self.center, self.radius_km))


@dataclass(frozen=True)
class ListingInBoundingBoxSpecification(Specification[Listing]):
    box: BoundingBox

    def is_satisfied_by(self, candidate: Listing) -> bool:
        return self.box.contains(candidate.location)

    def to_predicate(self) -> Predicate:
        return FieldPredicate("location", Operator.WITHIN_BOUNDS, self.box)


@dataclass(frozen=True)
class ListingPriceRangeSpecification(Specification[Listing]):
    """min_price <= current_price <= max_price (межі включно).

    Listings в іншій валюті не підходять: конвертації немає.
    """

    min_price: Optional[Money] = None
    max_price: Optional[Money] = None

    def __post_init__(self) -> None:
        validate_value_object(
            self.min_price is not None or self.max_price is not None,
            "Price range requires min_price or max_price",
        )
        if self.min_price is not None and self.max_price is not None:
            if self.min_price.currency != self.max_price.currency:
                raise CurrencyMismatchError(
                    expected=self.min_price.currency,
                    actual=self.max_price.currency,
                )
            validate_value_object(
                self.min_price <= self.max_price,
                "min_price cannot exceed max_price",
                min_price=str(self.min_price),
                max_price=str(self.max_price),
            )

    @property
    def currency(self) -> str:
        bound = self.min_price if self.min_price is not None else self.max_price
        return bound.currency  # type: ignore[union-attr]

    def is_satisfied_by(self, candidate: Listing) -> bool:
        price = candidate.current_price
        if price.currency != self.currency:
            return False
        if self.min_price is not None and price.amount < self.min_price.amount:
            return False
        if self.max_price is not None and price.amount > self.max_price.amount:
            return False
        return True

    def to_predicate(self) -> Predicate:
        predicate: Predicate = FieldPredicate("current_price.currency", Operator.EQ, self.currency)
        if self.min_price is not None:
            predicate = AndPredicate(
                predicate,
                FieldPredicate("current_price.amount", Operator.GE, self.min_price.amount),
            )
        if self.max_price is not None:
            predicate = AndPredicate(
                predicate,
                FieldPredicate("current_price.amount", Operator.LE, self.max_price.amount),
            )
        return predicate


@dataclass(frozen=True)
class ListingTextSearchSpecification(Specification[Listing]):
    """Case-insensitive substring у title або description."""

    term: str

    def __post_init__(self) -> None:
        validate_value_object(
            isinstance(self.term, str) and bool(self.term.strip()),
            "Search term cannot be empty",
        )
        object.__setattr__(self, "term", self.term.strip())

    def is_satisfied_by(self, candidate: Listing) -> bool:
        needle = self.term.casefold()
        return needle in candidate.title.casefold() or needle in candidate.description.casefold()

    def to_predicate(self) -> Predicate:
        return OrPredicate(
            FieldPredicate("title", Operator.CONTAINS, self.term),
            FieldPredicate("description", Operator.CONTAINS, self.term),
        )
