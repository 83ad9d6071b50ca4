"""ListingSearchCriteria - validated composite search над listings."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from marketplace.domain.shared import (
    InvalidArgumentError,
    SortDirection,
    Specification,
    validate_value_object,
)

from ..entities import Listing
from ..exceptions import CurrencyMismatchError
from ..value_objects import CategoryId, ListingStatus, ListingType, Location, Money
from .listing_specifications import (
    ActiveListingSpecification,
    ListingByCategorySpecification,
    ListingByStatusSpecification,
    ListingByTypeSpecification,
    ListingNearLocationSpecification,
    ListingPriceRangeSpecification,
    ListingTextSearchSpecification,
    NotDeletedListingSpecification,
)


class ListingSortField(str, Enum):
    """Fields a search can be ordered by."""

    CREATED_AT = "created_at"
    PRICE = "price"
    TITLE = "title"
    DISTANCE = "distance"
    """Тільки разом з center."""

    @classmethod
    def parse(cls, raw: "str | ListingSortField") -> "ListingSortField":
        """Parse sort field case-insensitively ("CreatedAt", "created_at", "PRICE").

        Raises:
            InvalidArgumentError: If the field is unknown.
        """
        if isinstance(raw, ListingSortField):
            return raw
        normalized = (raw or "").strip().lower().replace("_", "")
        for member in cls:
            if member.value.replace("_", "") == normalized:
                return member
        raise InvalidArgumentError(
            "Unknown sort field",
            sort_by=raw,
            allowed=", ".join(member.value for member in cls),
        )


@dataclass(frozen=True)
class ListingSearchCriteria:
    """Optional filters + ordering для composite search.

    Без status filter шукаємо тільки effectively active listings; з status
    filter - не видалені listings у цьому status.

    Example:
        >>> criteria = ListingSearchCriteria(
        ...     search_term="bike",
        ...     center=Location(50.45, 30.52),
        ...     radius_km=25,
        ...     max_price=Money(Decimal("500"), "USD"),
        ...     sort_by="distance",
        ...     sort_direction="asc",
        ... )
        >>> page = await repo.search(criteria, PageRequest(1, 20))
    """

    search_term: Optional[str] = None
    category_id: Optional[CategoryId] = None
    center: Optional[Location] = None
    radius_km: Optional[float] = None
    min_price: Optional[Money] = None
    max_price: Optional[Money] = None
    listing_type: Optional[ListingType] = None
    status: Optional[ListingStatus] = None
    sort_by: ListingSortField = ListingSortField.CREATED_AT
    sort_direction: SortDirection = SortDirection.DESC

    def __post_init__(self) -> None:
        """Validate filters and normalize sort options."""
        if self.search_term is not None:
            term = self.search_term.strip()
            object.__setattr__(self, "search_term", term or None)

        validate_value_object(
            (self.center is None) == (self.radius_km is None),
            "center and radius_km must be provided together",
        )
        if self.radius_km is not None:
            validate_value_object(
                isinstance(self.radius_km, (int, float))
                and not isinstance(self.radius_km, bool)
                and math.isfinite(self.radius_km)
                and self.radius_km > 0,
                "Radius must be greater than zero",
                radius_km=self.radius_km,
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
            )

        sort_by = ListingSortField.parse(self.sort_by)
        validate_value_object(
            sort_by != ListingSortField.DISTANCE or self.center is not None,
            "Sorting by distance requires a center",
        )
        object.__setattr__(self, "sort_by", sort_by)
        object.__setattr__(self, "sort_direction", SortDirection.parse(self.sort_direction))

    @property
    def is_spatial(self) -> bool:
        return self.center is not None

    def to_specification(self) -> Specification[Listing]:
        """Compose all filters into one specification."""
        spec: Specification[Listing]
        if self.status is None:
            spec = ActiveListingSpecification()
        else:
            spec = NotDeletedListingSpecification() & ListingByStatusSpecification(self.status)

        if self.search_term:
            spec = spec & ListingTextSearchSpecification(self.search_term)
        if self.category_id is not None:
            spec = spec & ListingByCategorySpecification(self.category_id)
        if self.listing_type is not None:
            spec = spec & ListingByTypeSpecification(self.listing_type)
        if self.min_price is not None or self.max_price is not None:
            spec = spec & ListingPriceRangeSpecification(self.min_price, self.max_price)
        if self.center is not None and self.radius_km is not None:
            spec = spec & ListingNearLocationSpecification(self.center, self.radius_km)
        return spec
