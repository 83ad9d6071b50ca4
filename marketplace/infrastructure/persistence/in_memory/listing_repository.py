"""In-memory ListingRepository implementation.

Reference storage adapter: інтерпретує predicate tree через
PredicateEvaluator (ніколи не викликає `is_satisfied_by`), зберігає
detached snapshots і робить compare-and-swap по version.
"""

import copy
import logging
from typing import Callable, Optional

from marketplace.domain.listings import (
    ActiveListingSpecification,
    BoundingBox,
    CategoryId,
    ExpiredListingSpecification,
    ItemId,
    Listing,
    ListingAlreadyExistsError,
    ListingByCategorySpecification,
    ListingBySellerSpecification,
    ListingByStatusSpecification,
    ListingByTypeSpecification,
    ListingConcurrencyError,
    ListingId,
    ListingInBoundingBoxSpecification,
    ListingNearLocationSpecification,
    ListingNotFoundError,
    ListingRepository,
    ListingSearchCriteria,
    ListingSortField,
    ListingStatus,
    ListingType,
    Location,
    NotDeletedListingSpecification,
    UserId,
)
from marketplace.domain.shared import (
    AndPredicate,
    FieldPredicate,
    InvalidArgumentError,
    Operator,
    Page,
    PageRequest,
    Predicate,
    SortDirection,
    Specification,
)

from .predicate_evaluator import PredicateEvaluator

logger = logging.getLogger(__name__)

LISTING_FIELDS = frozenset(
    {
        "id",
        "item_id",
        "seller_id",
        "title",
        "description",
        "location",
        "category_id",
        "listing_type",
        "status",
        "current_price",
        "auction_settings",
        "created_at",
        "updated_at",
        "expires_at",
        "completed_at",
        "deleted_at",
        "view_count",
    }
)


def _snapshot(listing: Listing) -> Listing:
    """Detached copy без pending events (storage events не бачить)."""
    clone = copy.deepcopy(listing)
    clone.clear_domain_events()
    return clone


def _conjuncts(predicate: Predicate) -> list[Predicate]:
    """Flatten top-level AND chain."""
    if isinstance(predicate, AndPredicate):
        return _conjuncts(predicate.left) + _conjuncts(predicate.right)
    return [predicate]


class InMemoryListingRepository(ListingRepository):
    """In-memory implementation of ListingRepository.

    Args:
        rows: Backing dict (shared with InMemoryUnitOfWork); None = own dict.

    Example:
        >>> repo = InMemoryListingRepository()
        >>> await repo.add(listing)
        >>> page = await repo.search(ListingSearchCriteria(search_term="bike"), PageRequest())
    """

    def __init__(self, rows: Optional[dict[ListingId, Listing]] = None) -> None:
        self._rows: dict[ListingId, Listing] = rows if rows is not None else {}
        self._evaluator = PredicateEvaluator(LISTING_FIELDS)

    # ==================== CRUD ====================

    async def get_by_id(self, listing_id: ListingId) -> Optional[Listing]:
        stored = self._rows.get(listing_id)
        return _snapshot(stored) if stored is not None else None

    async def get_by_item_id(self, item_id: ItemId) -> Optional[Listing]:
        predicate = AndPredicate(
            NotDeletedListingSpecification().to_predicate(),
            FieldPredicate("item_id", Operator.EQ, item_id),
        )
        matches = self._sort(self._query(predicate), ListingSortField.CREATED_AT, SortDirection.DESC)
        return matches[0] if matches else None

    async def get_by_seller(self, seller_id: UserId) -> list[Listing]:
        return await self.find(ListingBySellerSpecification(seller_id))

    async def get_by_category(self, category_id: CategoryId) -> list[Listing]:
        return await self.find(
            NotDeletedListingSpecification() & ListingByCategorySpecification(category_id)
        )

    async def add(self, listing: Listing) -> None:
        """Insert listing snapshot.

        Raises:
            ListingAlreadyExistsError: If ID already stored.
        """
        if listing.id in self._rows:
            raise ListingAlreadyExistsError(listing.id)

        self._rows[listing.id] = _snapshot(listing)
        logger.debug(
            "listing_repository.added",
            extra={"listing_id": str(listing.id), "version": listing.version},
        )

    async def update(self, listing: Listing) -> None:
        """Compare-and-swap by version; on success listing.version += 1.

        Raises:
            ListingNotFoundError: If listing was never stored or was removed.
            ListingConcurrencyError: If stored version differs.
        """
        stored = self._rows.get(listing.id)
        if stored is None:
            raise ListingNotFoundError(listing.id)

        if stored.version != listing.version:
            logger.warning(
                "listing_repository.version_conflict",
                extra={
                    "listing_id": str(listing.id),
                    "expected_version": listing.version,
                    "actual_version": stored.version,
                },
            )
            raise ListingConcurrencyError(listing.id, listing.version, stored.version)

        listing.version = stored.version + 1
        self._rows[listing.id] = _snapshot(listing)
        logger.debug(
            "listing_repository.updated",
            extra={"listing_id": str(listing.id), "version": listing.version},
        )

    async def delete(self, listing_id: ListingId) -> bool:
        removed = self._rows.pop(listing_id, None)
        if removed is not None:
            logger.debug("listing_repository.deleted", extra={"listing_id": str(listing_id)})
        return removed is not None

    # ==================== BULK READS ====================

    async def get_active(self) -> list[Listing]:
        return await self.find(ActiveListingSpecification())

    async def get_expired(self) -> list[Listing]:
        return await self.find(ExpiredListingSpecification())

    async def get_by_type(self, listing_type: ListingType) -> list[Listing]:
        return await self.find(
            NotDeletedListingSpecification() & ListingByTypeSpecification(listing_type)
        )

    # ==================== SPATIAL ====================

    async def get_nearby(self, center: Location, radius_km: float) -> list[Listing]:
        spec = ActiveListingSpecification() & ListingNearLocationSpecification(center, radius_km)
        return self._sort(
            self._query(spec.to_predicate()),
            ListingSortField.DISTANCE,
            SortDirection.ASC,
            center,
        )

    async def get_in_bounding_box(
        self,
        min_lat: float,
        min_lon: float,
        max_lat: float,
        max_lon: float,
    ) -> list[Listing]:
        box = BoundingBox(min_lat, min_lon, max_lat, max_lon)
        return await self.find(ActiveListingSpecification() & ListingInBoundingBoxSpecification(box))

    # ==================== COUNTS ====================

    async def exists(self, listing_id: ListingId) -> bool:
        return listing_id in self._rows

    async def count_by_seller(self, seller_id: UserId) -> int:
        return await self.count(
            NotDeletedListingSpecification() & ListingBySellerSpecification(seller_id)
        )

    async def count_by_category(self, category_id: CategoryId) -> int:
        return await self.count(
            NotDeletedListingSpecification() & ListingByCategorySpecification(category_id)
        )

    async def count_active(self) -> int:
        return await self.count(ActiveListingSpecification())

    # ==================== SPECIFICATION QUERIES ====================

    async def find(self, spec: Specification[Listing]) -> list[Listing]:
        return self._sort(
            self._query(spec.to_predicate()),
            ListingSortField.CREATED_AT,
            SortDirection.DESC,
        )

    async def count(self, spec: Specification[Listing]) -> int:
        return len(self._query(spec.to_predicate(), detach=False))

    async def get_paged(
        self,
        page_request: PageRequest,
        spec: Optional[Specification[Listing]] = None,
        sort_by: ListingSortField = ListingSortField.CREATED_AT,
        sort_direction: SortDirection = SortDirection.DESC,
    ) -> Page[Listing]:
        sort_by = ListingSortField.parse(sort_by)
        if sort_by == ListingSortField.DISTANCE:
            raise InvalidArgumentError("Sorting by distance requires a center; use search()")

        if spec is None:
            matches = [_snapshot(listing) for listing in self._rows.values()]
        else:
            matches = self._query(spec.to_predicate())
        ordered = self._sort(matches, sort_by, SortDirection.parse(sort_direction))
        return self._page(ordered, page_request)

    async def get_seller_listings(
        self,
        seller_id: UserId,
        page_request: PageRequest,
        status: Optional[ListingStatus] = None,
        listing_type: Optional[ListingType] = None,
    ) -> Page[Listing]:
        spec = NotDeletedListingSpecification() & ListingBySellerSpecification(seller_id)
        return await self.get_paged(page_request, self._narrow(spec, status, listing_type))

    async def get_category_listings(
        self,
        category_id: CategoryId,
        page_request: PageRequest,
        status: Optional[ListingStatus] = None,
        listing_type: Optional[ListingType] = None,
    ) -> Page[Listing]:
        spec = NotDeletedListingSpecification() & ListingByCategorySpecification(category_id)
        return await self.get_paged(page_request, self._narrow(spec, status, listing_type))

    async def search(
        self,
        criteria: ListingSearchCriteria,
        page_request: PageRequest,
    ) -> Page[Listing]:
        matches = self._query(criteria.to_specification().to_predicate())
        ordered = self._sort(matches, criteria.sort_by, criteria.sort_direction, criteria.center)

        logger.debug(
            "listing_repository.search",
            extra={
                "total_count": len(ordered),
                "sort_by": criteria.sort_by.value,
                "sort_direction": criteria.sort_direction.value,
            },
        )
        return self._page(ordered, page_request)

    # ==================== INTERNALS ====================

    @staticmethod
    def _narrow(
        spec: Specification[Listing],
        status: Optional[ListingStatus],
        listing_type: Optional[ListingType],
    ) -> Specification[Listing]:
        if status is not None:
            spec = spec & ListingByStatusSpecification(status)
        if listing_type is not None:
            spec = spec & ListingByTypeSpecification(listing_type)
        return spec

    def _query(
        self,
        predicate: Predicate,
        detach: bool = True,
    ) -> list[Listing]:
        """Evaluate predicate over stored rows.

        Top-level WITHIN_RADIUS conjunct → bounding box prefilter; exact
        distance перевіряється самим predicate, тож результат не змінюється.
        """
        self._evaluator.validate(predicate)

        candidates = list(self._rows.values())
        for conjunct in _conjuncts(predicate):
            if (
                isinstance(conjunct, FieldPredicate)
                and conjunct.field == "location"
                and conjunct.operator == Operator.WITHIN_RADIUS
            ):
                center, radius_km = conjunct.value
                box = center.bounding_box(radius_km)
                candidates = [listing for listing in candidates if box.contains(listing.location)]

        matches = [
            listing
            for listing in candidates
            if self._evaluator.evaluate(predicate, listing)
        ]
        if detach:
            matches = [_snapshot(listing) for listing in matches]
        return matches

    @staticmethod
    def _sort(
        listings: list[Listing],
        sort_by: ListingSortField,
        direction: SortDirection,
        center: Optional[Location] = None,
    ) -> list[Listing]:
        """Stable sort; ties broken by listing ID for deterministic paging."""
        if sort_by == ListingSortField.DISTANCE:
            if center is None:
                raise InvalidArgumentError("Sorting by distance requires a center")
            key: Callable[[Listing], object] = lambda listing: listing.location.distance_to(center)
        elif sort_by == ListingSortField.PRICE:
            key = lambda listing: listing.current_price.amount
        elif sort_by == ListingSortField.TITLE:
            key = lambda listing: listing.title.casefold()
        else:
            key = lambda listing: listing.created_at

        by_id = sorted(listings, key=lambda listing: str(listing.id))
        return sorted(by_id, key=key, reverse=direction == SortDirection.DESC)  # type: ignore[arg-type]

    @staticmethod
    def _page(ordered: list[Listing], page_request: PageRequest) -> Page[Listing]:
        start = page_request.offset
        items = ordered[start : start + page_request.page_size]
        return Page.from_request(items, len(ordered), page_request)
