"""ListingRepository Port - interface для persistence listing aggregates.

Це PORT в Hexagonal Architecture (domain визначає interface).
Domain описує ЩО фільтрувати (Specification / predicate tree), адаптер
вирішує ЯК (SQL, spatial index, in-memory scan).
"""

from abc import ABC, abstractmethod
from typing import Optional

from marketplace.domain.shared import Page, PageRequest, SortDirection, Specification

from ..entities import Listing
from ..specifications import ListingSearchCriteria, ListingSortField
from ..value_objects import CategoryId, ItemId, ListingId, ListingStatus, ListingType, Location, UserId


class ListingRepository(ABC):
    """Abstract interface для listing persistence.

    Контракт для всіх реалізацій:
    - Soft-deleted listings повертаються CRUD-методами (get_by_id, get_by_seller),
      але ніколи не потрапляють в active/nearby/search результати
    - `update` - compare-and-swap по `listing.version`; на успіх version += 1
    - Domain events aggregate НЕ зберігаються; їх публікує caller після commit

    Example (Domain uses):
        >>> listing = await listing_repo.get_by_id(listing_id)
        >>> listing.update_price(Money(Decimal("90"), "USD"))
        >>> await listing_repo.update(listing)  # ListingConcurrencyError якщо stale
    """

    # ==================== CRUD ====================

    @abstractmethod
    async def get_by_id(self, listing_id: ListingId) -> Optional[Listing]:
        """Get listing by ID.

        Args:
            listing_id: Listing ID.

        Returns:
            Listing (включно з soft-deleted) або None якщо не знайдено.
        """
        pass

    @abstractmethod
    async def get_by_item_id(self, item_id: ItemId) -> Optional[Listing]:
        """Get the most recent non-deleted listing for an item.

        Returns:
            Listing або None.
        """
        pass

    @abstractmethod
    async def get_by_seller(self, seller_id: UserId) -> list[Listing]:
        """All listings of a seller, newest first."""
        pass

    @abstractmethod
    async def get_by_category(self, category_id: CategoryId) -> list[Listing]:
        """All non-deleted listings in a category, newest first."""
        pass

    @abstractmethod
    async def add(self, listing: Listing) -> None:
        """Insert new listing.

        Raises:
            ListingAlreadyExistsError: If a listing with the same ID exists.
        """
        pass

    @abstractmethod
    async def update(self, listing: Listing) -> None:
        """Persist changes of an existing listing.

        Args:
            listing: Aggregate whose `version` is the token it was loaded with.

        Raises:
            ListingNotFoundError: If listing does not exist.
            ListingConcurrencyError: If stored version != listing.version.

        Note:
            На успіх adapter встановлює listing.version = stored version.
        """
        pass

    @abstractmethod
    async def delete(self, listing_id: ListingId) -> bool:
        """Physically remove listing (storage concern, не domain soft delete).

        Returns:
            True якщо listing існував і був видалений.
        """
        pass

    # ==================== BULK READS ====================

    @abstractmethod
    async def get_active(self) -> list[Listing]:
        """Effectively active listings, newest first."""
        pass

    @abstractmethod
    async def get_expired(self) -> list[Listing]:
        """ACTIVE listings whose expires_at has passed (expiry sweep input).

        Note:
            Використовується ExpireOverdueListingsHandler.
        """
        pass

    @abstractmethod
    async def get_by_type(self, listing_type: ListingType) -> list[Listing]:
        """Non-deleted listings of the given type, newest first."""
        pass

    # ==================== SPATIAL ====================

    @abstractmethod
    async def get_nearby(self, center: Location, radius_km: float) -> list[Listing]:
        """Effectively active listings within radius, nearest first.

        Note:
            Bounding box / spatial index - тільки prefilter; фінальний
            результат має збігатися з ListingNearLocationSpecification.
        """
        pass

    @abstractmethod
    async def get_in_bounding_box(
        self,
        min_lat: float,
        min_lon: float,
        max_lat: float,
        max_lon: float,
    ) -> list[Listing]:
        """Effectively active listings inside the box (edges inclusive).

        Raises:
            InvalidArgumentError: If box coordinates are out of range or unordered.
        """
        pass

    # ==================== COUNTS ====================

    @abstractmethod
    async def exists(self, listing_id: ListingId) -> bool:
        pass

    @abstractmethod
    async def count_by_seller(self, seller_id: UserId) -> int:
        """Count non-deleted listings of a seller."""
        pass

    @abstractmethod
    async def count_by_category(self, category_id: CategoryId) -> int:
        """Count non-deleted listings in a category."""
        pass

    @abstractmethod
    async def count_active(self) -> int:
        """Count effectively active listings."""
        pass

    # ==================== SPECIFICATION QUERIES ====================

    @abstractmethod
    async def find(self, spec: Specification[Listing]) -> list[Listing]:
        """All listings satisfying spec, newest first."""
        pass

    @abstractmethod
    async def count(self, spec: Specification[Listing]) -> int:
        pass

    @abstractmethod
    async def get_paged(
        self,
        page_request: PageRequest,
        spec: Optional[Specification[Listing]] = None,
        sort_by: ListingSortField = ListingSortField.CREATED_AT,
        sort_direction: SortDirection = SortDirection.DESC,
    ) -> Page[Listing]:
        """One page of listings satisfying spec (all listings if spec is None).

        Raises:
            InvalidArgumentError: If sort_by is DISTANCE (потрібен center - use search).
        """
        pass

    @abstractmethod
    async def get_seller_listings(
        self,
        seller_id: UserId,
        page_request: PageRequest,
        status: Optional[ListingStatus] = None,
        listing_type: Optional[ListingType] = None,
    ) -> Page[Listing]:
        """Paged non-deleted listings of a seller, newest first."""
        pass

    @abstractmethod
    async def get_category_listings(
        self,
        category_id: CategoryId,
        page_request: PageRequest,
        status: Optional[ListingStatus] = None,
        listing_type: Optional[ListingType] = None,
    ) -> Page[Listing]:
        """Paged non-deleted listings in a category, newest first."""
        pass

    @abstractmethod
    async def search(
        self,
        criteria: ListingSearchCriteria,
        page_request: PageRequest,
    ) -> Page[Listing]:
        """Composite search (criteria.to_specification()) with criteria ordering.

        Note:
            sort_by=DISTANCE сортує по відстані до criteria.center.
        """
        pass
