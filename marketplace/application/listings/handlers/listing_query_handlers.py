"""Query handlers - read-only, повертають DTOs."""

import logging

from marketplace.application.shared import QueryHandler
from marketplace.domain.listings import (
    CategoryId,
    ListingId,
    ListingNotFoundError,
    ListingSearchCriteria,
    ListingSortField,
    ListingStatus,
    ListingType,
    Location,
    Money,
    UserId,
)
from marketplace.domain.shared import InvalidArgumentError, SortDirection

from ..dtos import ListingDTO, PagedResult
from ..queries import (
    GetListingQuery,
    GetNearbyListingsQuery,
    GetSellerListingsQuery,
    SearchListingsQuery,
)
from .base import ListingHandlerBase, build_page_request, parse_enum

logger = logging.getLogger(__name__)


class GetListingHandler(ListingHandlerBase, QueryHandler[GetListingQuery, ListingDTO]):
    async def handle(self, query: GetListingQuery) -> ListingDTO:
        """Raises ListingNotFoundError if missing (or soft-deleted)."""
        listing_id = ListingId(query.listing_id)
        async with self.uow:
            listing = await self.uow.listings.get_by_id(listing_id)

        if listing is None or (listing.is_deleted and not query.include_deleted):
            raise ListingNotFoundError(listing_id)
        return ListingDTO.from_entity(listing)


class SearchListingsHandler(
    ListingHandlerBase, QueryHandler[SearchListingsQuery, PagedResult[ListingDTO]]
):
    """Composite search over listings.

    Maps query primitives → ListingSearchCriteria (де і відбувається
    валідація filters), застосовує paging і radius policy з Settings.
    """

    async def handle(self, query: SearchListingsQuery) -> PagedResult[ListingDTO]:
        """Search listings.

        Raises:
            InvalidArgumentError: Invalid filters, unknown sort option or
                radius above max_search_radius_km.
        """
        center = None
        if query.latitude is not None or query.longitude is not None:
            if query.latitude is None or query.longitude is None:
                raise InvalidArgumentError("latitude and longitude must be provided together")
            center = Location(query.latitude, query.longitude)
        if query.radius_km is not None:
            self._check_radius(query.radius_km)

        currency = query.currency or self.settings.default_currency
        criteria = ListingSearchCriteria(
            search_term=query.search_term,
            category_id=CategoryId(query.category_id) if query.category_id else None,
            center=center,
            radius_km=query.radius_km,
            min_price=Money(query.min_price, currency) if query.min_price is not None else None,
            max_price=Money(query.max_price, currency) if query.max_price is not None else None,
            listing_type=(
                parse_enum(ListingType, query.listing_type, "listing_type")
                if query.listing_type
                else None
            ),
            status=parse_enum(ListingStatus, query.status, "status") if query.status else None,
            sort_by=ListingSortField.parse(query.sort_by),
            sort_direction=SortDirection.parse(query.sort_direction),
        )
        page_request = build_page_request(self.settings, query.page_number, query.page_size)

        async with self.uow:
            page = await self.uow.listings.search(criteria, page_request)

        logger.info(
            "search_listings.completed",
            extra={
                "total_count": page.total_count,
                "page_number": page.page_number,
                "spatial": criteria.is_spatial,
            },
        )
        return PagedResult.from_page(page, ListingDTO.from_entity)

    def _check_radius(self, radius_km: float) -> None:
        if radius_km > self.settings.max_search_radius_km:
            raise InvalidArgumentError(
                "Search radius exceeds maximum",
                radius_km=radius_km,
                max_radius_km=self.settings.max_search_radius_km,
            )


class GetNearbyListingsHandler(
    ListingHandlerBase, QueryHandler[GetNearbyListingsQuery, PagedResult[ListingDTO]]
):
    """Effectively active listings within radius, nearest first."""

    async def handle(self, query: GetNearbyListingsQuery) -> PagedResult[ListingDTO]:
        if query.radius_km > self.settings.max_search_radius_km:
            raise InvalidArgumentError(
                "Search radius exceeds maximum",
                radius_km=query.radius_km,
                max_radius_km=self.settings.max_search_radius_km,
            )

        criteria = ListingSearchCriteria(
            center=Location(query.latitude, query.longitude),
            radius_km=query.radius_km,
            sort_by=ListingSortField.DISTANCE,
            sort_direction=SortDirection.ASC,
        )
        page_request = build_page_request(self.settings, query.page_number, query.page_size)

        async with self.uow:
            page = await self.uow.listings.search(criteria, page_request)
        return PagedResult.from_page(page, ListingDTO.from_entity)


class GetSellerListingsHandler(
    ListingHandlerBase, QueryHandler[GetSellerListingsQuery, PagedResult[ListingDTO]]
):
    async def handle(self, query: GetSellerListingsQuery) -> PagedResult[ListingDTO]:
        status = parse_enum(ListingStatus, query.status, "status") if query.status else None
        listing_type = (
            parse_enum(ListingType, query.listing_type, "listing_type")
            if query.listing_type
            else None
        )
        page_request = build_page_request(self.settings, query.page_number, query.page_size)

        async with self.uow:
            page = await self.uow.listings.get_seller_listings(
                UserId(query.seller_id),
                page_request,
                status=status,
                listing_type=listing_type,
            )
        return PagedResult.from_page(page, ListingDTO.from_entity)
