"""Shared plumbing для listing command/query handlers."""

import logging
from datetime import timedelta
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, Optional, Type, TypeVar
from uuid import UUID

from marketplace.application.shared import UnitOfWork, call_with_backoff
from marketplace.config import Settings, get_settings
from marketplace.domain.listings import (
    ActiveListingSpecification,
    AuctionSettings,
    InvalidListingDataError,
    ItemId,
    Listing,
    ListingAlreadyExistsError,
    ListingByItemSpecification,
    ListingConcurrencyError,
    ListingId,
    ListingNotFoundError,
    ListingType,
    Money,
)
from marketplace.domain.shared import InvalidArgumentError, PageRequest
from marketplace.infrastructure.messaging import EventBus

from ..dtos import ListingDTO

logger = logging.getLogger(__name__)

T = TypeVar("T")
TEnum = TypeVar("TEnum", bound=Enum)


def parse_enum(enum_type: Type[TEnum], raw: str, field: str) -> TEnum:
    """Parse enum value case-insensitively ("FIXED_PRICE" → ListingType.FIXED_PRICE).

    Raises:
        InvalidArgumentError: If value is unknown.
    """
    if isinstance(raw, enum_type):
        return raw
    try:
        return enum_type(str(raw).strip().lower())
    except ValueError as e:
        raise InvalidArgumentError(
            f"Unknown {field}",
            **{field: raw, "allowed": ", ".join(member.value for member in enum_type)},
        ) from e


def build_page_request(settings: Settings, page_number: int, page_size: Optional[int]) -> PageRequest:
    """PageRequest з policy: None → default size, > max → max."""
    size = settings.default_page_size if page_size is None else min(page_size, settings.max_page_size)
    return PageRequest(page_number=page_number, page_size=size)


def check_auction_duration(settings: Settings, duration: Optional[timedelta]) -> timedelta:
    """Auction duration must lie within [min_hours, max_days] policy."""
    if duration is None:
        raise InvalidListingDataError("Auction listings require a duration")

    minimum = timedelta(hours=settings.min_auction_duration_hours)
    maximum = timedelta(days=settings.max_auction_duration_days)
    if not minimum <= duration <= maximum:
        raise InvalidListingDataError(
            "Auction duration is outside the allowed range",
            duration=str(duration),
            minimum=str(minimum),
            maximum=str(maximum),
        )
    return duration


def build_auction_settings(
    settings: Settings,
    terms: Any,
    listing_type: ListingType,
    currency: str,
) -> AuctionSettings:
    """Build Forward | Reverse terms from command primitives.

    `terms` - command з полями starting_price, reserve_price, max_price,
    buy_now_price, min_increment, auction_duration, allow_auto_bidding.

    Raises:
        InvalidListingDataError: Missing or foreign prices for the shape,
            or duration outside policy.
    """
    duration = check_auction_duration(settings, terms.auction_duration)

    def money(amount):
        return Money(amount, currency) if amount is not None else None

    if listing_type == ListingType.FORWARD_AUCTION:
        if terms.starting_price is None or terms.reserve_price is None:
            raise InvalidListingDataError("Forward auctions require starting and reserve price")
        return AuctionSettings.create_forward_auction(
            starting_price=money(terms.starting_price),
            reserve_price=money(terms.reserve_price),
            duration=duration,
            buy_now_price=money(terms.buy_now_price),
            min_increment=money(terms.min_increment),
            allow_auto_bidding=terms.allow_auto_bidding,
            max_price=money(terms.max_price),
        )

    if terms.max_price is None:
        raise InvalidListingDataError("Reverse auctions require a max price")
    if (
        terms.starting_price is not None
        or terms.reserve_price is not None
        or terms.buy_now_price is not None
        or terms.min_increment is not None
    ):
        raise InvalidListingDataError("Reverse auctions accept only a max price")
    return AuctionSettings.create_reverse_auction(
        max_price=money(terms.max_price),
        duration=duration,
        allow_auto_bidding=terms.allow_auto_bidding,
    )


class ListingHandlerBase:
    """Common dependencies: Unit of Work, EventBus, Settings."""

    def __init__(
        self,
        uow: UnitOfWork,
        event_bus: EventBus,
        settings: Optional[Settings] = None,
    ) -> None:
        """Initialize handler.

        Args:
            uow: Unit of Work для transaction management.
            event_bus: Event bus для publishing domain events.
            settings: Policy settings (default: get_settings()).
        """
        self.uow = uow
        self.event_bus = event_bus
        self.settings = settings or get_settings()

    async def _retrying(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run whole use case with bounded retry on concurrency conflicts."""
        return await call_with_backoff(
            operation,
            max_retries=self.settings.concurrency_max_retries,
            base_delay=self.settings.concurrency_retry_base_delay,
            max_delay=self.settings.concurrency_retry_max_delay,
        )

    async def _publish(self, listings: Iterable[Listing]) -> None:
        """Publish outbox events (тільки після successful commit), потім clear."""
        for listing in listings:
            events = listing.get_domain_events()
            await self.event_bus.publish_all(events)
            listing.clear_domain_events()

    async def _ensure_item_not_active(
        self, item_id: ItemId, exclude: Optional[ListingId] = None
    ) -> None:
        """One effectively active listing per item. Викликати всередині uow.

        Raises:
            ListingAlreadyExistsError: Another listing of the item is active.
        """
        spec = ActiveListingSpecification() & ListingByItemSpecification(item_id)
        for other in await self.uow.listings.find(spec):
            if other.id != exclude:
                raise ListingAlreadyExistsError(
                    other.id, reason=f"is already active for item {item_id}"
                )


class ListingMutationHandler(ListingHandlerBase):
    """Load → version check → mutate → update → commit → publish."""

    async def _apply(
        self,
        listing_id: UUID,
        expected_version: Optional[int],
        mutate: Callable[[Listing], None],
        operation: str,
        guard: Optional[Callable[[Listing], Awaitable[None]]] = None,
    ) -> ListingDTO:
        """Apply `mutate` to one listing in its own transaction.

        Args:
            listing_id: Target listing.
            expected_version: Version token caller бачив; None → retry on conflict.
            mutate: Aggregate method call(s).
            operation: Name для logs.
            guard: Async check над loaded listing перед mutate (в тій самій транзакції).

        Raises:
            ListingNotFoundError: If listing does not exist.
            ListingConcurrencyError: On version mismatch (immediately when
                expected_version is given, after retries otherwise).
        """
        target = ListingId(listing_id)

        async def attempt() -> Listing:
            async with self.uow:
                listing = await self.uow.listings.get_by_id(target)
                if listing is None:
                    raise ListingNotFoundError(target)
                if expected_version is not None and listing.version != expected_version:
                    raise ListingConcurrencyError(target, expected_version, listing.version)
                if guard is not None:
                    await guard(listing)

                mutate(listing)
                await self.uow.listings.update(listing)
                await self.uow.commit()
            return listing

        attempt.__name__ = operation

        if expected_version is None:
            listing = await self._retrying(attempt)
        else:
            listing = await attempt()

        await self._publish([listing])

        logger.info(
            f"{operation}.completed",
            extra={
                "listing_id": str(listing.id),
                "status": listing.status.value,
                "version": listing.version,
            },
        )
        return ListingDTO.from_entity(listing)
