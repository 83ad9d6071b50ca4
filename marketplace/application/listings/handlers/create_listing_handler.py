"""CreateListing Handler - виставляє item на продаж."""

import logging
from typing import Optional

from marketplace.application.shared import CommandHandler
from marketplace.domain.listings import (
    AuctionSettings,
    CategoryId,
    InvalidListingDataError,
    ItemId,
    Listing,
    ListingId,
    ListingType,
    Location,
    Money,
    UserId,
)

from ..commands import CreateListingCommand
from ..dtos import ListingDTO
from .base import ListingHandlerBase, build_auction_settings, parse_enum

logger = logging.getLogger(__name__)


class CreateListingHandler(ListingHandlerBase, CommandHandler[CreateListingCommand, ListingDTO]):
    """Handler для CreateListing command.

    Flow:
    1. Map command primitives → value objects (Money, Location, AuctionSettings)
    2. Apply auction duration policy з Settings
    3. Reject if item already has an effectively active listing
    4. Add + commit, then publish ListingCreatedEvent

    Example:
        >>> handler = CreateListingHandler(uow=uow, event_bus=event_bus)
        >>> dto = await handler.handle(command)
        >>> dto.status
        'active'
    """

    async def handle(self, command: CreateListingCommand) -> ListingDTO:
        """Create listing.

        Raises:
            InvalidListingDataError: Price/auction terms do not fit listing type,
                or auction duration is outside policy.
            ListingAlreadyExistsError: Item already has an active listing.
        """
        logger.info(
            "create_listing.started",
            extra={
                "item_id": str(command.item_id),
                "seller_id": str(command.seller_id),
                "listing_type": command.listing_type,
            },
        )

        listing_type = parse_enum(ListingType, command.listing_type, "listing_type")
        currency = command.currency or self.settings.default_currency
        item_id = ItemId(command.item_id)

        price: Optional[Money] = None
        auction_settings: Optional[AuctionSettings] = None
        if listing_type.is_auction:
            if command.price is not None:
                raise InvalidListingDataError(
                    "Auction listings derive their price from auction settings",
                    listing_type=listing_type.value,
                )
            auction_settings = build_auction_settings(self.settings, command, listing_type, currency)
        elif command.price is None:
            raise InvalidListingDataError("Fixed price listings require a price")
        else:
            price = Money(command.price, currency)

        async with self.uow:
            await self._ensure_item_not_active(item_id)

            listing = Listing.create(
                item_id=item_id,
                seller_id=UserId(command.seller_id),
                category_id=CategoryId(command.category_id),
                title=command.title,
                description=command.description,
                location=Location(command.latitude, command.longitude),
                listing_type=listing_type,
                price=price,
                auction_settings=auction_settings,
                listing_id=ListingId(command.listing_id) if command.listing_id else None,
                expires_at=command.expires_at,
                as_draft=command.as_draft,
            )

            await self.uow.listings.add(listing)
            await self.uow.commit()

        await self._publish([listing])

        logger.info(
            "create_listing.completed",
            extra={
                "listing_id": str(listing.id),
                "status": listing.status.value,
                "price": str(listing.current_price),
            },
        )
        return ListingDTO.from_entity(listing)
