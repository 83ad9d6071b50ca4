"""Lifecycle handlers: transitions, soft delete, view counter, expiry sweep."""

import logging

from marketplace.application.shared import CommandHandler
from marketplace.domain.listings import ExpiredListingSpecification, Listing

from ..commands import (
    DeleteListingCommand,
    ExpireOverdueListingsCommand,
    ListingTransition,
    RecordListingViewCommand,
    TransitionListingCommand,
)
from ..dtos import ListingDTO
from .base import ListingHandlerBase, ListingMutationHandler, parse_enum

logger = logging.getLogger(__name__)


class TransitionListingHandler(
    ListingMutationHandler, CommandHandler[TransitionListingCommand, ListingDTO]
):
    """publish | complete | expire | cancel.

    Raises:
        InvalidArgumentError: Unknown action.
        InvalidListingStateError: Transition not allowed from current status.
        ListingAlreadyExistsError: Publish while another listing of the item is active.
    """

    async def handle(self, command: TransitionListingCommand) -> ListingDTO:
        transition = parse_enum(ListingTransition, command.action, "action")

        def mutate(listing: Listing) -> None:
            if transition == ListingTransition.PUBLISH:
                listing.publish()
            elif transition == ListingTransition.COMPLETE:
                listing.complete()
            elif transition == ListingTransition.EXPIRE:
                listing.mark_expired()
            else:
                listing.cancel()

        async def no_other_active(listing: Listing) -> None:
            await self._ensure_item_not_active(listing.item_id, exclude=listing.id)

        return await self._apply(
            command.listing_id,
            command.expected_version,
            mutate,
            f"{transition.value}_listing",
            guard=no_other_active if transition == ListingTransition.PUBLISH else None,
        )


class DeleteListingHandler(ListingMutationHandler, CommandHandler[DeleteListingCommand, ListingDTO]):
    async def handle(self, command: DeleteListingCommand) -> ListingDTO:
        return await self._apply(
            command.listing_id,
            command.expected_version,
            lambda listing: listing.soft_delete(),
            "delete_listing",
        )


class RecordListingViewHandler(
    ListingMutationHandler, CommandHandler[RecordListingViewCommand, ListingDTO]
):
    async def handle(self, command: RecordListingViewCommand) -> ListingDTO:
        return await self._apply(
            command.listing_id,
            None,
            lambda listing: listing.increment_view_count(),
            "record_listing_view",
        )


class ExpireOverdueListingsHandler(
    ListingHandlerBase, CommandHandler[ExpireOverdueListingsCommand, int]
):
    """Sweep: ACTIVE listings past their deadline → EXPIRED (одна транзакція)."""

    async def handle(self, command: ExpireOverdueListingsCommand) -> int:
        """Returns number of listings marked expired."""

        async def sweep() -> list[Listing]:
            async with self.uow:
                overdue = await self.uow.listings.find(ExpiredListingSpecification(command.now))
                for listing in overdue:
                    listing.mark_expired()
                    await self.uow.listings.update(listing)
                await self.uow.commit()
            return overdue

        sweep.__name__ = "expire_overdue_listings"

        expired = await self._retrying(sweep)
        await self._publish(expired)

        logger.info("expire_overdue_listings.completed", extra={"expired_count": len(expired)})
        return len(expired)
