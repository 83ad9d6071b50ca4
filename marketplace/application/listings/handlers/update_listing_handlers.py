"""Handlers для UpdateListingPrice, UpdateListingDetails та ReplaceAuctionSettings."""

from marketplace.application.shared import CommandHandler
from marketplace.domain.listings import InvalidListingDataError, Listing, Location, Money
from marketplace.domain.shared import InvalidArgumentError

from ..commands import (
    ReplaceAuctionSettingsCommand,
    UpdateListingDetailsCommand,
    UpdateListingPriceCommand,
)
from ..dtos import ListingDTO
from .base import ListingMutationHandler, build_auction_settings


class UpdateListingPriceHandler(
    ListingMutationHandler, CommandHandler[UpdateListingPriceCommand, ListingDTO]
):
    """Change current price; валюта listing не змінюється."""

    async def handle(self, command: UpdateListingPriceCommand) -> ListingDTO:
        """Update price.

        Raises:
            ListingNotFoundError: Listing does not exist.
            CurrencyMismatchError: Currency differs from listing's currency.
            ListingConcurrencyError: Version conflict.
        """

        def mutate(listing: Listing) -> None:
            currency = command.currency or listing.current_price.currency
            listing.update_price(Money(command.amount, currency))

        return await self._apply(
            command.listing_id, command.expected_version, mutate, "update_listing_price"
        )


class UpdateListingDetailsHandler(
    ListingMutationHandler, CommandHandler[UpdateListingDetailsCommand, ListingDTO]
):
    """Change title/description and/or location of a DRAFT or ACTIVE listing."""

    async def handle(self, command: UpdateListingDetailsCommand) -> ListingDTO:
        has_details = command.title is not None or command.description is not None
        has_coordinates = command.latitude is not None or command.longitude is not None

        if not has_details and not has_coordinates:
            raise InvalidArgumentError("Nothing to update", listing_id=command.listing_id)
        if has_coordinates and (command.latitude is None or command.longitude is None):
            raise InvalidArgumentError("latitude and longitude must be provided together")

        location = Location(command.latitude, command.longitude) if has_coordinates else None

        def mutate(listing: Listing) -> None:
            if has_details:
                listing.update_details(
                    command.title if command.title is not None else listing.title,
                    command.description,
                )
            if location is not None:
                listing.update_location(location)

        return await self._apply(
            command.listing_id, command.expected_version, mutate, "update_listing_details"
        )


class ReplaceAuctionSettingsHandler(
    ListingMutationHandler, CommandHandler[ReplaceAuctionSettingsCommand, ListingDTO]
):
    """Replace auction terms; duration policy як і при створенні.

    Raises:
        InvalidListingDataError: Listing is not an auction, or terms do not
            fit its shape / duration policy.
        CurrencyMismatchError: New terms use another currency.
        InvalidListingStateError: Listing is final or deleted.
    """

    async def handle(self, command: ReplaceAuctionSettingsCommand) -> ListingDTO:
        def mutate(listing: Listing) -> None:
            if not listing.is_auction:
                raise InvalidListingDataError(
                    "Only auction listings have auction settings",
                    listing_type=listing.listing_type.value,
                )
            currency = command.currency or listing.current_price.currency
            listing.replace_auction_settings(
                build_auction_settings(self.settings, command, listing.listing_type, currency)
            )

        return await self._apply(
            command.listing_id, command.expected_version, mutate, "replace_auction_settings"
        )
