"""Listing commands (write side)."""

from .create_listing import CreateListingCommand
from .lifecycle import (
    DeleteListingCommand,
    ExpireOverdueListingsCommand,
    ListingTransition,
    RecordListingViewCommand,
    TransitionListingCommand,
)
from .update_listing import (
    ReplaceAuctionSettingsCommand,
    UpdateListingDetailsCommand,
    UpdateListingPriceCommand,
)

__all__ = [
    "CreateListingCommand",
    "UpdateListingPriceCommand",
    "UpdateListingDetailsCommand",
    "ReplaceAuctionSettingsCommand",
    "TransitionListingCommand",
    "ListingTransition",
    "DeleteListingCommand",
    "RecordListingViewCommand",
    "ExpireOverdueListingsCommand",
]
