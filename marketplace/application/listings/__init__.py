"""Listings application layer - commands, queries, handlers, DTOs."""

from .commands import (
    CreateListingCommand,
    DeleteListingCommand,
    ExpireOverdueListingsCommand,
    ListingTransition,
    RecordListingViewCommand,
    ReplaceAuctionSettingsCommand,
    TransitionListingCommand,
    UpdateListingDetailsCommand,
    UpdateListingPriceCommand,
)
from .dtos import AuctionSettingsDTO, ListingDTO, PagedResult
from .handlers import (
    CreateListingHandler,
    DeleteListingHandler,
    ExpireOverdueListingsHandler,
    GetListingHandler,
    GetNearbyListingsHandler,
    GetSellerListingsHandler,
    RecordListingViewHandler,
    ReplaceAuctionSettingsHandler,
    SearchListingsHandler,
    TransitionListingHandler,
    UpdateListingDetailsHandler,
    UpdateListingPriceHandler,
)
from .queries import (
    GetListingQuery,
    GetNearbyListingsQuery,
    GetSellerListingsQuery,
    SearchListingsQuery,
)

__all__ = [
    # Commands
    "CreateListingCommand",
    "UpdateListingPriceCommand",
    "UpdateListingDetailsCommand",
    "ReplaceAuctionSettingsCommand",
    "TransitionListingCommand",
    "ListingTransition",
    "DeleteListingCommand",
    "RecordListingViewCommand",
    "ExpireOverdueListingsCommand",
    # Queries
    "GetListingQuery",
    "SearchListingsQuery",
    "GetNearbyListingsQuery",
    "GetSellerListingsQuery",
    # DTOs
    "ListingDTO",
    "AuctionSettingsDTO",
    "PagedResult",
    # Handlers
    "CreateListingHandler",
    "UpdateListingPriceHandler",
    "UpdateListingDetailsHandler",
    "ReplaceAuctionSettingsHandler",
    "TransitionListingHandler",
    "DeleteListingHandler",
    "RecordListingViewHandler",
    "ExpireOverdueListingsHandler",
    "GetListingHandler",
    "SearchListingsHandler",
    "GetNearbyListingsHandler",
    "GetSellerListingsHandler",
]
