"""Listing command and query handlers."""

from .create_listing_handler import CreateListingHandler
from .lifecycle_handlers import (
    DeleteListingHandler,
    ExpireOverdueListingsHandler,
    RecordListingViewHandler,
    TransitionListingHandler,
)
from .listing_query_handlers import (
    GetListingHandler,
    GetNearbyListingsHandler,
    GetSellerListingsHandler,
    SearchListingsHandler,
)
from .update_listing_handlers import (
    ReplaceAuctionSettingsHandler,
    UpdateListingDetailsHandler,
    UpdateListingPriceHandler,
)

__all__ = [
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
