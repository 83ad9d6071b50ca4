"""Value objects для Listings bounded context."""

from .auction_settings import (
    AuctionSettings,
    ForwardAuctionSettings,
    ReverseAuctionSettings,
)
from .enums import ListingStatus, ListingType
from .identifiers import CategoryId, Identifier, ItemId, ListingId, SellerId, UserId
from .location import EARTH_RADIUS_KM, BoundingBox, Location
from .money import DEFAULT_CURRENCY, Money

__all__ = [
    "ListingType",
    "ListingStatus",
    "Identifier",
    "ListingId",
    "ItemId",
    "UserId",
    "SellerId",
    "CategoryId",
    "Money",
    "DEFAULT_CURRENCY",
    "Location",
    "BoundingBox",
    "EARTH_RADIUS_KM",
    "AuctionSettings",
    "ForwardAuctionSettings",
    "ReverseAuctionSettings",
]
