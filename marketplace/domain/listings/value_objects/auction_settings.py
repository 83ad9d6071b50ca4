"""AuctionSettings - sum type Forward | Reverse.

Два shapes ніколи не змішуються: ForwardAuctionSettings не має поля для
"reverse max price як стелі", ReverseAuctionSettings не має starting/reserve.
Некоректна комбінація (і starting, і reverse max) просто не виражається.
"""

from abc import abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from marketplace.domain.shared import ValueObject, validate_value_object

from ..exceptions import CurrencyMismatchError
from .enums import ListingType
from .money import Money

MINIMUM_BID_INCREMENT_PERCENTAGE = Decimal("0.05")
"""Default bid increment - 5% від starting price..."""

MINIMUM_BID_INCREMENT_FLOOR = Decimal("1.00")
"""...але не менше 1.00 в валюті аукціону."""


def _validate_duration(duration: timedelta) -> None:
    validate_value_object(
        isinstance(duration, timedelta),
        "Duration must be a timedelta",
        duration=duration,
    )
    validate_value_object(duration > timedelta(0), "Duration must be positive", duration=duration)


def _validate_money(name: str, value: object) -> None:
    validate_value_object(isinstance(value, Money), f"{name} must be Money", **{name: value})


@dataclass(frozen=True)
class AuctionSettings(ValueObject):
    """Base for auction terms. Use the factories, not the base class.

    Example:
        >>> forward = AuctionSettings.create_forward_auction(
        ...     starting_price=Money(Decimal("100"), "USD"),
        ...     reserve_price=Money(Decimal("200"), "USD"),
        ...     duration=timedelta(days=7),
        ... )
        >>> reverse = AuctionSettings.create_reverse_auction(
        ...     max_price=Money(Decimal("500"), "USD"),
        ...     duration=timedelta(days=5),
        ... )
        >>> reverse.starting_price is None
        True
    """

    @classmethod
    def create_forward_auction(
        cls,
        starting_price: Money,
        reserve_price: Money,
        duration: timedelta,
        buy_now_price: Optional[Money] = None,
        min_increment: Optional[Money] = None,
        allow_auto_bidding: bool = False,
        max_price: Optional[Money] = None,
    ) -> "ForwardAuctionSettings":
        """Build forward (rising-price) auction terms.

        Raises:
            InvalidArgumentError: If reserve < starting, buy now < starting,
                duration is not positive, or prices use different currencies.
        """
        return ForwardAuctionSettings(
            starting_price=starting_price,
            reserve_price=reserve_price,
            duration=duration,
            max_price=max_price,
            buy_now_price=buy_now_price,
            minimum_bid_increment=min_increment,
            allow_auto_bidding=allow_auto_bidding,
        )

    @classmethod
    def create_reverse_auction(
        cls,
        max_price: Money,
        duration: timedelta,
        allow_auto_bidding: bool = False,
    ) -> "ReverseAuctionSettings":
        """Build reverse (falling-price) auction terms."""
        return ReverseAuctionSettings(
            max_price=max_price,
            duration=duration,
            allow_auto_bidding=allow_auto_bidding,
        )

    @property
    @abstractmethod
    def listing_type(self) -> ListingType:
        """ListingType this shape belongs to."""
        pass

    @property
    @abstractmethod
    def initial_price(self) -> Money:
        """Price a new listing opens at (forward: starting, reverse: max)."""
        pass

    @property
    def currency(self) -> str:
        return self.initial_price.currency

    def ends_at(self, started_at: datetime) -> datetime:
        """Deadline for an auction started at `started_at`."""
        return started_at + self.duration  # type: ignore[attr-defined]


@dataclass(frozen=True)
class ForwardAuctionSettings(AuctionSettings):
    """Ціна росте від starting price; продаж якщо досягнуто reserve."""

    starting_price: Money
    reserve_price: Money
    duration: timedelta
    max_price: Optional[Money] = None
    buy_now_price: Optional[Money] = None
    minimum_bid_increment: Optional[Money] = None
    """None при створенні → max(5% starting, 1.00), округлено до центів."""

    allow_auto_bidding: bool = False

    def __post_init__(self) -> None:
        """Validate forward auction terms."""
        _validate_money("starting_price", self.starting_price)
        _validate_money("reserve_price", self.reserve_price)
        _validate_duration(self.duration)

        for name in ("max_price", "buy_now_price", "minimum_bid_increment"):
            value = getattr(self, name)
            if value is not None:
                _validate_money(name, value)

        # Всі ціни в одній валюті
        currency = self.starting_price.currency
        for price in (
            self.reserve_price,
            self.max_price,
            self.buy_now_price,
            self.minimum_bid_increment,
        ):
            if price is not None and price.currency != currency:
                raise CurrencyMismatchError(expected=currency, actual=price.currency)

        validate_value_object(
            self.reserve_price >= self.starting_price,
            "Reserve price must be greater than or equal to starting price",
            starting_price=str(self.starting_price),
            reserve_price=str(self.reserve_price),
        )

        if self.buy_now_price is not None:
            validate_value_object(
                self.buy_now_price >= self.starting_price,
                "Buy now price must be greater than or equal to starting price",
                starting_price=str(self.starting_price),
                buy_now_price=str(self.buy_now_price),
            )

        if self.max_price is not None:
            validate_value_object(
                self.max_price >= self.starting_price,
                "Max price must be greater than or equal to starting price",
                starting_price=str(self.starting_price),
                max_price=str(self.max_price),
            )

        if self.minimum_bid_increment is None:
            object.__setattr__(
                self,
                "minimum_bid_increment",
                self.default_bid_increment(self.starting_price),
            )
        else:
            validate_value_object(
                not self.minimum_bid_increment.is_zero,
                "Minimum bid increment must be positive",
                minimum_bid_increment=str(self.minimum_bid_increment),
            )

        validate_value_object(
            isinstance(self.allow_auto_bidding, bool),
            "allow_auto_bidding must be a bool",
        )

    @staticmethod
    def default_bid_increment(starting_price: Money) -> Money:
        """max(5% of starting price, 1.00), rounded to cents."""
        percentage = starting_price.amount * MINIMUM_BID_INCREMENT_PERCENTAGE
        return Money(max(percentage, MINIMUM_BID_INCREMENT_FLOOR), starting_price.currency).rounded()

    @property
    def listing_type(self) -> ListingType:
        return ListingType.FORWARD_AUCTION

    @property
    def initial_price(self) -> Money:
        return self.starting_price

    def is_reserve_met(self, amount: Money) -> bool:
        """Check if a bid of `amount` reaches the reserve."""
        return amount >= self.reserve_price

    def minimum_next_bid(self, current_bid: Optional[Money] = None) -> Money:
        """Lowest acceptable next bid.

        Args:
            current_bid: Highest bid so far (None якщо ставок ще не було).

        Returns:
            starting_price when there are no bids, else current + increment.
        """
        if current_bid is None:
            return self.starting_price
        return current_bid + self.minimum_bid_increment  # type: ignore[operator]


@dataclass(frozen=True)
class ReverseAuctionSettings(AuctionSettings):
    """Ціна падає від max price (lowest offer wins)."""

    max_price: Money
    duration: timedelta
    allow_auto_bidding: bool = False

    def __post_init__(self) -> None:
        """Validate reverse auction terms."""
        _validate_money("max_price", self.max_price)
        _validate_duration(self.duration)
        validate_value_object(
            isinstance(self.allow_auto_bidding, bool),
            "allow_auto_bidding must be a bool",
        )

    @property
    def listing_type(self) -> ListingType:
        return ListingType.REVERSE_AUCTION

    @property
    def initial_price(self) -> Money:
        return self.max_price

    @property
    def starting_price(self) -> None:
        """Reverse auctions have no starting price."""
        return None

    @property
    def reserve_price(self) -> None:
        """Reverse auctions have no reserve price."""
        return None
