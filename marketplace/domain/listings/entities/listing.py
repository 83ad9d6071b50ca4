"""Listing Aggregate Root - оголошення на marketplace.

Listing об'єднує item, продавця, локацію, категорію і умови продажу
(fixed price або auction). Всі зміни тільки через методи aggregate:
кожен метод перевіряє status, штампує updated_at і додає domain event.
"""

from datetime import datetime, timezone
from typing import Optional

from marketplace.domain.shared import INITIAL_VERSION, AggregateRoot

from ..events import (
    ListingAuctionSettingsReplacedEvent,
    ListingCreatedEvent,
    ListingDetailsUpdatedEvent,
    ListingLocationUpdatedEvent,
    ListingPriceUpdatedEvent,
    ListingSoftDeletedEvent,
    ListingStatusChangedEvent,
)
from ..exceptions import (
    CurrencyMismatchError,
    InvalidListingDataError,
    InvalidListingStateError,
)
from ..value_objects import (
    AuctionSettings,
    CategoryId,
    ForwardAuctionSettings,
    ItemId,
    ListingId,
    ListingStatus,
    ListingType,
    Location,
    Money,
    ReverseAuctionSettings,
    UserId,
)

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 5000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Listing(AggregateRoot[ListingId]):
    """Listing Aggregate Root.

    Правила:
    - AuctionSettings є тоді і тільки тоді, коли listing_type - auction,
      і shape (forward/reverse) відповідає типу
    - Валюта current_price фіксується при створенні
    - DRAFT → ACTIVE → COMPLETED | EXPIRED | CANCELLED; DRAFT → CANCELLED
    - Soft delete - окремий flag (deleted_at), status не змінює
    - Effectively active = ACTIVE і не видалений і не прострочений

    Example:
        >>> listing = Listing.create_fixed_price_listing(
        ...     item_id=ItemId.new(),
        ...     seller_id=UserId.new(),
        ...     title="Road bike",
        ...     description="Carbon frame, 54cm",
        ...     location=Location(50.45, 30.52),
        ...     category_id=CategoryId.new(),
        ...     price=Money(Decimal("450"), "USD"),
        ... )
        >>> listing.update_price(Money(Decimal("420"), "USD"))
        >>> await uow.listings.add(listing)
        >>> await uow.commit()
        >>> await event_bus.publish_all(listing.get_domain_events())
        >>> listing.clear_domain_events()
    """

    def __init__(
        self,
        *,
        id: ListingId,
        item_id: ItemId,
        seller_id: UserId,
        title: str,
        description: str,
        location: Location,
        category_id: CategoryId,
        listing_type: ListingType,
        status: ListingStatus,
        current_price: Money,
        created_at: datetime,
        updated_at: datetime,
        auction_settings: Optional[AuctionSettings] = None,
        expires_at: Optional[datetime] = None,
        completed_at: Optional[datetime] = None,
        deleted_at: Optional[datetime] = None,
        view_count: int = 0,
        version: int = INITIAL_VERSION,
    ) -> None:
        """Reconstitute listing from its full state.

        Новий listing створюй через `create` / `create_*_listing`: тільки
        factories емітять ListingCreatedEvent. Конструктор використовують
        storage adapters для відновлення збереженого стану.

        Raises:
            InvalidListingDataError: If any invariant is violated.
        """
        super().__init__(id, version)

        self._validate_types(
            id=id,
            item_id=item_id,
            seller_id=seller_id,
            location=location,
            category_id=category_id,
            listing_type=listing_type,
            status=status,
            current_price=current_price,
        )
        self._validate_auction_shape(listing_type, auction_settings, current_price)
        for name, value in (
            ("created_at", created_at),
            ("updated_at", updated_at),
            ("expires_at", expires_at),
            ("completed_at", completed_at),
            ("deleted_at", deleted_at),
        ):
            self._validate_timestamp(name, value, required=name in ("created_at", "updated_at"))

        if not isinstance(view_count, int) or isinstance(view_count, bool) or view_count < 0:
            raise InvalidListingDataError("View count cannot be negative", view_count=view_count)

        self._item_id = item_id
        self._seller_id = seller_id
        self._title = self._validate_title(title)
        self._description = self._validate_description(description)
        self._location = location
        self._category_id = category_id
        self._listing_type = listing_type
        self._status = status
        self._current_price = current_price
        self._auction_settings = auction_settings

        # Timestamps (UTC, timezone-aware)
        self._created_at = created_at
        self._updated_at = updated_at
        self._expires_at = expires_at
        self._completed_at = completed_at
        self._deleted_at = deleted_at

        self._view_count = view_count

    # ==================== FACTORIES ====================

    @classmethod
    def create(
        cls,
        *,
        item_id: ItemId,
        seller_id: UserId,
        title: str,
        location: Location,
        category_id: CategoryId,
        listing_type: ListingType,
        description: Optional[str] = "",
        price: Optional[Money] = None,
        auction_settings: Optional[AuctionSettings] = None,
        listing_id: Optional[ListingId] = None,
        expires_at: Optional[datetime] = None,
        as_draft: bool = False,
        created_at: Optional[datetime] = None,
    ) -> "Listing":
        """Factory method для створення нового listing.

        Args:
            item_id: Item що продається.
            seller_id: Продавець.
            title: Назва (1..200 символів).
            location: Де знаходиться item.
            category_id: Категорія.
            listing_type: FIXED_PRICE, FORWARD_AUCTION, REVERSE_AUCTION.
            description: Опис (до 5000 символів, може бути порожнім).
            price: Ціна для FIXED_PRICE. Для auctions не передається:
                current price = starting price (forward) або max price (reverse).
            auction_settings: Обов'язково для auctions, заборонено для FIXED_PRICE.
            listing_id: ID (генерується якщо None).
            expires_at: Deadline. Для auctions за замовчуванням created_at + duration.
            as_draft: Створити в DRAFT замість ACTIVE.
            created_at: Час створення (default: now, UTC).

        Returns:
            Listing в ACTIVE (або DRAFT) status з ListingCreatedEvent.

        Raises:
            InvalidListingDataError: If price/settings do not match listing type.
            InvalidArgumentError: If any field fails validation.
        """
        now = created_at or _utcnow()
        cls._validate_timestamp("created_at", now, required=True)

        if not isinstance(listing_type, ListingType):
            raise InvalidListingDataError("Unknown listing type", listing_type=listing_type)

        if listing_type.is_auction:
            if auction_settings is None:
                raise InvalidListingDataError(
                    "Auction listings require auction settings",
                    listing_type=listing_type.value,
                )
            if price is not None:
                raise InvalidListingDataError(
                    "Auction listings derive their price from auction settings",
                    listing_type=listing_type.value,
                )
            current_price = auction_settings.initial_price
        else:
            if auction_settings is not None:
                raise InvalidListingDataError(
                    "Fixed price listings cannot have auction settings",
                    listing_type=listing_type.value,
                )
            if price is None:
                raise InvalidListingDataError("Fixed price listings require a price")
            current_price = price

        if expires_at is not None:
            cls._validate_timestamp("expires_at", expires_at)
            if expires_at <= now:
                raise InvalidListingDataError(
                    "Expiry must be after creation time",
                    expires_at=expires_at.isoformat(),
                )
        elif auction_settings is not None and not as_draft:
            expires_at = auction_settings.ends_at(now)

        listing = cls(
            id=listing_id or ListingId.new(),
            item_id=item_id,
            seller_id=seller_id,
            title=title,
            description=description,
            location=location,
            category_id=category_id,
            listing_type=listing_type,
            status=ListingStatus.DRAFT if as_draft else ListingStatus.ACTIVE,
            current_price=current_price,
            auction_settings=auction_settings,
            created_at=now,
            updated_at=now,
            expires_at=expires_at,
        )

        listing.add_domain_event(
            ListingCreatedEvent(
                listing_id=listing.id.value,
                item_id=item_id.value,
                seller_id=seller_id.value,
                category_id=category_id.value,
                listing_type=listing_type.value,
                status=listing.status.value,
                price=current_price.amount,
                currency=current_price.currency,
                expires_at=listing.expires_at,
            )
        )
        return listing

    @classmethod
    def create_fixed_price_listing(
        cls,
        *,
        item_id: ItemId,
        seller_id: UserId,
        title: str,
        location: Location,
        category_id: CategoryId,
        price: Money,
        description: Optional[str] = "",
        **options,
    ) -> "Listing":
        """Fixed price listing (купівля одразу)."""
        return cls.create(
            item_id=item_id,
            seller_id=seller_id,
            title=title,
            description=description,
            location=location,
            category_id=category_id,
            listing_type=ListingType.FIXED_PRICE,
            price=price,
            **options,
        )

    @classmethod
    def create_forward_auction_listing(
        cls,
        *,
        item_id: ItemId,
        seller_id: UserId,
        title: str,
        location: Location,
        category_id: CategoryId,
        auction_settings: ForwardAuctionSettings,
        description: Optional[str] = "",
        **options,
    ) -> "Listing":
        """Forward auction listing (current price = starting price)."""
        return cls.create(
            item_id=item_id,
            seller_id=seller_id,
            title=title,
            description=description,
            location=location,
            category_id=category_id,
            listing_type=ListingType.FORWARD_AUCTION,
            auction_settings=auction_settings,
            **options,
        )

    @classmethod
    def create_reverse_auction_listing(
        cls,
        *,
        item_id: ItemId,
        seller_id: UserId,
        title: str,
        location: Location,
        category_id: CategoryId,
        auction_settings: ReverseAuctionSettings,
        description: Optional[str] = "",
        **options,
    ) -> "Listing":
        """Reverse auction listing (current price = max price)."""
        return cls.create(
            item_id=item_id,
            seller_id=seller_id,
            title=title,
            description=description,
            location=location,
            category_id=category_id,
            listing_type=ListingType.REVERSE_AUCTION,
            auction_settings=auction_settings,
            **options,
        )

    # ==================== STATE ====================

    @property
    def item_id(self) -> ItemId:
        return self._item_id

    @property
    def seller_id(self) -> UserId:
        return self._seller_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def location(self) -> Location:
        return self._location

    @property
    def category_id(self) -> CategoryId:
        return self._category_id

    @property
    def listing_type(self) -> ListingType:
        return self._listing_type

    @property
    def status(self) -> ListingStatus:
        return self._status

    @property
    def current_price(self) -> Money:
        return self._current_price

    @property
    def auction_settings(self) -> Optional[AuctionSettings]:
        return self._auction_settings

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def expires_at(self) -> Optional[datetime]:
        return self._expires_at

    @property
    def completed_at(self) -> Optional[datetime]:
        return self._completed_at

    @property
    def deleted_at(self) -> Optional[datetime]:
        return self._deleted_at

    @property
    def view_count(self) -> int:
        return self._view_count

    @property
    def is_deleted(self) -> bool:
        """Derived from deleted_at; never stored."""
        return self._deleted_at is not None

    @property
    def is_auction(self) -> bool:
        return self._listing_type.is_auction

    def is_effectively_active(self, now: Optional[datetime] = None) -> bool:
        """ACTIVE, not deleted, and not past expires_at.

        Args:
            now: Reference time (default: now, UTC).
        """
        now = now or _utcnow()
        return (
            self._status == ListingStatus.ACTIVE
            and not self.is_deleted
            and (self._expires_at is None or self._expires_at > now)
        )

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        """ACTIVE with expires_at already reached (candidate for mark_expired)."""
        now = now or _utcnow()
        return (
            self._status == ListingStatus.ACTIVE
            and self._expires_at is not None
            and self._expires_at <= now
        )

    # ==================== PRICE ====================

    def update_price(self, new_price: Money) -> None:
        """Change current price; currency must stay the same.

        Args:
            new_price: Нова ціна.

        Raises:
            InvalidArgumentError: If new_price is not Money.
            CurrencyMismatchError: If currency differs from current price.
        """
        if not isinstance(new_price, Money):
            raise InvalidListingDataError("Price must be Money", price=new_price)
        if new_price.currency != self._current_price.currency:
            raise CurrencyMismatchError(
                expected=self._current_price.currency,
                actual=new_price.currency,
            )

        old_price = self._current_price
        self._current_price = new_price
        self._touch()

        self.add_domain_event(
            ListingPriceUpdatedEvent(
                listing_id=self.id.value,
                old_price=old_price.amount,
                new_price=new_price.amount,
                currency=new_price.currency,
            )
        )

    # ==================== LIFECYCLE ====================

    def publish(self) -> None:
        """DRAFT → ACTIVE.

        Auction без expires_at отримує deadline = now + duration.

        Raises:
            InvalidListingStateError: If listing is not DRAFT.
            InvalidListingDataError: If the explicit expires_at has already passed.
        """
        if self._status == ListingStatus.DRAFT and self._expires_at is not None:
            if self._expires_at <= _utcnow():
                raise InvalidListingDataError(
                    "Cannot publish a listing whose expiry has already passed",
                    expires_at=self._expires_at.isoformat(),
                )
        self._transition_to(ListingStatus.ACTIVE)
        if self._auction_settings is not None and self._expires_at is None:
            self._expires_at = self._auction_settings.ends_at(self._updated_at)

    def mark_expired(self) -> None:
        """ACTIVE → EXPIRED.

        Raises:
            InvalidListingStateError: If listing is not ACTIVE.
        """
        self._transition_to(ListingStatus.EXPIRED)

    def complete(self) -> None:
        """ACTIVE → COMPLETED (продано / аукціон виграно).

        Raises:
            InvalidListingStateError: If listing is not ACTIVE.
        """
        self._transition_to(ListingStatus.COMPLETED)
        self._completed_at = self._updated_at

    def cancel(self) -> None:
        """DRAFT | ACTIVE → CANCELLED.

        Raises:
            InvalidListingStateError: If listing is already final.
        """
        self._transition_to(ListingStatus.CANCELLED)

    def soft_delete(self) -> None:
        """Hide listing. Idempotent: повторний виклик нічого не змінює.

        Status не змінюється; listing просто перестає бути effectively active.
        """
        if self.is_deleted:
            return

        self._touch()
        self._deleted_at = self._updated_at

        self.add_domain_event(
            ListingSoftDeletedEvent(listing_id=self.id.value, deleted_at=self._deleted_at)
        )

    def increment_view_count(self) -> None:
        """view_count += 1. Не змінює updated_at і не емітить event."""
        self._view_count += 1

    # ==================== CONTENT ====================

    def update_details(self, title: str, description: Optional[str] = None) -> None:
        """Change title (and description if given).

        Raises:
            InvalidListingStateError: If listing is final or deleted.
            InvalidListingDataError: If title/description fail validation.
        """
        self._ensure_editable("update_details")

        new_title = self._validate_title(title)
        new_description = (
            self._description if description is None else self._validate_description(description)
        )

        self._title = new_title
        self._description = new_description
        self._touch()

        self.add_domain_event(ListingDetailsUpdatedEvent(listing_id=self.id.value, title=new_title))

    def update_location(self, location: Location) -> None:
        """Move listing to a new location.

        Raises:
            InvalidListingStateError: If listing is final or deleted.
        """
        self._ensure_editable("update_location")
        if not isinstance(location, Location):
            raise InvalidListingDataError("Location is required", location=location)

        self._location = location
        self._touch()

        self.add_domain_event(
            ListingLocationUpdatedEvent(
                listing_id=self.id.value,
                latitude=location.latitude,
                longitude=location.longitude,
            )
        )

    def replace_auction_settings(self, auction_settings: AuctionSettings) -> None:
        """Replace auction terms with a new settings value.

        Current price скидається на initial price нових умов. ACTIVE listing
        отримує новий deadline (now + duration). DRAFT зберігає явно заданий
        expires_at; без нього deadline рахується при publish.

        Raises:
            InvalidListingStateError: If listing is final or deleted.
            InvalidListingDataError: If listing is not an auction or shape differs.
            CurrencyMismatchError: If new terms use another currency.
        """
        self._ensure_editable("replace_auction_settings")

        if not self.is_auction:
            raise InvalidListingDataError(
                "Only auction listings have auction settings",
                listing_type=self._listing_type.value,
            )
        self._validate_auction_shape(self._listing_type, auction_settings, None)
        if auction_settings.currency != self._current_price.currency:
            raise CurrencyMismatchError(
                expected=self._current_price.currency,
                actual=auction_settings.currency,
            )

        self._auction_settings = auction_settings
        self._current_price = auction_settings.initial_price
        self._touch()

        if self._status == ListingStatus.ACTIVE:
            self._expires_at = auction_settings.ends_at(self._updated_at)

        self.add_domain_event(
            ListingAuctionSettingsReplacedEvent(
                listing_id=self.id.value,
                listing_type=self._listing_type.value,
                current_price=self._current_price.amount,
                currency=self._current_price.currency,
                expires_at=self._expires_at,
            )
        )

    # ==================== INTERNALS ====================

    def _transition_to(self, target: ListingStatus) -> None:
        if not self._status.can_transition_to(target):
            raise InvalidListingStateError(
                listing_id=self.id,
                current_status=self._status.value,
                target_status=target.value,
            )

        previous = self._status
        self._status = target
        self._touch()

        self.add_domain_event(
            ListingStatusChangedEvent(
                listing_id=self.id.value,
                previous_status=previous.value,
                new_status=target.value,
            )
        )

    def _ensure_editable(self, operation: str) -> None:
        if self.is_deleted or not self._status.is_editable():
            raise InvalidListingStateError(
                listing_id=self.id,
                current_status="deleted" if self.is_deleted else self._status.value,
                target_status=operation,
            )

    def _touch(self) -> None:
        # updated_at ніколи не йде назад, навіть якщо годинник менший за created_at
        self._updated_at = max(_utcnow(), self._updated_at)

    @staticmethod
    def _validate_title(title: str) -> str:
        """Validate title.

        Raises:
            InvalidListingDataError: If title is blank or too long.
        """
        if not isinstance(title, str) or not title.strip():
            raise InvalidListingDataError("Title cannot be empty")
        title = title.strip()
        if len(title) > MAX_TITLE_LENGTH:
            raise InvalidListingDataError(
                f"Title cannot exceed {MAX_TITLE_LENGTH} characters",
                length=len(title),
            )
        return title

    @staticmethod
    def _validate_description(description: Optional[str]) -> str:
        if description is None:
            return ""
        if not isinstance(description, str):
            raise InvalidListingDataError("Description must be a string")
        description = description.strip()
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise InvalidListingDataError(
                f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters",
                length=len(description),
            )
        return description

    @staticmethod
    def _validate_timestamp(name: str, value: Optional[datetime], required: bool = False) -> None:
        if value is None:
            if required:
                raise InvalidListingDataError(f"{name} is required")
            return
        if not isinstance(value, datetime) or value.tzinfo is None:
            raise InvalidListingDataError(f"{name} must be a timezone-aware datetime", **{name: value})

    @staticmethod
    def _validate_types(**fields: object) -> None:
        expected = {
            "id": ListingId,
            "item_id": ItemId,
            "seller_id": UserId,
            "location": Location,
            "category_id": CategoryId,
            "listing_type": ListingType,
            "status": ListingStatus,
            "current_price": Money,
        }
        for name, value in fields.items():
            if not isinstance(value, expected[name]):
                raise InvalidListingDataError(
                    f"{name} must be {expected[name].__name__}",
                    **{name: value},
                )

    @staticmethod
    def _validate_auction_shape(
        listing_type: ListingType,
        auction_settings: Optional[AuctionSettings],
        current_price: Optional[Money],
    ) -> None:
        """Settings present iff auction, and shape matches listing type."""
        if not listing_type.is_auction:
            if auction_settings is not None:
                raise InvalidListingDataError(
                    "Fixed price listings cannot have auction settings",
                    listing_type=listing_type.value,
                )
            return

        if not isinstance(auction_settings, AuctionSettings):
            raise InvalidListingDataError(
                "Auction listings require auction settings",
                listing_type=listing_type.value,
            )
        if auction_settings.listing_type != listing_type:
            raise InvalidListingDataError(
                "Auction settings shape does not match listing type",
                listing_type=listing_type.value,
                settings_type=auction_settings.listing_type.value,
            )
        if current_price is not None and current_price.currency != auction_settings.currency:
            raise CurrencyMismatchError(
                expected=auction_settings.currency,
                actual=current_price.currency,
            )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"Listing(id={self.id}, type={self._listing_type.value}, "
            f"status={self._status.value}, price={self._current_price}, "
            f"deleted={self.is_deleted})"
        )
