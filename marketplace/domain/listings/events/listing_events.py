"""Domain Events для Listing lifecycle.

Payload - тільки примітиви (UUID, str, Decimal, datetime), щоб dispatcher
міг серіалізувати event без знання domain value objects.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from marketplace.domain.shared import DomainEvent


@dataclass(frozen=True)
class ListingCreatedEvent(DomainEvent):
    """Event: Listing створений.

    Subscribers можуть:
    - Проіндексувати listing для пошуку
    - Повідомити followers продавця
    """

    listing_id: UUID
    item_id: UUID
    seller_id: UUID
    category_id: UUID
    listing_type: str
    status: str  # "active" або "draft"
    price: Decimal
    currency: str
    expires_at: Optional[datetime] = None


@dataclass(frozen=True)
class ListingPriceUpdatedEvent(DomainEvent):
    """Event: Ціна listing змінилась (валюта та сама)."""

    listing_id: UUID
    old_price: Decimal
    new_price: Decimal
    currency: str


@dataclass(frozen=True)
class ListingStatusChangedEvent(DomainEvent):
    """Event: Status listing змінився (publish / complete / expire / cancel).

    Один тип на всі переходи: subscribers фільтрують по new_status.
    """

    listing_id: UUID
    previous_status: str
    new_status: str


@dataclass(frozen=True)
class ListingDetailsUpdatedEvent(DomainEvent):
    """Event: Title або description змінились."""

    listing_id: UUID
    title: str


@dataclass(frozen=True)
class ListingLocationUpdatedEvent(DomainEvent):
    """Event: Listing переміщено (потрібна переіндексація spatial index)."""

    listing_id: UUID
    latitude: float
    longitude: float


@dataclass(frozen=True)
class ListingAuctionSettingsReplacedEvent(DomainEvent):
    """Event: Умови аукціону замінено новим AuctionSettings."""

    listing_id: UUID
    listing_type: str
    current_price: Decimal
    currency: str
    expires_at: Optional[datetime] = None


@dataclass(frozen=True)
class ListingSoftDeletedEvent(DomainEvent):
    """Event: Listing приховано (soft delete). Емітиться один раз."""

    listing_id: UUID
    deleted_at: datetime
