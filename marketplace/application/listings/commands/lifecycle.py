"""Lifecycle commands: status transitions, soft delete, views, expiry sweep."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from marketplace.application.shared import Command


class ListingTransition(str, Enum):
    """Status transitions exposed to callers."""

    PUBLISH = "publish"
    COMPLETE = "complete"
    EXPIRE = "expire"
    CANCEL = "cancel"


@dataclass(frozen=True)
class TransitionListingCommand(Command):
    """Move listing through its lifecycle.

    Example:
        >>> await handler.handle(TransitionListingCommand(listing_id, "cancel"))
    """

    listing_id: UUID
    action: str
    """publish | complete | expire | cancel."""

    expected_version: Optional[int] = None


@dataclass(frozen=True)
class DeleteListingCommand(Command):
    """Soft delete (idempotent)."""

    listing_id: UUID
    expected_version: Optional[int] = None


@dataclass(frozen=True)
class RecordListingViewCommand(Command):
    listing_id: UUID


@dataclass(frozen=True)
class ExpireOverdueListingsCommand(Command):
    """Mark every ACTIVE listing with expires_at <= now as EXPIRED.

    Зазвичай запускається periodic job; `now` фіксується для тестів.
    """

    now: Optional[datetime] = None
