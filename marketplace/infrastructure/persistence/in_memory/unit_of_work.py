"""In-memory Unit of Work implementation."""

import logging
from types import TracebackType
from typing import Optional, Type

from marketplace.application.shared import UnitOfWork
from marketplace.domain.listings import (
    Listing,
    ListingAlreadyExistsError,
    ListingConcurrencyError,
    ListingId,
    ListingRepository,
)

from .listing_repository import InMemoryListingRepository

logger = logging.getLogger(__name__)


class InMemoryListingStore:
    """Committed state shared by all units of work of one application.

    Rows - detached snapshots; запис завжди замінює значення в dict,
    ніколи не мутує snapshot на місці.
    """

    def __init__(self) -> None:
        self.rows: dict[ListingId, Listing] = {}


class InMemoryUnitOfWork(UnitOfWork):
    """In-memory implementation of Unit of Work pattern.

    Відповідальності:
    - Кожна транзакція працює з власною копією rows
    - commit() застосовує зміни до store, якщо ніхто інший не змінив ті
      самі listings з початку транзакції (інакше ListingConcurrencyError)
    - Exception або вихід без commit → rollback

    Example:
        >>> store = InMemoryListingStore()
        >>> uow = InMemoryUnitOfWork(store)
        >>> async with uow:
        ...     await uow.listings.add(listing)
        ...     await uow.commit()
    """

    def __init__(self, store: Optional[InMemoryListingStore] = None) -> None:
        """Initialize Unit of Work.

        Args:
            store: Committed state (new empty store if None).
        """
        self._store = store or InMemoryListingStore()
        self._base: dict[ListingId, Listing] = {}
        self._working: dict[ListingId, Listing] = {}
        self._listings: Optional[InMemoryListingRepository] = None

    @property
    def store(self) -> InMemoryListingStore:
        return self._store

    @property
    def listings(self) -> ListingRepository:
        if self._listings is None:
            raise RuntimeError("Unit of Work not started (use async with)")
        return self._listings

    async def __aenter__(self) -> "InMemoryUnitOfWork":
        """Begin transaction: snapshot committed rows."""
        self._begin()
        logger.debug("unit_of_work.started")
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        """Exit: rollback on exception or when commit() was not called."""
        try:
            if exc_type is not None:
                await self.rollback()
                logger.warning(
                    "unit_of_work.rolled_back",
                    extra={"exception_type": exc_type.__name__},
                )
            elif self._has_changes():
                await self.rollback()
                logger.warning("unit_of_work.rolled_back", extra={"reason": "not_committed"})
        finally:
            self._listings = None
            self._base = {}
            self._working = {}
            logger.debug("unit_of_work.closed")

    async def commit(self) -> None:
        """Apply changes to the store atomically.

        Raises:
            ListingConcurrencyError: If another transaction changed the same listing.
            ListingAlreadyExistsError: If another transaction added the same ID.
        """
        if self._listings is None:
            raise RuntimeError("Unit of Work not started (use async with)")

        changed = self._changed_ids()
        rows = self._store.rows

        # Перевіряємо все до першого запису: або всі зміни, або жодної
        for listing_id in changed:
            base = self._base.get(listing_id)
            current = rows.get(listing_id)
            if current is base:
                continue
            if base is None:
                raise ListingAlreadyExistsError(listing_id)
            raise ListingConcurrencyError(
                listing_id,
                base.version,
                current.version if current is not None else None,
            )

        for listing_id in changed:
            if listing_id in self._working:
                rows[listing_id] = self._working[listing_id]
            else:
                rows.pop(listing_id, None)

        self._begin()
        logger.debug("unit_of_work.committed", extra={"changes": len(changed)})

    async def rollback(self) -> None:
        """Discard uncommitted changes."""
        if self._listings is None:
            raise RuntimeError("Unit of Work not started (use async with)")
        self._working.clear()
        self._working.update(self._base)

    def _begin(self) -> None:
        self._base = dict(self._store.rows)
        self._working = dict(self._base)
        self._listings = InMemoryListingRepository(self._working)

    def _changed_ids(self) -> list[ListingId]:
        ids = set(self._base) | set(self._working)
        return [
            listing_id
            for listing_id in ids
            if self._working.get(listing_id) is not self._base.get(listing_id)
        ]

    def _has_changes(self) -> bool:
        return bool(self._changed_ids())
