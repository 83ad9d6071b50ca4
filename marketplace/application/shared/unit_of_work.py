"""Unit of Work pattern - manages transactions.

UnitOfWork забезпечує:
- Atomic operations (all or nothing)
- Transaction boundary
- Single commit per use case
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional, Type

from marketplace.domain.listings import ListingRepository


class UnitOfWork(ABC):
    """Abstract Unit of Work interface.

    Example (Use case uses):
        >>> async with uow:
        ...     listing = await uow.listings.get_by_id(listing_id)
        ...     listing.complete()
        ...     await uow.listings.update(listing)
        ...     await uow.commit()  # Single commit for entire operation

    Note:
        Вихід з context manager без commit() = rollback.
    """

    @property
    @abstractmethod
    def listings(self) -> ListingRepository:
        """Listing repository bound to this transaction."""
        pass

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        """Enter async context manager.

        Returns:
            Self (UnitOfWork instance).
        """
        pass

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        """Exit async context manager.

        Note:
            Якщо exc_type не None або commit() не викликано, має бути rollback().
        """
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit transaction.

        Raises:
            Exception: If commit failed.
        """
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback transaction."""
        pass
