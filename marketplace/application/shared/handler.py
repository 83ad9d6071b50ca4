"""Base Handler classes для Commands та Queries.

Handler - orchestrates domain logic для виконання use case.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .command import Command
from .query import Query

TCommand = TypeVar("TCommand", bound=Command)
TQuery = TypeVar("TQuery", bound=Query)
TResult = TypeVar("TResult")


class CommandHandler(ABC, Generic[TCommand, TResult]):
    """Base class для command handlers.

    Command Handler відповідає за:
    - Load aggregate через Unit of Work
    - Execute domain logic (aggregate methods)
    - Commit
    - Publish domain events (тільки після successful commit)

    Example:
        >>> class CancelListingHandler(CommandHandler[CancelListingCommand, ListingDTO]):
        ...     async def handle(self, command: CancelListingCommand) -> ListingDTO:
        ...         async with self.uow:
        ...             listing = await self.uow.listings.get_by_id(command.listing_id)
        ...             listing.cancel()
        ...             await self.uow.listings.update(listing)
        ...             await self.uow.commit()
        ...
        ...         await self.event_bus.publish_all(listing.get_domain_events())
        ...         listing.clear_domain_events()
        ...         return ListingDTO.from_entity(listing)
    """

    @abstractmethod
    async def handle(self, command: TCommand) -> TResult:
        """Handle command and return result.

        Args:
            command: Command to handle.

        Returns:
            Result of command execution.

        Raises:
            DomainException: If business rule violated.
        """
        pass


class QueryHandler(ABC, Generic[TQuery, TResult]):
    """Base class для query handlers.

    Query Handler відповідає за:
    - Fetch data з repository
    - Transform to DTOs
    - Apply filters, sorting, pagination
    - NO side effects (read-only)
    """

    @abstractmethod
    async def handle(self, query: TQuery) -> TResult:
        """Handle query and return result.

        Note:
            Queries MUST NOT have side effects.
        """
        pass
