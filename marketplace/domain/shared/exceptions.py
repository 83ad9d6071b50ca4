"""Base domain exceptions.

Domain exceptions представляють порушення бізнес-правил.
Вони частина domain layer і не залежать від infrastructure.

Taxonomy:
    InvalidArgumentError   - malformed input (never retried)
    InvalidStateTransition - operation not valid in current status (never retried)
    AggregateNotFound      - referenced aggregate does not exist
    ConcurrencyException   - version mismatch (caller may re-fetch and retry)
    AggregateAlreadyExists - duplicate creation attempt
"""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain errors.

    Example:
        >>> raise DomainException("Listing cannot be published", listing_id=listing_id)
    """

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize domain exception.

        Args:
            message: Human-readable error message.
            **context: Additional context (listing_id, status, etc).
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """Error message with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class InvalidArgumentError(DomainException, ValueError):
    """Raised коли value object або command отримав невалідний input.

    Також ValueError, щоб код який ловить ValueError продовжував працювати.

    Example:
        >>> raise InvalidArgumentError("Amount cannot be negative", amount="-10")
    """

    pass


class AggregateNotFound(DomainException):
    """Exception raised when aggregate is not found.

    Example:
        >>> listing = await uow.listings.get_by_id(listing_id)
        >>> if listing is None:
        ...     raise AggregateNotFound("Listing not found", listing_id=listing_id)
    """

    pass


class AggregateAlreadyExists(DomainException):
    """Exception raised on duplicate creation attempt."""

    pass


class InvalidStateTransition(DomainException):
    """Exception raised for invalid state transitions.

    Example:
        >>> # COMPLETED -> EXPIRED is invalid
        >>> raise InvalidStateTransition(
        ...     "Cannot transition from completed to expired",
        ...     current_status="completed",
        ...     target_status="expired",
        ... )
    """

    pass


class ConcurrencyException(DomainException):
    """Exception raised when optimistic locking fails.

    Example:
        >>> if stored.version != listing.version:
        ...     raise ConcurrencyException(
        ...         "Listing was modified by another transaction",
        ...         expected_version=listing.version,
        ...         actual_version=stored.version,
        ...     )
    """

    pass
