"""Listing domain exceptions.

Кожен клас успадковує і ListingError, і відповідну категорію з shared
taxonomy, тож application layer може ловити або "все про listings",
або "всі NotFound" незалежно від bounded context.
"""

from typing import Any

from marketplace.domain.shared import (
    AggregateAlreadyExists,
    AggregateNotFound,
    ConcurrencyException,
    DomainException,
    InvalidArgumentError,
    InvalidStateTransition,
)


class ListingError(DomainException):
    """Base exception для listing errors."""

    pass


class InvalidListingDataError(ListingError, InvalidArgumentError):
    """Listing field failed validation (title, description, price shape, etc)."""

    pass


class CurrencyMismatchError(ListingError, InvalidArgumentError):
    """Money values in different currencies were combined."""

    def __init__(self, expected: str, actual: str) -> None:
        """Initialize exception.

        Args:
            expected: Currency that was required.
            actual: Currency that was provided.
        """
        super().__init__(
            f"Currency mismatch: expected {expected}, got {actual}",
            expected=expected,
            actual=actual,
        )
        self.expected = expected
        self.actual = actual


class InvalidListingStateError(ListingError, InvalidStateTransition):
    """Operation is not allowed in the listing's current status."""

    def __init__(self, listing_id: Any, current_status: str, target_status: str) -> None:
        """Initialize exception.

        Args:
            listing_id: Listing ID.
            current_status: Current listing status.
            target_status: Requested status or operation name.
        """
        super().__init__(
            f"Listing {listing_id} cannot transition from {current_status} to {target_status}",
            listing_id=listing_id,
            current_status=current_status,
            target_status=target_status,
        )
        self.listing_id = listing_id
        self.current_status = current_status
        self.target_status = target_status


class ListingNotFoundError(ListingError, AggregateNotFound):
    """Listing not found."""

    def __init__(self, listing_id: Any) -> None:
        super().__init__(f"Listing {listing_id} not found", listing_id=listing_id)
        self.listing_id = listing_id


class ListingAlreadyExistsError(ListingError, AggregateAlreadyExists):
    """Listing with the same ID (or an active listing for the same item) exists."""

    def __init__(self, listing_id: Any, reason: str = "already exists") -> None:
        super().__init__(f"Listing {listing_id} {reason}", listing_id=listing_id)
        self.listing_id = listing_id


class ListingConcurrencyError(ListingError, ConcurrencyException):
    """Stored version differs from the caller's version token."""

    def __init__(
        self,
        listing_id: Any,
        expected_version: int,
        actual_version: int | None,
    ) -> None:
        """Initialize exception.

        Args:
            listing_id: Listing ID.
            expected_version: Version the caller based its change on.
            actual_version: Version currently stored (None якщо listing видалено).
        """
        super().__init__(
            f"Listing {listing_id} was modified concurrently",
            listing_id=listing_id,
            expected_version=expected_version,
            actual_version=actual_version,
        )
        self.listing_id = listing_id
        self.expected_version = expected_version
        self.actual_version = actual_version
