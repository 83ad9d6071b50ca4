"""Unit tests для domain exception taxonomy."""

import pytest

import marketplace.domain.shared as shared
from marketplace.domain.listings import (
    ItemId,
    ListingAlreadyExistsError,
    ListingConcurrencyError,
    ListingId,
    ListingNotFoundError,
)
from marketplace.domain.shared import (
    AggregateAlreadyExists,
    AggregateNotFound,
    ConcurrencyException,
    DomainException,
    InvalidArgumentError,
)


class TestDomainException:
    def test_str_includes_context(self):
        error = DomainException("Listing cannot be published", status="completed")

        assert str(error) == "Listing cannot be published (status=completed)"
        assert error.context == {"status": "completed"}

    def test_str_without_context(self):
        assert str(DomainException("boom")) == "boom"

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            raise InvalidArgumentError("Amount cannot be negative", amount="-10")


class TestTaxonomy:
    """Кожен listing error належить рівно одній shared категорії."""

    @pytest.mark.parametrize(
        "error,category",
        [
            (ListingNotFoundError(ListingId.new()), AggregateNotFound),
            (ListingAlreadyExistsError(ListingId.new()), AggregateAlreadyExists),
            (ListingConcurrencyError(ListingId.new(), 1, 2), ConcurrencyException),
        ],
    )
    def test_listing_errors_map_to_categories(self, error, category):
        assert isinstance(error, category)
        assert isinstance(error, DomainException)

    def test_already_exists_reason(self):
        listing_id = ListingId.new()
        item_id = ItemId.new()

        error = ListingAlreadyExistsError(listing_id, reason=f"is already active for item {item_id}")

        assert error.listing_id == listing_id
        assert error.message == f"Listing {listing_id} is already active for item {item_id}"

    def test_exported_categories(self):
        """Test: Shared kernel експортує тільки категорії, які реально raise-яться."""
        suffixes = ("Exception", "Error", "Exists", "Found", "Transition")
        exported = {name for name in shared.__all__ if name.endswith(suffixes)}

        assert exported == {
            "DomainException",
            "InvalidArgumentError",
            "AggregateNotFound",
            "AggregateAlreadyExists",
            "InvalidStateTransition",
            "ConcurrencyException",
        }
