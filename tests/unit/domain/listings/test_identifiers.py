"""Unit tests для typed identifiers."""

from uuid import UUID, uuid4

import pytest

from marketplace.domain.listings import CategoryId, ItemId, ListingId, SellerId, UserId
from marketplace.domain.shared import InvalidArgumentError


class TestIdentifiers:
    def test_new_generates_distinct_ids(self):
        assert ListingId.new() != ListingId.new()

    def test_from_string_round_trip(self):
        raw = str(uuid4())

        listing_id = ListingId.from_string(raw)

        assert str(listing_id) == raw
        assert listing_id.value == UUID(raw)

    @pytest.mark.parametrize("raw", ["", "not-a-uuid", "1234"])
    def test_from_string_invalid_fails(self, raw):
        with pytest.raises(InvalidArgumentError):
            ListingId.from_string(raw)

    def test_nil_uuid_is_rejected(self):
        """Test: 00000000-0000-... не є валідним ID."""
        with pytest.raises(InvalidArgumentError):
            ItemId(UUID(int=0))

    def test_must_wrap_uuid(self):
        with pytest.raises(InvalidArgumentError):
            CategoryId("abc")

    def test_different_id_types_are_not_equal(self):
        """Test: ListingId(u) != ItemId(u)."""
        value = uuid4()

        assert ListingId(value) != ItemId(value)

    def test_seller_id_is_user_id(self):
        assert SellerId is UserId

    def test_ids_are_hashable(self):
        value = uuid4()

        assert {ListingId(value), ListingId(value)} == {ListingId(value)}
