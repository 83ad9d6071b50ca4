"""Unit tests для in-process EventBus."""

from dataclasses import dataclass
from uuid import UUID, uuid4

import pytest

from marketplace.domain.listings import (
    ListingSoftDeletedEvent,
    ListingStatusChangedEvent,
)
from marketplace.domain.shared import DomainEvent
from marketplace.infrastructure.messaging import EventBus, get_event_bus, reset_event_bus


@dataclass(frozen=True)
class SampleEvent(DomainEvent):
    listing_id: UUID


@dataclass(frozen=True)
class SpecialSampleEvent(SampleEvent):
    reason: str = "special"


def status_changed(new_status: str = "cancelled") -> ListingStatusChangedEvent:
    return ListingStatusChangedEvent(
        listing_id=uuid4(), previous_status="active", new_status=new_status
    )


class TestEventBus:
    """Tests для subscribe / publish."""

    @pytest.mark.asyncio
    async def test_publish_calls_subscriber(self):
        # Arrange
        bus = EventBus()
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(ListingStatusChangedEvent, handler)
        event = status_changed()

        # Act
        await bus.publish(event)

        # Assert
        assert received == [event]

    @pytest.mark.asyncio
    async def test_publish_without_subscribers_is_noop(self):
        await EventBus().publish(status_changed())

    @pytest.mark.asyncio
    async def test_base_class_subscriber_receives_subclasses(self):
        """Test: subscribe(DomainEvent) отримує всі events."""
        bus = EventBus()
        received = []

        async def audit(event):
            received.append(type(event))

        bus.subscribe(DomainEvent, audit)

        await bus.publish(SpecialSampleEvent(listing_id=uuid4()))
        await bus.publish(status_changed())

        assert received == [SpecialSampleEvent, ListingStatusChangedEvent]

    @pytest.mark.asyncio
    async def test_specific_handlers_run_before_base_handlers(self):
        bus = EventBus()
        calls = []

        async def on_base(event):
            calls.append("base")

        async def on_special(event):
            calls.append("special")

        bus.subscribe(SampleEvent, on_base)
        bus.subscribe(SpecialSampleEvent, on_special)

        await bus.publish(SpecialSampleEvent(listing_id=uuid4()))

        assert calls == ["special", "base"]

    @pytest.mark.asyncio
    async def test_handler_subscribed_twice_via_hierarchy_runs_once(self):
        bus = EventBus()
        calls = []

        async def handler(event):
            calls.append(event)

        bus.subscribe(SampleEvent, handler)
        bus.subscribe(SpecialSampleEvent, handler)

        await bus.publish(SpecialSampleEvent(listing_id=uuid4()))

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_others(self):
        """Test: Exception в одному handler логується, інші отримують event."""
        bus = EventBus()
        received = []

        async def broken(event):
            raise RuntimeError("search index down")

        async def healthy(event):
            received.append(event)

        bus.subscribe(ListingStatusChangedEvent, broken)
        bus.subscribe(ListingStatusChangedEvent, healthy)
        event = status_changed()

        await bus.publish(event)

        assert received == [event]

    @pytest.mark.asyncio
    async def test_publish_all_preserves_order(self):
        bus = EventBus()
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(DomainEvent, handler)
        events = [
            status_changed("cancelled"),
            ListingSoftDeletedEvent(listing_id=uuid4(), deleted_at=None),
            status_changed("expired"),
        ]

        await bus.publish_all(iter(events))

        assert received == events

    @pytest.mark.asyncio
    async def test_unsubscribe(self):
        bus = EventBus()
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(ListingStatusChangedEvent, handler)
        bus.unsubscribe(ListingStatusChangedEvent, handler)

        await bus.publish(status_changed())

        assert received == []
        assert bus.get_subscribers_count(ListingStatusChangedEvent) == 0

    def test_subscribers_count_includes_base_handlers(self):
        bus = EventBus()

        async def handler(event):
            pass

        bus.subscribe(DomainEvent, handler)

        assert bus.get_subscribers_count(ListingStatusChangedEvent) == 1

    def test_clear_subscribers(self):
        bus = EventBus()

        async def handler(event):
            pass

        bus.subscribe(DomainEvent, handler)
        bus.clear_subscribers()

        assert bus.get_subscribers_count(DomainEvent) == 0


class TestEventBusSingleton:
    def test_get_event_bus_returns_same_instance(self):
        assert get_event_bus() is get_event_bus()

    def test_reset_event_bus_creates_new_instance(self):
        before = get_event_bus()

        reset_event_bus()

        assert get_event_bus() is not before
