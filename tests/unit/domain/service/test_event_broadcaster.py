"""Unit tests for EventBroadcaster."""

import asyncio
from uuid import uuid4

import pytest

from board.domain.model import CommentEvent
from board.domain.service import EventBroadcaster
from board.domain.value import CommentId, EventChannel
from tests.conftest import make_comment


def deleted_event() -> CommentEvent:
    return CommentEvent.deleted(CommentId(uuid4()))


class TestSubscribe:
    """Tests for subscription lifecycle."""

    def test_subscribe_defaults_to_all_channels(self):
        broadcaster = EventBroadcaster()

        subscription = broadcaster.subscribe()

        assert subscription.channels == frozenset(EventChannel)
        for channel in EventChannel:
            assert broadcaster.subscriber_count(channel) == 1

    def test_close_unsubscribes(self):
        broadcaster = EventBroadcaster()
        subscription = broadcaster.subscribe(EventChannel.CREATED)

        subscription.close()
        subscription.close()

        assert broadcaster.subscriber_count(EventChannel.CREATED) == 0

    def test_invalid_queue_size(self):
        with pytest.raises(ValueError):
            EventBroadcaster(max_queue_size=0)


class TestPublish:
    """Tests for fan-out semantics."""

    @pytest.mark.asyncio
    async def test_every_subscriber_gets_every_event_in_order(self):
        # Arrange
        broadcaster = EventBroadcaster()
        first = broadcaster.subscribe(EventChannel.DELETED)
        second = broadcaster.subscribe(EventChannel.DELETED)
        events = [deleted_event() for _ in range(3)]

        # Act
        delivered = [broadcaster.publish(event) for event in events]

        # Assert
        assert delivered == [2, 2, 2]
        for subscription in (first, second):
            received = [await subscription.get() for _ in events]
            assert received == events

    def test_publish_without_subscribers(self):
        broadcaster = EventBroadcaster()

        assert broadcaster.publish(deleted_event()) == 0

    def test_channels_are_isolated(self):
        broadcaster = EventBroadcaster()
        created = broadcaster.subscribe(EventChannel.CREATED)

        broadcaster.publish(deleted_event())
        broadcaster.publish(CommentEvent.created(make_comment()))

        assert created.pending() == 1
        assert created.get_nowait().channel == EventChannel.CREATED

    def test_late_subscriber_misses_earlier_events(self):
        broadcaster = EventBroadcaster()
        broadcaster.publish(deleted_event())

        subscription = broadcaster.subscribe()

        assert subscription.pending() == 0

    def test_slow_subscriber_drops_oldest(self):
        broadcaster = EventBroadcaster(max_queue_size=2)
        subscription = broadcaster.subscribe(EventChannel.DELETED)
        events = [deleted_event() for _ in range(3)]

        for event in events:
            broadcaster.publish(event)

        assert subscription.dropped == 1
        assert [subscription.get_nowait(), subscription.get_nowait()] == events[1:]

    @pytest.mark.asyncio
    async def test_async_iteration_and_context_manager(self):
        broadcaster = EventBroadcaster()
        event = deleted_event()

        async with broadcaster.subscribe(EventChannel.DELETED) as subscription:
            broadcaster.publish(event)
            received = await asyncio.wait_for(anext(aiter(subscription)), timeout=1)

        assert received == event
        assert broadcaster.subscriber_count(EventChannel.DELETED) == 0

    @pytest.mark.asyncio
    async def test_close_ends_iteration_waiting_in_another_task(self):
        # Arrange
        broadcaster = EventBroadcaster()
        subscription = broadcaster.subscribe(EventChannel.DELETED)
        event = deleted_event()
        received = []

        async def consume():
            async for item in subscription:
                received.append(item)

        consumer = asyncio.create_task(consume())
        broadcaster.publish(event)
        await asyncio.sleep(0)

        # Act
        subscription.close()

        # Assert
        await asyncio.wait_for(consumer, timeout=1)
        assert received == [event]

    @pytest.mark.asyncio
    async def test_get_after_close_returns_none(self):
        broadcaster = EventBroadcaster(max_queue_size=1)
        subscription = broadcaster.subscribe(EventChannel.DELETED)
        broadcaster.publish(deleted_event())

        subscription.close()

        assert await asyncio.wait_for(subscription.get(), timeout=1) is None
