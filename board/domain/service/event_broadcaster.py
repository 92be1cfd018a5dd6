"""In-process fan-out of live comment events.

Every live subscriber receives every event published on its channels after
it subscribed, in publish order. Nothing is buffered for subscribers that
are gone. Each subscriber owns a bounded queue; when a slow subscriber's
queue is full its oldest event is dropped, so publishing never waits.
"""

import asyncio
from collections.abc import AsyncIterator

import logfire

from board.domain.model import CommentEvent
from board.domain.value import EventChannel

from .base import Service


class Subscription:
    """One subscriber's view of one or more channels.

    Iterate it to receive events; close it (or leave its `async with`
    block) to stop receiving them. Closing also ends an iteration that is
    waiting for the next event, even from another task.
    """

    def __init__(
        self,
        broadcaster: "EventBroadcaster",
        channels: frozenset[EventChannel],
        max_queue_size: int,
    ) -> None:
        self.broadcaster = broadcaster
        self.channels = channels
        # None marks the end of the stream once close() ran
        self.queue: asyncio.Queue[CommentEvent | None] = asyncio.Queue(
            maxsize=max_queue_size
        )
        self.dropped = 0
        self.closed = False

    def offer(self, event: CommentEvent) -> None:
        """Enqueue without blocking, evicting the oldest event when full."""
        while True:
            try:
                self.queue.put_nowait(event)
                return
            except asyncio.QueueFull:
                try:
                    self.queue.get_nowait()
                    self.dropped += 1
                except asyncio.QueueEmpty:
                    pass

    async def get(self) -> CommentEvent | None:
        """Next event, or None once the subscription is closed and drained."""
        return await self.queue.get()

    def get_nowait(self) -> CommentEvent | None:
        return self.queue.get_nowait()

    def pending(self) -> int:
        return self.queue.qsize()

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self.broadcaster.unsubscribe(self)
            # Wake a reader blocked on the queue
            if self.queue.full():
                self.queue.get_nowait()
            self.queue.put_nowait(None)

    def __aiter__(self) -> AsyncIterator[CommentEvent]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[CommentEvent]:
        while not self.closed:
            event = await self.queue.get()
            if event is None:
                return
            yield event

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()


class EventBroadcaster(Service):
    """Multi-producer, multi-consumer broadcast over named channels."""

    def __init__(self, max_queue_size: int = 100) -> None:
        """Initialize event broadcaster.

        Args:
            max_queue_size: Default per-subscriber queue bound
        """
        if max_queue_size < 1:
            raise ValueError("max_queue_size must be at least 1")
        self.max_queue_size = max_queue_size
        self._subscribers: dict[EventChannel, set[Subscription]] = {
            channel: set() for channel in EventChannel
        }

    def subscribe(
        self, *channels: EventChannel, max_queue_size: int | None = None
    ) -> Subscription:
        """Start receiving events from `channels` (all channels when none given)."""
        selected = frozenset(channels) if channels else frozenset(EventChannel)
        subscription = Subscription(
            self, selected, max_queue_size or self.max_queue_size
        )
        for channel in selected:
            self._subscribers[channel].add(subscription)
        logfire.info(
            "Subscriber registered",
            channels=sorted(c.value for c in selected),
        )
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        for channel in subscription.channels:
            self._subscribers[channel].discard(subscription)
        logfire.info(
            "Subscriber removed",
            channels=sorted(c.value for c in subscription.channels),
            dropped=subscription.dropped,
        )

    def subscriber_count(self, channel: EventChannel) -> int:
        return len(self._subscribers[channel])

    def publish(self, event: CommentEvent) -> int:
        """Deliver `event` to every current subscriber of its channel.

        Never blocks and never raises.

        Returns:
            Number of subscribers the event was handed to
        """
        delivered = 0
        for subscription in list(self._subscribers[event.channel]):
            try:
                before = subscription.dropped
                subscription.offer(event)
                delivered += 1
                if subscription.dropped > before:
                    logfire.warn(
                        "Slow subscriber, dropped oldest event",
                        channel=event.channel.value,
                        dropped=subscription.dropped,
                    )
            except Exception as e:
                logfire.error(
                    "Failed to deliver event",
                    channel=event.channel.value,
                    comment_id=str(event.comment_id),
                    error=str(e),
                )
        return delivered
