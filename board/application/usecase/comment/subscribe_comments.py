"""Subscribe to live comment events use case."""

from typing import Any

from pydantic import BaseModel, Field

from board.domain.error import InvalidInputError
from board.domain.model import CommentEvent
from board.domain.service import EventBroadcaster, Subscription
from board.domain.value import EventChannel

from .item import CommentItem

# Clients may name a channel or the stream it feeds
_CHANNEL_ALIASES = {
    **{channel.value: channel for channel in EventChannel},
    **{channel.subscription_name.lower(): channel for channel in EventChannel},
}


def parse_channels(names: list[str]) -> list[EventChannel]:
    """Resolve client channel names.

    Raises:
        InvalidInputError: If a name matches no channel
    """
    channels = []
    for name in names:
        channel = _CHANNEL_ALIASES.get(name.strip().lower())
        if channel is None:
            raise InvalidInputError(f"Unknown channel: {name!r}")
        channels.append(channel)
    return channels


def event_message(event: CommentEvent) -> dict[str, Any]:
    """Client-facing message for one event.

    Created and updated events carry the comment, deleted events an object
    holding only its `id`.
    """
    if event.comment is not None:
        data: dict[str, Any] = CommentItem.from_comment(event.comment).model_dump(
            mode="json"
        )
    else:
        data = {"id": str(event.comment_id)}
    return {"event": event.channel.subscription_name, "data": data}


class SubscribeCommentsRequest(BaseModel):
    """Subscribe request."""

    channels: list[str] = Field(default_factory=list)  # Empty means all channels


class SubscribeCommentsUseCase:
    """Use case for opening a live event subscription."""

    def __init__(self, broadcaster: EventBroadcaster) -> None:
        self.broadcaster = broadcaster

    async def execute(self, request: SubscribeCommentsRequest) -> Subscription:
        """Register a subscriber; the caller must close the returned subscription.

        Raises:
            InvalidInputError: If a channel name is unknown
        """
        channels = parse_channels(request.channels)
        return self.broadcaster.subscribe(*channels)
