"""Live comment events fanned out to subscribers."""

from datetime import datetime

from pydantic import Field

from board.domain.model.comment import Comment, utc_now
from board.domain.model.common import DomainModel
from board.domain.value import CommentId, EventChannel


class CommentEvent(DomainModel):
    """A committed comment mutation.

    Created and updated events carry the full comment; deleted events carry
    only the id, since the comment no longer exists.
    """

    channel: EventChannel
    comment_id: CommentId
    comment: Comment | None = None
    published_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def created(cls, comment: Comment) -> "CommentEvent":
        return cls(channel=EventChannel.CREATED, comment_id=comment.id, comment=comment)

    @classmethod
    def updated(cls, comment: Comment) -> "CommentEvent":
        return cls(channel=EventChannel.UPDATED, comment_id=comment.id, comment=comment)

    @classmethod
    def deleted(cls, comment_id: CommentId) -> "CommentEvent":
        return cls(channel=EventChannel.DELETED, comment_id=comment_id)
