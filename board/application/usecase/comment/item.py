"""Comment representations shared by the comment use cases."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from board.domain.error import InvalidInputError
from board.domain.model import Attachment, Comment
from board.domain.value import CommentId


class AttachmentItem(BaseModel):
    """Attachment item in response."""

    kind: str
    url: str
    original_name: str | None
    content_type: str | None
    size: int | None

    @classmethod
    def from_attachment(cls, attachment: Attachment) -> "AttachmentItem":
        return cls(
            kind=attachment.kind.value,
            url=attachment.url,
            original_name=attachment.original_name,
            content_type=attachment.content_type,
            size=attachment.size,
        )


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    author_id: str
    text: str | None
    parent_id: str | None
    attachments: list[AttachmentItem]
    children: list[str]  # IDs of direct replies, oldest first
    created_at: datetime
    updated_at: datetime
    version: int

    @classmethod
    def from_comment(
        cls, comment: Comment, children: list[CommentId] | None = None
    ) -> "CommentItem":
        return cls(
            comment_id=str(comment.id),
            author_id=comment.author_id,
            text=comment.text,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            attachments=[AttachmentItem.from_attachment(a) for a in comment.attachments],
            children=[str(child_id) for child_id in children or []],
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            version=comment.version,
        )


def parse_comment_id(value: str, field: str = "comment_id") -> CommentId:
    """Parse a client-supplied comment ID.

    Raises:
        InvalidInputError: If the value is not a UUID
    """
    try:
        return CommentId(UUID(value))
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidInputError(f"Invalid {field}: {value!r}") from e


def children_index(comments: list[Comment]) -> dict[CommentId, list[CommentId]]:
    """Map each comment ID to the IDs of its direct replies, oldest first."""
    index: dict[CommentId, list[CommentId]] = {}
    for comment in sorted(comments, key=lambda c: (c.created_at, str(c.id))):
        if comment.parent_id is not None:
            index.setdefault(comment.parent_id, []).append(comment.id)
    return index
