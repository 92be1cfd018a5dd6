"""Domain value objects for the comment board.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from board.domain.value.common import ValueObject
from board.domain.value.identifiers import CommentId


class SortOrder(str, Enum):
    """Ordering of comments by creation time."""

    ASC = "asc"
    DESC = "desc"

    @property
    def descending(self) -> bool:
        return self is SortOrder.DESC


class AttachmentKind(str, Enum):
    """Kind of binary attachment a comment can carry.

    A comment holds at most one attachment of each kind.
    """

    IMAGE = "image"
    VIDEO = "video"
    FILE = "file"


class EventChannel(str, Enum):
    """Named broadcast channels for live comment events."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"

    @property
    def subscription_name(self) -> str:
        """Name of the client-facing stream fed by this channel."""
        return {
            EventChannel.CREATED: "commentAdded",
            EventChannel.UPDATED: "commentUpdated",
            EventChannel.DELETED: "commentDeleted",
        }[self]


class AttachmentRef(ValueObject):
    """Reference to an existing attachment, used when removing it."""

    url: str
    kind: AttachmentKind


class UploadedFile(ValueObject):
    """A binary file handed to the attachment pipeline.

    `kind` is set when the caller put the file in a named slot
    (image/video/file); otherwise the pipeline classifies it by content type.
    """

    filename: str
    content_type: str
    content: bytes
    kind: AttachmentKind | None = None

    @property
    def size(self) -> int:
        return len(self.content)


class SearchDocument(ValueObject):
    """Projection of a comment stored in the full-text index."""

    id: CommentId
    text: str | None = None
    created_at: str  # ISO-8601, sortable by the search backend
    parent_id: CommentId | None = None
