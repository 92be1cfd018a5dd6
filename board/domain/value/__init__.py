"""Domain value objects for the comment board."""

from board.domain.value.identifiers import CommentId, UserId
from board.domain.value.types import (
    AttachmentKind,
    AttachmentRef,
    EventChannel,
    SearchDocument,
    SortOrder,
    UploadedFile,
)

__all__ = [
    # Identifiers
    "CommentId",
    "UserId",
    # Types
    "AttachmentKind",
    "AttachmentRef",
    "EventChannel",
    "SearchDocument",
    "SortOrder",
    "UploadedFile",
]
