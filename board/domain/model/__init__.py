"""Domain model entities for the comment board."""

from board.domain.model.comment import Attachment, Comment, CommentPatch, DeletedSubtree
from board.domain.model.event import CommentEvent

__all__ = [
    "Attachment",
    "Comment",
    "CommentEvent",
    "CommentPatch",
    "DeletedSubtree",
]
