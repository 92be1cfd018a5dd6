"""Comment entity.

Comments form a forest: a root comment has no parent, a reply points at an
existing comment through parent_id. Children are never stored on the parent;
they are derived on read from the parent_id column.
"""

from datetime import datetime, timezone

from pydantic import Field, field_validator

from board.domain.model.common import DomainModel
from board.domain.value import AttachmentKind, AttachmentRef, CommentId, UserId


# Longest comment text; four-byte UTF-8 at this length still fits in one
# 32766-byte Lucene term, so the whole text remains searchable
MAX_TEXT_LENGTH = 8191


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Attachment(DomainModel):
    """A stored binary attachment referenced by a comment."""

    kind: AttachmentKind
    url: str
    original_name: str | None = None
    content_type: str | None = None
    size: int | None = Field(default=None, ge=0)

    def matches(self, ref: AttachmentRef) -> bool:
        """Whether this attachment is the one `ref` points at."""
        return self.url == ref.url and self.kind == ref.kind


class Comment(DomainModel):
    """Comment entity.

    Represents a root comment on the board or a reply to another comment.

    Content invariant: after every create/update, text is non-empty or
    attachments is non-empty. Services enforce it, the model only normalizes
    blank text to None so the check is a simple truthiness test.
    """

    id: CommentId
    author_id: UserId
    text: str | None = Field(default=None, max_length=MAX_TEXT_LENGTH)
    parent_id: CommentId | None = None
    attachments: list[Attachment] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    version: int = Field(default=1, ge=1)

    @field_validator("text")
    @classmethod
    def blank_text_is_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def has_content(self) -> bool:
        return bool(self.text) or bool(self.attachments)

    def attachment_of_kind(self, kind: AttachmentKind) -> Attachment | None:
        return next((a for a in self.attachments if a.kind == kind), None)


class CommentPatch(DomainModel):
    """Changes requested for an existing comment.

    Applied in a fixed order: clear all attachments, then remove the listed
    ones, then add the new ones (an added attachment replaces the existing
    attachment of the same kind). `text=None` leaves the text unchanged.
    """

    text: str | None = None
    clear_attachments: bool = False
    remove_attachments: list[AttachmentRef] = Field(default_factory=list)
    add_attachments: list[Attachment] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return (
            self.text is None
            and not self.clear_attachments
            and not self.remove_attachments
            and not self.add_attachments
        )

    def merged_text(self, comment: Comment) -> str | None:
        return comment.text if self.text is None else self.text

    def merged_attachments(self, comment: Comment) -> list[Attachment]:
        """Attachment list that results from applying this patch to `comment`."""
        kept = [] if self.clear_attachments else list(comment.attachments)
        kept = [
            a for a in kept if not any(a.matches(ref) for ref in self.remove_attachments)
        ]
        added_kinds = {a.kind for a in self.add_attachments}
        kept = [a for a in kept if a.kind not in added_kinds]
        return kept + list(self.add_attachments)

    def leaves_empty(self, comment: Comment) -> bool:
        """Whether applying this patch would leave no text and no attachments."""
        text = self.merged_text(comment)
        has_text = text is not None and bool(text.strip())
        return not has_text and not self.merged_attachments(comment)


class DeletedSubtree(DomainModel):
    """Result of a cascading delete.

    `removed` lists every comment taken out of the store, in removal order
    (descendants before their ancestors, the root last). `complete` is False
    when replies kept arriving and part of the subtree is still stored.
    """

    root: Comment
    removed: list[Comment]
    complete: bool = True

    @property
    def descendants(self) -> list[Comment]:
        return [c for c in self.removed if c.id != self.root.id]
