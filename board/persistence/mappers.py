"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from board.domain.model import Attachment, Comment
from board.domain.value import CommentId, UserId


def _as_uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(_as_uuid(row["id"])),
        author_id=UserId(row["author_id"]),
        text=row.get("text"),
        parent_id=CommentId(_as_uuid(parent_id)) if parent_id else None,
        attachments=[Attachment(**a) for a in row.get("attachments") or []],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        version=row["version"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Attachments become plain JSON for the JSONB column.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = comment.model_dump(exclude={"attachments"})
    data["attachments"] = [a.model_dump(mode="json") for a in comment.attachments]
    return data
