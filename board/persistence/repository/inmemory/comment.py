"""In-memory comment repository for testing."""

import asyncio
from typing import Optional

from board.domain.error import (
    CommentHasRepliesError,
    ConcurrentUpdateError,
    NotFoundError,
)
from board.domain.model import Comment
from board.domain.repository.comment import CommentRepository
from board.domain.value import CommentId, SortOrder, UserId


def _sorted(comments: list[Comment], sort: SortOrder) -> list[Comment]:
    return sorted(
        comments, key=lambda c: (c.created_at, str(c.id)), reverse=sort.descending
    )


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._lock = asyncio.Lock()

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_all(self, sort: SortOrder = SortOrder.DESC) -> list[Comment]:
        """Find every comment ordered by creation time."""
        return _sorted(list(self._comments.values()), sort)

    async def find_children(self, parent_id: CommentId) -> list[Comment]:
        """Find direct children of a comment, oldest first."""
        children = [c for c in self._comments.values() if c.parent_id == parent_id]
        return _sorted(children, SortOrder.ASC)

    async def find_by_author(
        self, author_id: UserId, sort: SortOrder = SortOrder.DESC
    ) -> list[Comment]:
        """Find comments by a specific author."""
        comments = [c for c in self._comments.values() if c.author_id == author_id]
        return _sorted(comments, sort)

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment, enforcing the parent reference like a foreign key."""
        async with self._lock:
            if comment.parent_id is not None and comment.parent_id not in self._comments:
                raise NotFoundError("Comment", str(comment.parent_id))
            self._comments[comment.id] = comment
        return comment

    async def update(self, comment: Comment, expected_version: int) -> Comment:
        """Replace a comment if the stored version still matches."""
        async with self._lock:
            stored = self._comments.get(comment.id)
            if stored is None:
                raise NotFoundError("Comment", str(comment.id))
            if stored.version != expected_version:
                raise ConcurrentUpdateError(
                    "Comment", str(comment.id), expected_version
                )
            self._comments[comment.id] = comment
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment, refusing while replies still reference it."""
        async with self._lock:
            if any(c.parent_id == comment_id for c in self._comments.values()):
                raise CommentHasRepliesError(str(comment_id))
            self._comments.pop(comment_id, None)

    async def count(self) -> int:
        """Count all comments."""
        return len(self._comments)
