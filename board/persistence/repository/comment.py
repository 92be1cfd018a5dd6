"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import asc, delete, desc, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.error import (
    CommentHasRepliesError,
    ConcurrentUpdateError,
    NotFoundError,
)
from board.domain.model import Comment
from board.domain.repository import CommentRepository
from board.domain.value import CommentId, SortOrder, UserId
from board.persistence.mappers import comment_to_dict, row_to_comment
from board.persistence.tables import comments_table


def _ordering(sort: SortOrder):
    direction = desc if sort.descending else asc
    return direction(comments_table.c.created_at), direction(comments_table.c.id)


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Every write commits before returning, so search indexing and live events
    that follow it never describe a change that could still roll back.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_all(self, sort: SortOrder = SortOrder.DESC) -> List[Comment]:
        """Find every comment ordered by creation time."""
        stmt = select(comments_table).order_by(*_ordering(sort))
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct child comments of a parent comment."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id == parent_id)
            .order_by(*_ordering(SortOrder.ASC))
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_by_author(
        self, author_id: UserId, sort: SortOrder = SortOrder.DESC
    ) -> List[Comment]:
        """Find comments by a specific author."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.author_id == author_id)
            .order_by(*_ordering(sort))
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = comments_table.insert().values(**comment_to_dict(comment))
        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            # The parent was deleted between the existence check and the insert
            if comment.parent_id is not None:
                raise NotFoundError("Comment", str(comment.parent_id)) from e
            raise
        return comment

    async def update(self, comment: Comment, expected_version: int) -> Comment:
        """Compare-and-swap on the version column."""
        values = comment_to_dict(comment)
        values.pop("id")
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment.id)
            .where(comments_table.c.version == expected_version)
            .values(**values)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            if await self.find_by_id(comment.id) is None:
                raise NotFoundError("Comment", str(comment.id))
            raise ConcurrentUpdateError("Comment", str(comment.id), expected_version)
        await self.session.commit()
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a single comment.

        Raises:
            CommentHasRepliesError: If a reply still references the comment
        """
        stmt = delete(comments_table).where(comments_table.c.id == comment_id)
        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise CommentHasRepliesError(str(comment_id)) from e

    async def count(self) -> int:
        """Count all comments."""
        stmt = select(func.count()).select_from(comments_table)
        result = await self.session.execute(stmt)
        return result.scalar_one()
