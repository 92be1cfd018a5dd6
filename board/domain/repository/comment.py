"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from board.domain.model.comment import Comment
from board.domain.value import CommentId, SortOrder, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, sort: SortOrder = SortOrder.DESC) -> List[Comment]:
        """Find every comment on the board, roots and replies alike.

        Args:
            sort: Ordering by created_at (ties broken by id)

        Returns:
            List of all comments
        """
        pass

    @abstractmethod
    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies to a comment, oldest first.

        Args:
            parent_id: The parent comment ID

        Returns:
            List of child comments
        """
        pass

    @abstractmethod
    async def find_by_author(
        self, author_id: UserId, sort: SortOrder = SortOrder.DESC
    ) -> List[Comment]:
        """Find comments written by a specific author.

        Args:
            author_id: The author's user ID
            sort: Ordering by created_at

        Returns:
            List of comments by the author
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to insert

        Returns:
            The stored comment

        Raises:
            NotFoundError: If the parent comment no longer exists
        """
        pass

    @abstractmethod
    async def update(self, comment: Comment, expected_version: int) -> Comment:
        """Replace a stored comment if its version still matches.

        This is a compare-and-swap: the write only happens when the stored
        row still carries `expected_version`. The caller is responsible for
        bumping `comment.version`.

        Args:
            comment: The new state of the comment
            expected_version: Version the caller read before computing the change

        Returns:
            The stored comment

        Raises:
            NotFoundError: If the comment no longer exists
            ConcurrentUpdateError: If another writer got there first
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a single comment (hard delete).

        Does not cascade. Callers remove children first.

        Args:
            comment_id: The comment ID to delete

        Raises:
            CommentHasRepliesError: If a reply still references the comment
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all comments on the board."""
        pass
