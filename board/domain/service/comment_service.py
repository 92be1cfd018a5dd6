"""Comment domain service.

Sole authority for comment existence and structure. Knows nothing about
search or broadcasting.
"""

from collections import Counter
from uuid import uuid4

import logfire
from pydantic import ValidationError

from board.domain.error import (
    CommentHasRepliesError,
    InvalidInputError,
    NotAuthorizedError,
    NotFoundError,
)
from board.domain.model.comment import (
    Attachment,
    Comment,
    CommentPatch,
    DeletedSubtree,
    utc_now,
)
from board.domain.repository import CommentRepository
from board.domain.value import CommentId, SortOrder, UserId

from .base import Service

# Delete attempts per comment before a subtree delete gives up on new replies
_DELETE_ATTEMPTS = 3


def _check_one_per_kind(attachments: list[Attachment]) -> None:
    duplicated = [
        kind.value for kind, n in Counter(a.kind for a in attachments).items() if n > 1
    ]
    if duplicated:
        raise InvalidInputError(
            f"A comment holds at most one attachment per kind: {', '.join(duplicated)}"
        )


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        author_id: UserId,
        text: str | None = None,
        parent_id: CommentId | None = None,
        attachments: list[Attachment] | None = None,
    ) -> Comment:
        """Create a root comment or a reply to another comment.

        Args:
            author_id: Author user ID
            text: Comment text (optional when attachments carry the content)
            parent_id: Parent comment ID for replies (None for root comments)
            attachments: Already-uploaded attachments

        Returns:
            Created comment

        Raises:
            InvalidInputError: If there is neither text nor an attachment
            NotFoundError: If the parent comment does not exist
        """
        attachments = attachments or []
        with logfire.span(
            "comment_service.create_comment",
            author_id=author_id,
            parent_id=str(parent_id) if parent_id else None,
            attachment_count=len(attachments),
        ):
            now = utc_now()
            try:
                comment = Comment(
                    id=CommentId(uuid4()),
                    author_id=author_id,
                    text=text,
                    parent_id=parent_id,
                    attachments=attachments,
                    created_at=now,
                    updated_at=now,
                    version=1,
                )
            except ValidationError as e:
                raise InvalidInputError(str(e)) from e
            if not comment.has_content:
                raise InvalidInputError("Comment text or an attachment is required")
            _check_one_per_kind(comment.attachments)

            # Replies may only point at comments that exist right now
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn("Parent comment not found", parent_id=str(parent_id))
                    raise NotFoundError("Comment", str(parent_id))

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                parent_id=str(parent_id) if parent_id else None,
            )
            return saved

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span("comment_service.get_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            return comment

    async def find_comment(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID, or None if it does not exist."""
        return await self.comment_repository.find_by_id(comment_id)

    async def list_comments(self, sort: SortOrder = SortOrder.DESC) -> list[Comment]:
        """List the whole forest, ordered by creation time."""
        with logfire.span("comment_service.list_comments", sort=sort.value):
            comments = await self.comment_repository.find_all(sort=sort)
            logfire.info("Comments retrieved", count=len(comments))
            return comments

    async def list_children(self, comment_id: CommentId) -> list[Comment]:
        """List direct replies to a comment, oldest first."""
        return await self.comment_repository.find_children(comment_id)

    async def list_comments_by_author(
        self, author_id: UserId, sort: SortOrder = SortOrder.DESC
    ) -> list[Comment]:
        """List every comment written by one user."""
        with logfire.span(
            "comment_service.list_comments_by_author", author_id=author_id
        ):
            return await self.comment_repository.find_by_author(author_id, sort=sort)

    async def update_comment(
        self, comment_id: CommentId, author_id: UserId, patch: CommentPatch
    ) -> Comment:
        """Apply a patch to a comment owned by `author_id`.

        The write is a compare-and-swap on the comment version, so two
        concurrent edits cannot silently overwrite each other.

        Args:
            comment_id: Comment ID
            author_id: User requesting the change
            patch: Text and attachment changes

        Returns:
            Updated comment

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
            InvalidInputError: If the patch is empty or would empty the comment
            ConcurrentUpdateError: If the comment changed since it was read
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            author_id=author_id,
        ):
            if patch.is_empty:
                raise InvalidInputError("No changes provided")

            comment = await self.get_comment(comment_id)
            if comment.author_id != author_id:
                logfire.warn(
                    "Unauthorized comment update attempt",
                    comment_id=str(comment_id),
                    author_id=author_id,
                )
                raise NotAuthorizedError("comment", str(comment_id), author_id)

            if patch.leaves_empty(comment):
                raise InvalidInputError(
                    "Comment would have neither text nor attachments"
                )

            attachments = patch.merged_attachments(comment)
            _check_one_per_kind(attachments)

            updated = comment.model_copy(
                update={
                    "text": patch.merged_text(comment),
                    "attachments": attachments,
                    "updated_at": utc_now(),
                    "version": comment.version + 1,
                }
            )
            # model_copy skips validation, so re-validate to normalize text
            try:
                updated = Comment.model_validate(updated.model_dump())
            except ValidationError as e:
                raise InvalidInputError(str(e)) from e

            saved = await self.comment_repository.update(
                updated, expected_version=comment.version
            )
            logfire.info(
                "Comment updated",
                comment_id=str(comment_id),
                version=saved.version,
                attachment_count=len(saved.attachments),
            )
            return saved

    async def delete_comment(
        self, comment_id: CommentId, author_id: UserId
    ) -> DeletedSubtree:
        """Delete a comment and its whole subtree.

        Only the author of the root may delete it; replies by other users
        go with it. The subtree is walked with an explicit stack and removed
        children-before-parent, so a comment is never left without its parent.

        A reply that lands under a node after its children were read makes
        that node's delete fail; the node's children are then read again and
        removed first. After `_DELETE_ATTEMPTS` failures on one node the walk
        stops and the result is marked incomplete, still listing everything
        already removed.

        Args:
            comment_id: Root of the subtree to remove
            author_id: User requesting the deletion

        Returns:
            The removed root and every removed comment in removal order

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            author_id=author_id,
        ):
            root = await self.get_comment(comment_id)
            if root.author_id != author_id:
                logfire.warn(
                    "Unauthorized comment delete attempt",
                    comment_id=str(comment_id),
                    author_id=author_id,
                )
                raise NotAuthorizedError("comment", str(comment_id), author_id)

            removed: list[Comment] = []
            failures: Counter[CommentId] = Counter()
            complete = True
            # (node, expanded): a node is deleted once all its children are gone
            stack: list[tuple[Comment, bool]] = [(root, False)]
            while stack:
                node, expanded = stack.pop()
                if not expanded:
                    stack.append((node, True))
                    children = await self.comment_repository.find_children(node.id)
                    stack.extend((child, False) for child in reversed(children))
                    continue

                try:
                    await self.comment_repository.delete(node.id)
                except CommentHasRepliesError:
                    failures[node.id] += 1
                    if failures[node.id] >= _DELETE_ATTEMPTS:
                        logfire.warn(
                            "Comment subtree delete gave up on late replies",
                            comment_id=str(comment_id),
                            blocked_id=str(node.id),
                            removed_count=len(removed),
                        )
                        complete = False
                        break
                    logfire.info(
                        "Reply arrived during delete, collecting it",
                        comment_id=str(comment_id),
                        blocked_id=str(node.id),
                    )
                    stack.append((node, False))
                    continue
                removed.append(node)

            logfire.info(
                "Comment subtree deleted",
                comment_id=str(comment_id),
                removed_count=len(removed),
                complete=complete,
            )
            return DeletedSubtree(root=root, removed=removed, complete=complete)
