"""Delete comment use case."""

import logfire
from pydantic import BaseModel

from board.domain.error import CommentHasRepliesError
from board.domain.model import CommentEvent
from board.domain.service import CommentService, EventBroadcaster, SearchService
from board.domain.value import UserId

from .item import parse_comment_id


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    author_id: str  # User ID of the authenticated caller


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    deleted_ids: list[str]  # Removal order: replies first, the comment itself last


class DeleteCommentUseCase:
    """Use case for deleting a comment together with all its replies."""

    def __init__(
        self,
        comment_service: CommentService,
        search_service: SearchService,
        broadcaster: EventBroadcaster,
    ) -> None:
        self.comment_service = comment_service
        self.search_service = search_service
        self.broadcaster = broadcaster

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Every removed comment is dropped from the index and announced with
        its own deleted event, so a comment with N replies yields N+1 events.

        Raises:
            InvalidInputError: If the comment ID is malformed
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the caller is not the author
            CommentHasRepliesError: If replies kept arriving and part of the
                thread is still stored; removed comments are still announced
        """
        comment_id = parse_comment_id(request.comment_id)

        subtree = await self.comment_service.delete_comment(
            comment_id, UserId(request.author_id)
        )

        degraded = 0
        for removed in subtree.removed:
            if not await self.search_service.remove(removed.id):
                degraded += 1
            self.broadcaster.publish(CommentEvent.deleted(removed.id))

        if degraded:
            logfire.warn(
                "Deleted comments left in search index",
                comment_id=str(comment_id),
                count=degraded,
            )

        if not subtree.complete:
            raise CommentHasRepliesError(str(comment_id))

        return DeleteCommentResponse(
            comment_id=str(comment_id),
            deleted_ids=[str(c.id) for c in subtree.removed],
        )
