"""Get comment use case."""

from pydantic import BaseModel

from board.domain.service import CommentService

from .item import CommentItem, parse_comment_id


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str


class GetCommentResponse(BaseModel):
    """Get comment response."""

    comment: CommentItem
    replies: list[CommentItem]  # Direct replies, oldest first


class GetCommentUseCase:
    """Use case for reading one comment with its direct replies."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> GetCommentResponse:
        """Execute get comment flow.

        Raises:
            InvalidInputError: If the comment ID is malformed
            NotFoundError: If the comment does not exist
        """
        comment_id = parse_comment_id(request.comment_id)
        comment = await self.comment_service.get_comment(comment_id)
        replies = await self.comment_service.list_children(comment_id)

        reply_items = []
        for reply in replies:
            grandchildren = await self.comment_service.list_children(reply.id)
            reply_items.append(
                CommentItem.from_comment(reply, [c.id for c in grandchildren])
            )

        return GetCommentResponse(
            comment=CommentItem.from_comment(comment, [r.id for r in replies]),
            replies=reply_items,
        )
