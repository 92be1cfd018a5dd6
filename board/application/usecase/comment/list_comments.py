"""List comments use case."""

from pydantic import BaseModel

from board.domain.service import CommentService
from board.domain.value import SortOrder

from .item import CommentItem, children_index


class ListCommentsRequest(BaseModel):
    """List comments request."""

    sort: SortOrder = SortOrder.DESC


class ListCommentsResponse(BaseModel):
    """List comments response."""

    comments: list[CommentItem]
    total: int


class ListCommentsUseCase:
    """Use case for listing every comment on the board."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Returns roots and replies alike, ordered by creation time; each item
        carries the IDs of its direct replies.
        """
        comments = await self.comment_service.list_comments(sort=request.sort)
        index = children_index(comments)

        items = [CommentItem.from_comment(c, index.get(c.id)) for c in comments]
        return ListCommentsResponse(comments=items, total=len(items))
