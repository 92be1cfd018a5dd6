"""List user comments use case."""

from pydantic import BaseModel

from board.domain.service import CommentService
from board.domain.value import SortOrder, UserId

from .item import CommentItem


class ListUserCommentsRequest(BaseModel):
    """List user comments request."""

    user_id: str
    sort: SortOrder = SortOrder.DESC


class ListUserCommentsResponse(BaseModel):
    """List user comments response."""

    user_id: str
    comments: list[CommentItem]
    total: int


class ListUserCommentsUseCase:
    """Use case for listing everything one user has written."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: ListUserCommentsRequest
    ) -> ListUserCommentsResponse:
        comments = await self.comment_service.list_comments_by_author(
            UserId(request.user_id), sort=request.sort
        )
        items = [CommentItem.from_comment(c) for c in comments]
        return ListUserCommentsResponse(
            user_id=request.user_id, comments=items, total=len(items)
        )
