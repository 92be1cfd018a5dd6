"""Search comments use case."""

from pydantic import BaseModel

from board.domain.model import Comment
from board.domain.service import CommentService, SearchService
from board.domain.value import SortOrder

from .item import CommentItem


class SearchCommentsRequest(BaseModel):
    """Search comments request."""

    text: str
    sort: SortOrder = SortOrder.DESC


class SearchCommentsResponse(BaseModel):
    """Search comments response."""

    comments: list[CommentItem]
    total: int


class SearchCommentsUseCase:
    """Use case for finding root comments by text."""

    def __init__(
        self, comment_service: CommentService, search_service: SearchService
    ) -> None:
        self.comment_service = comment_service
        self.search_service = search_service

    async def execute(self, request: SearchCommentsRequest) -> SearchCommentsResponse:
        """Execute search comments flow.

        The index only nominates candidates. Each hit is re-read from the
        store, so comments deleted or edited since they were indexed never
        show up with stale content. An unavailable index yields no results.
        """
        needle = request.text.strip().lower()
        candidate_ids = await self.search_service.search(request.text, request.sort)

        hits: list[Comment] = []
        seen = set()
        for comment_id in candidate_ids:
            if comment_id in seen:
                continue
            seen.add(comment_id)
            comment = await self.comment_service.find_comment(comment_id)
            if comment is None or not comment.is_root:
                continue
            if not comment.text or needle not in comment.text.lower():
                continue
            hits.append(comment)

        hits.sort(
            key=lambda c: (c.created_at, str(c.id)), reverse=request.sort.descending
        )

        items = []
        for comment in hits:
            replies = await self.comment_service.list_children(comment.id)
            items.append(CommentItem.from_comment(comment, [r.id for r in replies]))
        return SearchCommentsResponse(comments=items, total=len(items))
