"""User routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from board.application.usecase.comment import (
    ListUserCommentsRequest,
    ListUserCommentsResponse,
    ListUserCommentsUseCase,
)
from board.domain.value import SortOrder

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/{user_id}/comments", response_model=ListUserCommentsResponse)
async def list_user_comments(
    user_id: str,
    list_user_comments_use_case: FromDishka[ListUserCommentsUseCase],
    sort: SortOrder = SortOrder.DESC,
) -> ListUserCommentsResponse:
    """List every comment a user has written, roots and replies alike."""
    return await list_user_comments_use_case.execute(
        ListUserCommentsRequest(user_id=user_id, sort=sort)
    )
