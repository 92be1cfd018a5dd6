"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from pydantic import TypeAdapter, ValidationError

from board.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    CreateReplyRequest,
    CreateReplyUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentResponse,
    GetCommentUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    SearchCommentsRequest,
    SearchCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from board.config import AttachmentSettings
from board.domain.error import DomainError
from board.domain.value import AttachmentRef, SortOrder
from board.interface.api.dependencies import current_user_id, read_uploads
from board.interface.error import to_http_exception

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)

_attachment_refs = TypeAdapter(list[AttachmentRef])


@router.get("", response_model=ListCommentsResponse)
async def list_comments(
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    search_comments_use_case: FromDishka[SearchCommentsUseCase],
    search: str | None = None,
    sort: SortOrder = SortOrder.DESC,
) -> ListCommentsResponse:
    """List every comment, or search root comments when `search` is given.

    A blank search, or an unavailable search index, returns no comments.
    """
    if search is not None:
        result = await search_comments_use_case.execute(
            SearchCommentsRequest(text=search, sort=sort)
        )
        return ListCommentsResponse(comments=result.comments, total=result.total)

    return await list_comments_use_case.execute(ListCommentsRequest(sort=sort))


@router.get("/{comment_id}", response_model=GetCommentResponse)
async def get_comment(
    comment_id: str,
    get_comment_use_case: FromDishka[GetCommentUseCase],
) -> GetCommentResponse:
    """Get one comment with its direct replies."""
    try:
        return await get_comment_use_case.execute(
            GetCommentRequest(comment_id=comment_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post(
    "",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    attachment_settings: FromDishka[AttachmentSettings],
    user_id: str = Depends(current_user_id),
    text: str | None = Form(default=None),
    parent_id: str | None = Form(default=None),
    images: UploadFile | None = File(default=None),
    video: UploadFile | None = File(default=None),
    attachment: UploadFile | None = File(default=None),
) -> CreateCommentResponse:
    """Post a root comment, or a reply when `parent_id` is set.

    Multipart form: `text` plus at most one file in each of the `images`,
    `video` and `attachment` slots.
    """
    try:
        files = await read_uploads(attachment_settings, images, video, attachment)
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                author_id=user_id,
                text=text,
                parent_id=parent_id or None,
                files=files,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post(
    "/{parent_id}/replies",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reply(
    parent_id: str,
    create_reply_use_case: FromDishka[CreateReplyUseCase],
    attachment_settings: FromDishka[AttachmentSettings],
    user_id: str = Depends(current_user_id),
    text: str | None = Form(default=None),
    images: UploadFile | None = File(default=None),
    video: UploadFile | None = File(default=None),
    attachment: UploadFile | None = File(default=None),
) -> CreateCommentResponse:
    """Reply to an existing comment."""
    try:
        files = await read_uploads(attachment_settings, images, video, attachment)
        return await create_reply_use_case.execute(
            CreateReplyRequest(
                author_id=user_id, parent_id=parent_id, text=text, files=files
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.patch("/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: str,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    attachment_settings: FromDishka[AttachmentSettings],
    user_id: str = Depends(current_user_id),
    text: str | None = Form(default=None),
    clear_attachments: bool = Form(default=False),
    remove_attachments: str | None = Form(default=None),
    images: UploadFile | None = File(default=None),
    video: UploadFile | None = File(default=None),
    attachment: UploadFile | None = File(default=None),
) -> UpdateCommentResponse:
    """Edit a comment. Only its author can.

    `remove_attachments` is a JSON list of `{"url": ..., "kind": ...}`
    objects. A new file replaces the existing attachment of its kind.
    """
    try:
        refs = _attachment_refs.validate_json(remove_attachments or "[]")
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid remove_attachments: {e.error_count()} error(s)",
        ) from e

    try:
        files = await read_uploads(attachment_settings, images, video, attachment)
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                comment_id=comment_id,
                author_id=user_id,
                text=text,
                clear_attachments=clear_attachments,
                remove_attachments=refs,
                files=files,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    user_id: str = Depends(current_user_id),
) -> DeleteCommentResponse:
    """Delete a comment and every reply beneath it. Only its author can."""
    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, author_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
