"""Create comment use case."""

import logfire
from pydantic import BaseModel, Field

from board.domain.error import InvalidInputError
from board.domain.model import CommentEvent
from board.domain.service import (
    AttachmentService,
    CommentService,
    EventBroadcaster,
    SearchService,
)
from board.domain.value import UploadedFile, UserId

from .item import CommentItem, parse_comment_id


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    author_id: str  # User ID of the authenticated caller
    text: str | None = None
    parent_id: str | None = None  # Parent comment ID for replies
    files: list[UploadedFile] = Field(default_factory=list)


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem
    indexed: bool


class CreateCommentUseCase:
    """Use case for posting a root comment or a reply, with attachments."""

    def __init__(
        self,
        comment_service: CommentService,
        attachment_service: AttachmentService,
        search_service: SearchService,
        broadcaster: EventBroadcaster,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            attachment_service: Attachment validation and upload service
            search_service: Search index synchronizer
            broadcaster: Live event broadcaster
        """
        self.comment_service = comment_service
        self.attachment_service = attachment_service
        self.search_service = search_service
        self.broadcaster = broadcaster

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Check the comment has text or files, and that the parent exists
        2. Validate every file, then upload them
        3. Persist the comment via comment service
        4. Index it (best effort) and publish a created event

        Nothing is uploaded or stored when validation fails.

        Args:
            request: Create comment request

        Returns:
            Created comment

        Raises:
            InvalidInputError: If the comment is empty or an ID is malformed
            NotFoundError: If the parent comment does not exist
            AttachmentError: If a file is rejected or cannot be uploaded
        """
        has_text = bool(request.text and request.text.strip())
        if not has_text and not request.files:
            raise InvalidInputError("Comment text or an attachment is required")

        parent_id = (
            parse_comment_id(request.parent_id, "parent_id")
            if request.parent_id
            else None
        )
        if parent_id:
            # Fail before uploading anything for a reply to a missing comment
            await self.comment_service.get_comment(parent_id)

        attachments = await self.attachment_service.upload_all(request.files)

        comment = await self.comment_service.create_comment(
            author_id=UserId(request.author_id),
            text=request.text,
            parent_id=parent_id,
            attachments=attachments,
        )

        indexed = await self.search_service.index(comment)
        delivered = self.broadcaster.publish(CommentEvent.created(comment))
        logfire.info(
            "Comment posted",
            comment_id=str(comment.id),
            indexed=indexed,
            subscribers=delivered,
        )

        return CreateCommentResponse(
            comment=CommentItem.from_comment(comment), indexed=indexed
        )
