"""Update comment use case."""

import logfire
from pydantic import BaseModel, Field

from board.domain.error import InvalidInputError, NotAuthorizedError
from board.domain.model import CommentEvent, CommentPatch
from board.domain.service import (
    AttachmentService,
    CommentService,
    EventBroadcaster,
    SearchService,
)
from board.domain.value import AttachmentRef, UploadedFile, UserId

from .item import CommentItem, parse_comment_id


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str
    author_id: str  # User ID of the authenticated caller
    text: str | None = None  # None leaves the text unchanged
    clear_attachments: bool = False
    remove_attachments: list[AttachmentRef] = Field(default_factory=list)
    files: list[UploadedFile] = Field(default_factory=list)


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment: CommentItem
    indexed: bool


class UpdateCommentUseCase:
    """Use case for editing a comment's text and attachments."""

    def __init__(
        self,
        comment_service: CommentService,
        attachment_service: AttachmentService,
        search_service: SearchService,
        broadcaster: EventBroadcaster,
    ) -> None:
        self.comment_service = comment_service
        self.attachment_service = attachment_service
        self.search_service = search_service
        self.broadcaster = broadcaster

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Steps:
        1. Load the comment and check the caller wrote it
        2. Reject the edit if it would leave neither text nor attachments
        3. Validate and upload new files
        4. Apply the patch via comment service (same-kind files replace)
        5. Re-index (best effort) and publish an updated event

        Args:
            request: Update comment request

        Returns:
            Updated comment

        Raises:
            InvalidInputError: If nothing changes or the comment would be emptied
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the caller is not the author
            ConcurrentUpdateError: If the comment changed concurrently
            AttachmentError: If a file is rejected or cannot be uploaded
        """
        comment_id = parse_comment_id(request.comment_id)
        author_id = UserId(request.author_id)

        patch = CommentPatch(
            text=request.text,
            clear_attachments=request.clear_attachments,
            remove_attachments=request.remove_attachments,
        )
        if patch.is_empty and not request.files:
            raise InvalidInputError("No changes provided")

        comment = await self.comment_service.get_comment(comment_id)
        if comment.author_id != author_id:
            raise NotAuthorizedError("comment", str(comment_id), author_id)

        # Checked before uploading so a rejected edit stores no blobs
        if not request.files and patch.leaves_empty(comment):
            raise InvalidInputError("Comment would have neither text nor attachments")

        added = await self.attachment_service.upload_all(request.files)
        patch = patch.model_copy(update={"add_attachments": added})

        updated = await self.comment_service.update_comment(
            comment_id, author_id, patch
        )

        indexed = await self.search_service.update(updated)
        delivered = self.broadcaster.publish(CommentEvent.updated(updated))
        logfire.info(
            "Comment edited",
            comment_id=str(updated.id),
            version=updated.version,
            indexed=indexed,
            subscribers=delivered,
        )

        return UpdateCommentResponse(
            comment=CommentItem.from_comment(updated), indexed=indexed
        )
