"""Create reply use case."""

from pydantic import BaseModel, Field

from board.domain.value import UploadedFile

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)


class CreateReplyRequest(BaseModel):
    """Create reply request."""

    author_id: str
    parent_id: str  # Comment being replied to
    text: str | None = None
    files: list[UploadedFile] = Field(default_factory=list)


class CreateReplyUseCase:
    """Use case for replying to an existing comment."""

    def __init__(self, create_comment: CreateCommentUseCase) -> None:
        self.create_comment = create_comment

    async def execute(self, request: CreateReplyRequest) -> CreateCommentResponse:
        """Post a reply; same flow as a root comment with a mandatory parent.

        Raises:
            NotFoundError: If the parent comment does not exist
        """
        return await self.create_comment.execute(
            CreateCommentRequest(
                author_id=request.author_id,
                text=request.text,
                parent_id=request.parent_id,
                files=request.files,
            )
        )
