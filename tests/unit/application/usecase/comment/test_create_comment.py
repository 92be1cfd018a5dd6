"""Unit tests for CreateCommentUseCase and CreateReplyUseCase."""

from uuid import uuid4

import pytest

from board.adapter.search import InMemorySearchBackend
from board.adapter.storage import InMemoryObjectStorage
from board.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    CreateReplyRequest,
    CreateReplyUseCase,
)
from board.domain.error import (
    InvalidAttachmentError,
    InvalidInputError,
    NotFoundError,
    UploadFailedError,
)
from board.domain.repository import CommentRepository
from board.domain.service import EventBroadcaster
from board.domain.value import AttachmentKind, EventChannel
from tests.conftest import png_upload, text_upload
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_create_stores_indexes_and_publishes(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        backend = await unit_env.get(InMemorySearchBackend)
        broadcaster = await unit_env.get(EventBroadcaster)
        subscription = broadcaster.subscribe(EventChannel.CREATED)

        # Act
        response = await use_case.execute(
            CreateCommentRequest(author_id="alice", text="Hello")
        )

        # Assert
        assert response.indexed is True
        assert response.comment.text == "Hello"
        assert response.comment.author_id == "alice"
        assert response.comment.parent_id is None
        assert await comment_repo.count() == 1
        assert len(backend.documents) == 1
        event = subscription.get_nowait()
        assert str(event.comment_id) == response.comment.comment_id

    @pytest.mark.asyncio
    async def test_create_with_attachments(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        storage = await unit_env.get(InMemoryObjectStorage)

        response = await use_case.execute(
            CreateCommentRequest(
                author_id="alice",
                files=[png_upload(kind=AttachmentKind.IMAGE), text_upload()],
            )
        )

        assert response.comment.text is None
        kinds = sorted(a.kind for a in response.comment.attachments)
        assert kinds == ["file", "image"]
        assert len(storage.objects) == 2

    @pytest.mark.asyncio
    async def test_empty_comment_is_rejected_before_anything_happens(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)

        with pytest.raises(InvalidInputError):
            await use_case.execute(CreateCommentRequest(author_id="alice", text=" "))

        assert await comment_repo.count() == 0

    @pytest.mark.asyncio
    async def test_invalid_file_uploads_nothing_and_stores_nothing(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        storage = await unit_env.get(InMemoryObjectStorage)
        bad = text_upload(name="run.exe", content_type="application/x-msdownload")

        with pytest.raises(InvalidAttachmentError):
            await use_case.execute(
                CreateCommentRequest(author_id="alice", text="hi", files=[bad])
            )

        assert storage.objects == {}
        assert await comment_repo.count() == 0

    @pytest.mark.asyncio
    async def test_upload_failure_stores_nothing(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        storage = await unit_env.get(InMemoryObjectStorage)
        storage.failure = UploadFailedError("bucket rejected upload")

        with pytest.raises(UploadFailedError):
            await use_case.execute(
                CreateCommentRequest(author_id="alice", files=[png_upload()])
            )

        assert await comment_repo.count() == 0

    @pytest.mark.asyncio
    async def test_index_outage_does_not_fail_create(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        backend = await unit_env.get(InMemorySearchBackend)
        backend.available = False

        response = await use_case.execute(
            CreateCommentRequest(author_id="alice", text="still saved")
        )

        assert response.indexed is False
        assert await comment_repo.count() == 1

    @pytest.mark.asyncio
    async def test_malformed_parent_id(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)

        with pytest.raises(InvalidInputError, match="parent_id"):
            await use_case.execute(
                CreateCommentRequest(author_id="alice", text="hi", parent_id="nope")
            )


class TestCreateReplyUseCase:
    """Tests for CreateReplyUseCase."""

    @pytest.mark.asyncio
    async def test_reply_to_existing_comment(self, unit_env):
        create = await unit_env.get(CreateCommentUseCase)
        reply_use_case = await unit_env.get(CreateReplyUseCase)
        parent = await create.execute(CreateCommentRequest(author_id="alice", text="Q"))

        reply = await reply_use_case.execute(
            CreateReplyRequest(
                author_id="bob", parent_id=parent.comment.comment_id, text="A"
            )
        )

        assert reply.comment.parent_id == parent.comment.comment_id

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent_uploads_nothing(self, unit_env):
        reply_use_case = await unit_env.get(CreateReplyUseCase)
        storage = await unit_env.get(InMemoryObjectStorage)

        with pytest.raises(NotFoundError):
            await reply_use_case.execute(
                CreateReplyRequest(
                    author_id="bob", parent_id=str(uuid4()), files=[png_upload()]
                )
            )

        assert storage.objects == {}
