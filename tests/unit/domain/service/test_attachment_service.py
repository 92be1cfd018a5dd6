"""Unit tests for AttachmentService."""

import asyncio

import httpx
import pytest

from board.adapter.storage import InMemoryObjectStorage
from board.config import AttachmentSettings
from board.domain.error import (
    AttachmentTooLargeError,
    InvalidAttachmentError,
    InvalidInputError,
    StorageUnavailableError,
    UploadFailedError,
)
from board.domain.service import AttachmentService, ObjectStorage
from board.domain.value import AttachmentKind, UploadedFile
from tests.conftest import GIF_BYTES, PNG_BYTES, png_upload, text_upload
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestClassify:
    """Tests for picking the attachment kind."""

    def test_explicit_slot_wins(self):
        upload = text_upload()
        slotted = upload.model_copy(update={"kind": AttachmentKind.VIDEO})

        assert AttachmentService.classify(slotted) == AttachmentKind.VIDEO

    def test_by_content_type(self):
        video = UploadedFile(filename="a.mp4", content_type="video/mp4", content=b"x")

        assert AttachmentService.classify(png_upload()) == AttachmentKind.IMAGE
        assert AttachmentService.classify(video) == AttachmentKind.VIDEO
        assert AttachmentService.classify(text_upload()) == AttachmentKind.FILE


class TestValidate:
    """Tests for per-kind validation rules."""

    @pytest.mark.asyncio
    async def test_valid_png(self, unit_env):
        service = await unit_env.get(AttachmentService)

        service.validate(png_upload(), AttachmentKind.IMAGE)

    @pytest.mark.asyncio
    async def test_image_type_not_allowed(self, unit_env):
        service = await unit_env.get(AttachmentService)
        upload = UploadedFile(
            filename="a.webp", content_type="image/webp", content=PNG_BYTES
        )

        with pytest.raises(InvalidAttachmentError):
            service.validate(upload, AttachmentKind.IMAGE)

    @pytest.mark.asyncio
    async def test_image_content_must_match_declared_type(self, unit_env):
        service = await unit_env.get(AttachmentService)
        upload = UploadedFile(
            filename="fake.png", content_type="image/png", content=GIF_BYTES
        )

        with pytest.raises(InvalidAttachmentError, match="does not match"):
            service.validate(upload, AttachmentKind.IMAGE)

    @pytest.mark.asyncio
    async def test_image_too_large(self, unit_env):
        service = await unit_env.get(AttachmentService)
        limit = service.settings.image_max_bytes
        upload = UploadedFile(
            filename="big.png",
            content_type="image/png",
            content=PNG_BYTES + b"\x00" * limit,
        )

        with pytest.raises(AttachmentTooLargeError) as exc_info:
            service.validate(upload, AttachmentKind.IMAGE)

        assert exc_info.value.max_size == limit

    @pytest.mark.asyncio
    async def test_video_requires_video_type(self, unit_env):
        service = await unit_env.get(AttachmentService)

        with pytest.raises(InvalidAttachmentError):
            service.validate(text_upload(), AttachmentKind.VIDEO)

    def test_file_size_boundary(self):
        settings = AttachmentSettings(file_max_bytes=100)
        service = AttachmentService(storage=InMemoryObjectStorage(), settings=settings)

        service.validate(text_upload(size=100), AttachmentKind.FILE)
        with pytest.raises(AttachmentTooLargeError):
            service.validate(text_upload(size=101), AttachmentKind.FILE)

    @pytest.mark.asyncio
    async def test_file_type_not_allowed(self, unit_env):
        service = await unit_env.get(AttachmentService)
        upload = text_upload(name="run.sh", content_type="application/x-sh")

        with pytest.raises(InvalidAttachmentError):
            service.validate(upload, AttachmentKind.FILE)

    @pytest.mark.asyncio
    async def test_two_files_of_same_kind_fail(self, unit_env):
        service = await unit_env.get(AttachmentService)

        with pytest.raises(InvalidInputError):
            service.validate_all([png_upload("a.png"), png_upload("b.png")])


class TestUpload:
    """Tests for storing attachments."""

    @pytest.mark.asyncio
    async def test_upload_stores_blob_and_returns_attachment(self, unit_env):
        # Arrange
        service = await unit_env.get(AttachmentService)
        storage = await unit_env.get(InMemoryObjectStorage)

        # Act
        attachment = await service.upload(png_upload(), AttachmentKind.IMAGE)

        # Assert
        assert attachment.kind == AttachmentKind.IMAGE
        assert attachment.url.startswith("memory://attachments/image/")
        assert attachment.url.endswith(".png")
        assert attachment.original_name == "photo.png"
        assert attachment.size == len(PNG_BYTES)
        assert len(storage.objects) == 1

    @pytest.mark.asyncio
    async def test_nothing_uploaded_when_one_file_is_invalid(self, unit_env):
        service = await unit_env.get(AttachmentService)
        storage = await unit_env.get(InMemoryObjectStorage)
        bad = text_upload(name="run.sh", content_type="application/x-sh")

        with pytest.raises(InvalidAttachmentError):
            await service.upload_all([png_upload(), bad])

        assert storage.objects == {}

    @pytest.mark.asyncio
    async def test_storage_failure_propagates(self, unit_env):
        service = await unit_env.get(AttachmentService)
        storage = await unit_env.get(InMemoryObjectStorage)
        storage.failure = StorageUnavailableError("down")

        with pytest.raises(StorageUnavailableError):
            await service.upload(png_upload(), AttachmentKind.IMAGE)

    @pytest.mark.asyncio
    async def test_upload_timeout_is_upload_failure(self):
        class SlowStorage(ObjectStorage):
            async def put(self, content, key, content_type):
                await asyncio.sleep(10)
                return "never"

        service = AttachmentService(
            storage=SlowStorage(),
            settings=AttachmentSettings(upload_timeout_seconds=0.01),
        )

        with pytest.raises(UploadFailedError, match="timed out"):
            await service.upload(png_upload(), AttachmentKind.IMAGE)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failure", [httpx.InvalidURL("bad endpoint"), RuntimeError("socket closed")]
    )
    async def test_unexpected_storage_error_is_upload_failure(self, unit_env, failure):
        service = await unit_env.get(AttachmentService)
        storage = await unit_env.get(InMemoryObjectStorage)
        storage.failure = failure

        with pytest.raises(UploadFailedError) as exc_info:
            await service.upload(text_upload(), AttachmentKind.FILE)

        assert exc_info.value.__cause__ is failure
        assert storage.objects == {}
