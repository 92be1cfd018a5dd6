"""Unit tests for request helpers."""

import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from board.config import AttachmentSettings
from board.domain.error import AttachmentTooLargeError
from board.domain.value import AttachmentKind
from board.interface.api.dependencies import read_uploads


def upload_of(content: bytes, size: int | None = None) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        size=size,
        filename="notes.txt",
        headers=Headers({"content-type": "text/plain"}),
    )


class TestReadUploads:
    @pytest.mark.asyncio
    async def test_slots_are_tagged_with_their_kind(self):
        settings = AttachmentSettings()

        uploads = await read_uploads(settings, None, None, upload_of(b"hello"))

        assert len(uploads) == 1
        assert uploads[0].kind == AttachmentKind.FILE
        assert uploads[0].content == b"hello"
        assert uploads[0].content_type == "text/plain"

    @pytest.mark.asyncio
    async def test_oversized_file_is_not_read_past_the_cap(self):
        settings = AttachmentSettings(file_max_bytes=10)
        upload = upload_of(b"x" * 10_000)

        with pytest.raises(AttachmentTooLargeError):
            await read_uploads(settings, None, None, upload)

        assert upload.file.tell() == 11

    @pytest.mark.asyncio
    async def test_declared_size_over_cap_is_refused_unread(self):
        settings = AttachmentSettings(file_max_bytes=10)
        upload = upload_of(b"x" * 100, size=100)

        with pytest.raises(AttachmentTooLargeError) as exc_info:
            await read_uploads(settings, None, None, upload)

        assert exc_info.value.size == 100
        assert upload.file.tell() == 0

    @pytest.mark.asyncio
    async def test_file_at_cap_is_accepted(self):
        settings = AttachmentSettings(file_max_bytes=10)

        uploads = await read_uploads(settings, None, None, upload_of(b"x" * 10))

        assert uploads[0].size == 10
