"""Test configuration and helpers."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from board.domain.model import Attachment, Comment
from board.domain.value import AttachmentKind, CommentId, UploadedFile, UserId

# Smallest valid image headers; content checks only look at the signature
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
GIF_BYTES = b"GIF89a" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_comment(
    author_id: str = "alice",
    text: str | None = "Hello",
    parent_id: CommentId | None = None,
    attachments: list[Attachment] | None = None,
    minutes: int = 0,
) -> Comment:
    """Build a comment created `minutes` after a fixed base time."""
    created = BASE_TIME + timedelta(minutes=minutes)
    return Comment(
        id=CommentId(uuid4()),
        author_id=UserId(author_id),
        text=text,
        parent_id=parent_id,
        attachments=attachments or [],
        created_at=created,
        updated_at=created,
    )


def make_attachment(
    kind: AttachmentKind = AttachmentKind.IMAGE, url: str | None = None
) -> Attachment:
    return Attachment(
        kind=kind,
        url=url or f"memory://attachments/{kind.value}/{uuid4().hex}",
        original_name=f"{kind.value}.bin",
        content_type="image/png" if kind == AttachmentKind.IMAGE else None,
        size=72,
    )


def png_upload(name: str = "photo.png", kind: AttachmentKind | None = None):
    return UploadedFile(
        filename=name, content_type="image/png", content=PNG_BYTES, kind=kind
    )


def text_upload(
    name: str = "notes.txt", size: int = 32, content_type: str = "text/plain"
) -> UploadedFile:
    return UploadedFile(filename=name, content_type=content_type, content=b"x" * size)


def pytest_configure(config):
    # Keep telemetry local; tests only need spans to be no-ops
    import logfire

    logfire.configure(send_to_logfire=False, console=False)
