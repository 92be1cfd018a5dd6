"""Request-level helpers shared by the routes."""

from fastapi import Header, HTTPException, UploadFile, status

from board.config import AttachmentSettings
from board.domain.error import AttachmentTooLargeError
from board.domain.value import AttachmentKind, UploadedFile


def current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Caller identity, set by the authenticating gateway in front of the API.

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return x_user_id.strip()


async def read_uploads(
    settings: AttachmentSettings,
    image: UploadFile | None,
    video: UploadFile | None,
    attachment: UploadFile | None,
) -> list[UploadedFile]:
    """Read the named upload slots into memory, tagged with their kind.

    Each slot is read up to its kind's size cap plus one byte, so an
    oversized file is refused without being buffered whole.

    Raises:
        AttachmentTooLargeError: If a file exceeds the cap of its slot
    """
    slots = [
        (image, AttachmentKind.IMAGE),
        (video, AttachmentKind.VIDEO),
        (attachment, AttachmentKind.FILE),
    ]
    uploads = []
    for upload, kind in slots:
        if upload is None or not upload.filename:
            continue
        cap = settings.max_bytes(kind)
        if upload.size is not None and upload.size > cap:
            raise AttachmentTooLargeError(kind.value, upload.size, cap)
        content = await upload.read(cap + 1)
        if len(content) > cap:
            raise AttachmentTooLargeError(kind.value, upload.size or len(content), cap)
        uploads.append(
            UploadedFile(
                filename=upload.filename,
                content_type=upload.content_type or "application/octet-stream",
                content=content,
                kind=kind,
            )
        )
    return uploads
