"""Attachment pipeline domain service.

Validates binary attachments and stores them in object storage before any
comment references them.
"""

import asyncio
from collections import Counter
from pathlib import PurePosixPath
from uuid import uuid4

import logfire

from board.config import AttachmentSettings
from board.domain.error import (
    AttachmentTooLargeError,
    InvalidAttachmentError,
    InvalidInputError,
    UploadFailedError,
)
from board.domain.model import Attachment
from board.domain.value import AttachmentKind, UploadedFile
from board.util.magic_bytes import matches_declared_type

from .base import Service


class ObjectStorage:
    """Object storage interface for attachment blobs."""

    async def put(self, content: bytes, key: str, content_type: str) -> str:
        """Store a blob under `key`.

        Args:
            content: Raw bytes
            key: Storage key (path inside the bucket)
            content_type: MIME type to serve the blob with

        Returns:
            Stable public URL of the stored blob

        Raises:
            UploadFailedError: If the storage backend rejects the upload
            StorageUnavailableError: If the storage backend cannot be reached
        """
        raise NotImplementedError


class AttachmentService(Service):
    """Domain service for validating and uploading attachments."""

    def __init__(self, storage: ObjectStorage, settings: AttachmentSettings) -> None:
        """Initialize attachment service.

        Args:
            storage: Object storage client
            settings: Per-kind validation rules and upload timeout
        """
        self.storage = storage
        self.settings = settings

    @staticmethod
    def classify(upload: UploadedFile) -> AttachmentKind:
        """Pick the attachment kind for a file.

        An explicit slot wins; otherwise the content type decides.
        """
        if upload.kind is not None:
            return upload.kind
        if upload.content_type.startswith("image/"):
            return AttachmentKind.IMAGE
        if upload.content_type.startswith("video/"):
            return AttachmentKind.VIDEO
        return AttachmentKind.FILE

    def validate(self, upload: UploadedFile, kind: AttachmentKind) -> None:
        """Check a file against the rules of its kind.

        Raises:
            InvalidAttachmentError: If the content type is not allowed
            AttachmentTooLargeError: If the file exceeds the size cap
        """
        content_type = upload.content_type.lower()

        if kind == AttachmentKind.IMAGE:
            if content_type not in self.settings.image_types:
                raise InvalidAttachmentError(kind.value, upload.content_type)
            if upload.size > self.settings.image_max_bytes:
                raise AttachmentTooLargeError(
                    kind.value, upload.size, self.settings.image_max_bytes
                )
            if not matches_declared_type(upload.content, content_type):
                raise InvalidAttachmentError(
                    kind.value,
                    upload.content_type,
                    reason=f"File content does not match declared type '{upload.content_type}'",
                )
        elif kind == AttachmentKind.VIDEO:
            if not content_type.startswith("video/"):
                raise InvalidAttachmentError(kind.value, upload.content_type)
            if upload.size > self.settings.video_max_bytes:
                raise AttachmentTooLargeError(
                    kind.value, upload.size, self.settings.video_max_bytes
                )
        else:
            if content_type not in self.settings.file_types:
                raise InvalidAttachmentError(kind.value, upload.content_type)
            if upload.size > self.settings.file_max_bytes:
                raise AttachmentTooLargeError(
                    kind.value, upload.size, self.settings.file_max_bytes
                )

    def validate_all(
        self, uploads: list[UploadedFile]
    ) -> list[tuple[UploadedFile, AttachmentKind]]:
        """Validate a batch of files destined for one comment.

        Returns:
            Each file paired with its resolved kind

        Raises:
            InvalidInputError: If two files share a kind
            InvalidAttachmentError: If any file has a disallowed content type
            AttachmentTooLargeError: If any file is too large
        """
        classified = [(upload, self.classify(upload)) for upload in uploads]
        duplicated = [
            kind.value
            for kind, n in Counter(kind for _, kind in classified).items()
            if n > 1
        ]
        if duplicated:
            raise InvalidInputError(
                f"Only one attachment per kind is allowed: {', '.join(duplicated)}"
            )
        for upload, kind in classified:
            self.validate(upload, kind)
        return classified

    async def upload(self, upload: UploadedFile, kind: AttachmentKind) -> Attachment:
        """Validate and store one file.

        Args:
            upload: The file
            kind: Attachment kind the file is stored as

        Returns:
            Attachment pointing at the stored blob

        Raises:
            InvalidAttachmentError: If the content type is not allowed
            AttachmentTooLargeError: If the file is too large
            UploadFailedError: If storage fails or times out
        """
        with logfire.span(
            "attachment_service.upload",
            kind=kind.value,
            content_type=upload.content_type,
            size=upload.size,
        ):
            self.validate(upload, kind)

            suffix = PurePosixPath(upload.filename).suffix.lower()
            key = f"{kind.value}/{uuid4().hex}{suffix}"
            try:
                url = await asyncio.wait_for(
                    self.storage.put(upload.content, key, upload.content_type),
                    timeout=self.settings.upload_timeout_seconds,
                )
            except asyncio.TimeoutError as e:
                logfire.error("Attachment upload timed out", key=key)
                raise UploadFailedError(f"Upload of {upload.filename} timed out") from e
            except UploadFailedError as e:
                logfire.error("Attachment upload failed", key=key, error=str(e))
                raise
            except Exception as e:
                logfire.error(
                    "Attachment upload failed",
                    key=key,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise UploadFailedError(f"Upload of {upload.filename} failed: {e}") from e

            logfire.info("Attachment uploaded", key=key, url=url)
            return Attachment(
                kind=kind,
                url=url,
                original_name=upload.filename,
                content_type=upload.content_type,
                size=upload.size,
            )

    async def upload_all(self, uploads: list[UploadedFile]) -> list[Attachment]:
        """Validate every file, then upload them one after another.

        Nothing is stored unless every file passes validation.
        """
        classified = self.validate_all(uploads)
        attachments = []
        for upload, kind in classified:
            attachments.append(await self.upload(upload, kind))
        return attachments
