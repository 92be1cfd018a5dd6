"""Magic bytes detection for image attachments.

Checks that an upload declared as an image really starts with that image
format's signature, so a renamed executable can't pass as a PNG.
"""

from typing import NamedTuple


class MagicSignature(NamedTuple):
    """Magic bytes signature for a file type."""

    bytes_pattern: bytes
    mime_type: str


# Reference: https://en.wikipedia.org/wiki/List_of_file_signatures
IMAGE_SIGNATURES: list[MagicSignature] = [
    # JPEG - FF D8 FF
    MagicSignature(b"\xff\xd8\xff", "image/jpeg"),
    # PNG - 89 50 4E 47 0D 0A 1A 0A
    MagicSignature(b"\x89PNG\r\n\x1a\n", "image/png"),
    MagicSignature(b"GIF87a", "image/gif"),
    MagicSignature(b"GIF89a", "image/gif"),
]


def detect_image_type(data: bytes) -> str | None:
    """Detect an image MIME type from the first bytes of a file.

    Args:
        data: Leading bytes of the file (16 are plenty).

    Returns:
        Detected MIME type or None if the format is not recognised.
    """
    for signature in IMAGE_SIGNATURES:
        if data.startswith(signature.bytes_pattern):
            return signature.mime_type
    return None


def matches_declared_type(data: bytes, content_type: str) -> bool:
    """Whether `data` carries the signature of the declared image type."""
    return detect_image_type(data[:16]) == content_type
