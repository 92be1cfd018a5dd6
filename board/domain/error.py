"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class InvalidInputError(DomainError):
    """Raised when a request is malformed or would leave a comment empty."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to change content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class ConcurrentUpdateError(DomainError):
    """Raised when a comment changed between read and write."""

    def __init__(self, resource: str, resource_id: str, expected_version: int):
        self.expected_version = expected_version
        super().__init__(
            f"{resource} {resource_id} was modified concurrently "
            f"(expected version {expected_version})"
        )


class CommentHasRepliesError(DomainError):
    """Raised when a comment cannot be removed because replies still point at it."""

    def __init__(self, comment_id: str):
        self.comment_id = comment_id
        super().__init__(f"Comment {comment_id} still has replies")


class AttachmentError(DomainError):
    """Base error for the attachment pipeline."""

    pass


class InvalidAttachmentError(AttachmentError):
    """Raised when an attachment's content type is not allowed for its kind."""

    def __init__(self, kind: str, content_type: str, reason: str | None = None):
        self.kind = kind
        self.content_type = content_type
        super().__init__(
            reason or f"Content type '{content_type}' is not allowed for {kind}"
        )


class AttachmentTooLargeError(AttachmentError):
    """Raised when an attachment exceeds the size cap of its kind."""

    def __init__(self, kind: str, size: int, max_size: int):
        self.kind = kind
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"{kind} of {size} bytes exceeds the maximum of {max_size} bytes"
        )


class UploadFailedError(AttachmentError):
    """Raised when object storage rejects or loses an upload."""

    pass


class StorageUnavailableError(UploadFailedError):
    """Raised when object storage cannot be reached at all."""

    pass


class IndexDegradedError(DomainError):
    """Raised by search backends when the index cannot serve a request.

    Never surfaces past the search synchronizer.
    """

    pass
