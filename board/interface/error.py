"""Translation of domain errors into HTTP errors."""

import logfire
from fastapi import HTTPException, status

from board.domain.error import (
    AttachmentTooLargeError,
    CommentHasRepliesError,
    ConcurrentUpdateError,
    DomainError,
    InvalidAttachmentError,
    InvalidInputError,
    NotAuthorizedError,
    NotFoundError,
    StorageUnavailableError,
    UploadFailedError,
)

# Most specific first: StorageUnavailableError is an UploadFailedError
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (InvalidAttachmentError, status.HTTP_400_BAD_REQUEST),
    (AttachmentTooLargeError, status.HTTP_413_REQUEST_ENTITY_TOO_LARGE),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (ConcurrentUpdateError, status.HTTP_409_CONFLICT),
    (CommentHasRepliesError, status.HTTP_409_CONFLICT),
    (StorageUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (UploadFailedError, status.HTTP_502_BAD_GATEWAY),
]


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP error a client should see."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            if status_code >= 500:
                logfire.error(
                    "Request failed upstream",
                    error=str(error),
                    error_type=type(error).__name__,
                )
            else:
                logfire.warn(
                    "Request rejected",
                    status_code=status_code,
                    error=str(error),
                    error_type=type(error).__name__,
                )
            return HTTPException(status_code=status_code, detail=str(error))

    logfire.error(
        "Unmapped domain error", error=str(error), error_type=type(error).__name__
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal error"
    )
