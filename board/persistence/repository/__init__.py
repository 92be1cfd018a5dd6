"""PostgreSQL repository implementations."""

from board.persistence.repository.comment import PostgresCommentRepository

__all__ = [
    "PostgresCommentRepository",
]
