"""SQLAlchemy table definitions for the comment board.

These table definitions are used for SQLAlchemy Core queries.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE (forest via parent_id)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("text", Text, nullable=True),  # NULL when attachments carry the content
    Column("author_id", String(255), nullable=False),  # From the identity provider
    # No ON DELETE CASCADE: the service removes children first, and the FK makes
    # a reply racing its parent's deletion fail instead of becoming an orphan
    Column("parent_id", UUID(as_uuid=True), ForeignKey("comments.id"), nullable=True),
    Column("attachments", JSONB, nullable=False, server_default="[]"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("version", Integer, nullable=False, server_default="1"),
    CheckConstraint(
        "parent_id IS NULL OR parent_id <> id", name="ck_comments_not_self_parent"
    ),
    CheckConstraint("version >= 1", name="ck_comments_version_positive"),
    CheckConstraint(
        "text IS NOT NULL OR jsonb_array_length(attachments) > 0",
        name="ck_comments_has_content",
    ),
)

Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)
Index("idx_comments_created_at", comments_table.c.created_at)
