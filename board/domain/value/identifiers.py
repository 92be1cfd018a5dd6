"""Strongly typed identifiers for board domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Comments are identified by server-generated UUIDs
CommentId = NewType("CommentId", UUID)

# Users are owned by the external identity provider, which hands us an opaque string
UserId = NewType("UserId", str)
