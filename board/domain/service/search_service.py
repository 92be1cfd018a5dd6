"""Search synchronizer domain service.

Mirrors comment mutations into an external full-text index. The index is a
derived, rebuildable view: its failures are logged and swallowed so they
never fail the store mutation that triggered them.
"""

import asyncio
from typing import Awaitable

import logfire

from board.config import SearchSettings
from board.domain.model import Comment
from board.domain.value import CommentId, SearchDocument, SortOrder

from .base import Service


class SearchBackend:
    """Full-text search backend interface."""

    async def upsert(self, document: SearchDocument) -> None:
        """Insert or replace the document with `document.id`."""
        raise NotImplementedError

    async def delete(self, comment_id: CommentId) -> None:
        """Remove the document for `comment_id` (no-op when absent)."""
        raise NotImplementedError

    async def search(self, text: str, sort: SortOrder) -> list[CommentId]:
        """Find root comments whose text contains `text`.

        Args:
            text: Substring to match, case-insensitively
            sort: Ordering by created_at

        Returns:
            Matching comment ids

        Raises:
            IndexDegradedError: If the index cannot answer
        """
        raise NotImplementedError


def to_document(comment: Comment) -> SearchDocument:
    return SearchDocument(
        id=comment.id,
        text=comment.text,
        created_at=comment.created_at.isoformat(),
        parent_id=comment.parent_id,
    )


class SearchService(Service):
    """Domain service keeping the search index in step with the store."""

    def __init__(self, backend: SearchBackend, settings: SearchSettings) -> None:
        """Initialize search service.

        Args:
            backend: Search backend client
            settings: Search settings (write timeout)
        """
        self.backend = backend
        self.timeout = settings.timeout_seconds

    async def _best_effort(
        self, operation: str, comment_id: CommentId, call: Awaitable[None]
    ) -> bool:
        """Run one index write, absorbing any failure.

        Returns:
            True if the write succeeded
        """
        try:
            await asyncio.wait_for(call, timeout=self.timeout)
            return True
        except asyncio.TimeoutError:
            logfire.warn(
                "Search index write timed out",
                operation=operation,
                comment_id=str(comment_id),
                timeout=self.timeout,
            )
        except Exception as e:
            logfire.warn(
                "Search index degraded",
                operation=operation,
                comment_id=str(comment_id),
                error=str(e),
                error_type=type(e).__name__,
            )
        return False

    async def index(self, comment: Comment) -> bool:
        """Add a newly created comment to the index."""
        with logfire.span("search_service.index", comment_id=str(comment.id)):
            return await self._best_effort(
                "index", comment.id, self.backend.upsert(to_document(comment))
            )

    async def update(self, comment: Comment) -> bool:
        """Refresh the indexed copy of an updated comment."""
        with logfire.span("search_service.update", comment_id=str(comment.id)):
            return await self._best_effort(
                "update", comment.id, self.backend.upsert(to_document(comment))
            )

    async def remove(self, comment_id: CommentId) -> bool:
        """Drop a deleted comment from the index."""
        with logfire.span("search_service.remove", comment_id=str(comment_id)):
            return await self._best_effort(
                "remove", comment_id, self.backend.delete(comment_id)
            )

    async def search(
        self, text: str, sort: SortOrder = SortOrder.DESC
    ) -> list[CommentId]:
        """Find candidate root comments matching `text`.

        Returns an empty list for blank queries and whenever the backend
        fails, so a degraded index never breaks the read path.
        """
        if not text or not text.strip():
            return []

        with logfire.span("search_service.search", text=text, sort=sort.value):
            try:
                ids = await asyncio.wait_for(
                    self.backend.search(text.strip(), sort), timeout=self.timeout
                )
            except asyncio.TimeoutError:
                logfire.warn("Search timed out", text=text, timeout=self.timeout)
                return []
            except Exception as e:
                logfire.warn(
                    "Search unavailable",
                    text=text,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return []

            logfire.info("Search completed", text=text, hits=len(ids))
            return ids
