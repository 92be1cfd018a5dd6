"""Search backend clients.

Implements the comment index on top of the Elasticsearch REST API.
"""

from uuid import UUID

import httpx
import logfire

from board.config import SearchSettings
from board.domain.error import IndexDegradedError
from board.domain.model.comment import MAX_TEXT_LENGTH
from board.domain.service.search_service import SearchBackend
from board.domain.value import CommentId, SearchDocument, SortOrder

# Every comment text fits in one keyword term, so all of it stays searchable
KEYWORD_IGNORE_ABOVE = MAX_TEXT_LENGTH

INDEX_MAPPING = {
    "mappings": {
        "properties": {
            "id": {"type": "keyword"},
            "text": {
                "type": "text",
                "fields": {
                    "keyword": {"type": "keyword", "ignore_above": KEYWORD_IGNORE_ABOVE}
                },
            },
            "created_at": {"type": "date"},
            "parent_id": {"type": "keyword"},
        }
    }
}


def escape_wildcard(text: str) -> str:
    """Escape wildcard metacharacters so user input matches literally."""
    return text.replace("\\", "\\\\").replace("*", "\\*").replace("?", "\\?")


def build_search_query(text: str, sort: SortOrder, size: int) -> dict:
    """Root-comments-only, case-insensitive substring query."""
    return {
        "query": {
            "bool": {
                "must": [
                    {
                        "wildcard": {
                            "text.keyword": {
                                "value": f"*{escape_wildcard(text)}*",
                                "case_insensitive": True,
                            }
                        }
                    }
                ],
                # Replies are excluded: search finds threads, not buried replies
                "must_not": [{"exists": {"field": "parent_id"}}],
            }
        },
        "sort": [{"created_at": {"order": sort.value}}],
        "size": size,
        "_source": ["id"],
    }


class ElasticsearchBackend(SearchBackend):
    """Search backend backed by an Elasticsearch index."""

    def __init__(
        self, settings: SearchSettings, client: httpx.AsyncClient | None = None
    ) -> None:
        """Initialize Elasticsearch client.

        Args:
            settings: Cluster URL, index name, credentials and limits
            client: Shared HTTP client (one is created when omitted)
        """
        self.base_url = settings.url.rstrip("/")
        self.index = settings.index
        self.client = client or httpx.AsyncClient(timeout=settings.timeout_seconds)
        self.max_results = settings.max_results
        self.auth = (
            (settings.username, settings.password or "")
            if settings.username
            else None
        )
        self._index_ready = False

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: dict | None = None,
        allow_status: tuple[int, ...] = (),
    ) -> httpx.Response:
        """Send one request to the cluster.

        Raises:
            IndexDegradedError: If the cluster is unreachable or answers with an error
        """
        try:
            response = await self.client.request(
                method, f"{self.base_url}{path}", json=json, auth=self.auth
            )
        except httpx.TransportError as e:
            raise IndexDegradedError(f"Search backend unreachable: {e}") from e

        if response.status_code >= 400 and response.status_code not in allow_status:
            raise IndexDegradedError(
                f"Search backend returned {response.status_code} for {method} {path}"
            )
        return response

    async def ensure_index(self) -> None:
        """Create the index with its mapping unless it already exists."""
        if self._index_ready:
            return
        response = await self._request("HEAD", f"/{self.index}", allow_status=(404,))
        if response.status_code == 404:
            # 400 means another writer created it first
            await self._request(
                "PUT", f"/{self.index}", json=INDEX_MAPPING, allow_status=(400,)
            )
            logfire.info("Search index created", index=self.index)
        self._index_ready = True

    async def upsert(self, document: SearchDocument) -> None:
        await self.ensure_index()
        await self._request(
            "PUT",
            f"/{self.index}/_doc/{document.id}",
            json=document.model_dump(mode="json"),
        )

    async def delete(self, comment_id: CommentId) -> None:
        await self.ensure_index()
        await self._request(
            "DELETE", f"/{self.index}/_doc/{comment_id}", allow_status=(404,)
        )

    async def search(self, text: str, sort: SortOrder) -> list[CommentId]:
        await self.ensure_index()
        response = await self._request(
            "POST",
            f"/{self.index}/_search",
            json=build_search_query(text, sort, self.max_results),
        )
        try:
            hits = response.json()["hits"]["hits"]
            return [CommentId(UUID(hit["_source"]["id"])) for hit in hits]
        except (KeyError, TypeError, ValueError) as e:
            raise IndexDegradedError(f"Malformed search response: {e}") from e


class InMemorySearchBackend(SearchBackend):
    """In-memory search backend for development and testing.

    Set `available = False` to simulate an unreachable cluster.
    """

    def __init__(self) -> None:
        self.documents: dict[CommentId, SearchDocument] = {}
        self.available = True

    def _check_available(self) -> None:
        if not self.available:
            raise IndexDegradedError("Search backend unreachable")

    async def upsert(self, document: SearchDocument) -> None:
        self._check_available()
        self.documents[document.id] = document

    async def delete(self, comment_id: CommentId) -> None:
        self._check_available()
        self.documents.pop(comment_id, None)

    async def search(self, text: str, sort: SortOrder) -> list[CommentId]:
        self._check_available()
        needle = text.lower()
        hits = [
            doc
            for doc in self.documents.values()
            if doc.parent_id is None and doc.text and needle in doc.text.lower()
        ]
        hits.sort(key=lambda d: (d.created_at, str(d.id)), reverse=sort.descending)
        return [doc.id for doc in hits]
