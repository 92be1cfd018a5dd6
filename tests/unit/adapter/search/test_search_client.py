"""Unit tests for the Elasticsearch search backend."""

import json
from uuid import uuid4

import httpx
import pytest
from pydantic import ValidationError

from board.adapter.search import ElasticsearchBackend
from board.adapter.search.client import (
    INDEX_MAPPING,
    build_search_query,
    escape_wildcard,
)
from board.config import SearchSettings
from board.domain.error import IndexDegradedError
from board.domain.model.comment import MAX_TEXT_LENGTH
from board.domain.service.search_service import to_document
from board.domain.value import SortOrder
from tests.conftest import make_comment


def backend_with(handler, **settings) -> ElasticsearchBackend:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ElasticsearchBackend(SearchSettings(**settings), client=client)


class TestBuildSearchQuery:
    def test_escape_wildcard(self):
        assert escape_wildcard("50% off*?") == "50% off\\*\\?"
        assert escape_wildcard("a\\b") == "a\\\\b"

    def test_query_matches_roots_case_insensitively(self):
        query = build_search_query("Hello*", SortOrder.ASC, 25)

        wildcard = query["query"]["bool"]["must"][0]["wildcard"]["text.keyword"]
        assert wildcard == {"value": "*Hello\\**", "case_insensitive": True}
        assert query["query"]["bool"]["must_not"] == [
            {"exists": {"field": "parent_id"}}
        ]
        assert query["sort"] == [{"created_at": {"order": "asc"}}]
        assert query["size"] == 25


class TestIndexMapping:
    def test_longest_allowed_text_stays_in_keyword_field(self):
        keyword = INDEX_MAPPING["mappings"]["properties"]["text"]["fields"]["keyword"]

        assert keyword["ignore_above"] >= MAX_TEXT_LENGTH

    def test_longer_text_is_rejected_before_indexing(self):
        make_comment(text="x" * MAX_TEXT_LENGTH)

        with pytest.raises(ValidationError):
            make_comment(text="x" * (MAX_TEXT_LENGTH + 1))


class TestElasticsearchBackend:
    @pytest.mark.asyncio
    async def test_unreachable_cluster_is_index_degraded(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        backend = backend_with(refuse, url="http://search.invalid")

        with pytest.raises(IndexDegradedError):
            await backend.search("hello", SortOrder.DESC)
        await backend.aclose()

    @pytest.mark.asyncio
    async def test_search_parses_hit_ids(self):
        comment_id = uuid4()
        requests = []

        def handler(request):
            requests.append((request.method, request.url.path))
            if request.method == "HEAD":
                return httpx.Response(200)
            return httpx.Response(
                200,
                json={"hits": {"hits": [{"_source": {"id": str(comment_id)}}]}},
            )

        backend = backend_with(handler, index="comments")

        ids = await backend.search("hello", SortOrder.DESC)

        assert ids == [comment_id]
        assert requests == [("HEAD", "/comments"), ("POST", "/comments/_search")]
        await backend.aclose()

    @pytest.mark.asyncio
    async def test_requests_share_one_client(self):
        """The index check and every write go through the same connection pool."""
        seen = []

        def handler(request):
            seen.append(request.method)
            return httpx.Response(200, json={})

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        backend = ElasticsearchBackend(SearchSettings(), client=client)
        document = to_document(make_comment(text="hello"))

        await backend.upsert(document)
        await backend.delete(document.id)
        await backend.aclose()

        assert seen == ["HEAD", "PUT", "DELETE"]
        assert client.is_closed

    @pytest.mark.asyncio
    async def test_longest_text_is_indexed_whole(self):
        bodies = []

        def handler(request):
            if request.method == "PUT" and "/_doc/" in request.url.path:
                bodies.append(json.loads(request.content))
            return httpx.Response(200, json={})

        backend = backend_with(handler)
        text = "é" * MAX_TEXT_LENGTH

        await backend.upsert(to_document(make_comment(text=text)))
        await backend.aclose()

        assert bodies[0]["text"] == text
