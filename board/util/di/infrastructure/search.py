"""Search infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from board.adapter.search import ElasticsearchBackend
from board.config import SearchSettings
from board.domain.service import SearchBackend
from board.util.di.base import ProviderBase


class SearchProvider(ProviderBase):
    """Search component base."""

    __mock_component__ = "search"


class ProdSearchProvider(SearchProvider):
    """Production search provider using Elasticsearch."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_search_backend(
        self, settings: SearchSettings
    ) -> AsyncIterator[SearchBackend]:
        """Provide Elasticsearch backend.

        APP-scoped so the index-exists check runs once per process and every
        request shares one connection pool.
        """
        backend = ElasticsearchBackend(settings)
        yield backend
        await backend.aclose()
