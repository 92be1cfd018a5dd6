"""Object storage infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from board.adapter.storage import HttpObjectStorage
from board.config import StorageSettings
from board.domain.service import ObjectStorage
from board.util.di.base import ProviderBase


class StorageProvider(ProviderBase):
    """Object storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production object storage provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_object_storage(
        self, settings: StorageSettings
    ) -> AsyncIterator[ObjectStorage]:
        """Provide HTTP object storage; its connection pool closes with the app."""
        storage = HttpObjectStorage(settings)
        yield storage
        await storage.aclose()
