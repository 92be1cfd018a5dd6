"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from board.config import AttachmentSettings, SearchSettings, Settings, StorageSettings
from board.domain.service import EventBroadcaster
from board.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_attachment_settings(self, settings: Settings) -> AttachmentSettings:
        return settings.attachments

    @provide(scope=Scope.APP)
    def provide_search_settings(self, settings: Settings) -> SearchSettings:
        return settings.search

    @provide(scope=Scope.APP)
    def provide_storage_settings(self, settings: Settings) -> StorageSettings:
        return settings.storage


class ProdBroadcastProvider(ProviderBase):
    """Event broadcaster provider.

    One broadcaster per process: publishers in request scopes and websocket
    subscribers must share it.
    """

    @provide(scope=Scope.APP)
    def provide_broadcaster(self, settings: Settings) -> EventBroadcaster:
        return EventBroadcaster(max_queue_size=settings.broadcast.subscriber_queue_size)
