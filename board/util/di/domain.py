"""Domain layer DI providers."""

from dishka import Scope, provide

from board.config import AttachmentSettings, SearchSettings
from board.domain.repository import CommentRepository
from board.domain.service import (
    AttachmentService,
    CommentService,
    ObjectStorage,
    SearchBackend,
    SearchService,
)
from board.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_attachment_service(
        self, storage: ObjectStorage, settings: AttachmentSettings
    ) -> AttachmentService:
        """Provide attachment domain service."""
        return AttachmentService(storage=storage, settings=settings)

    @provide
    def get_search_service(
        self, backend: SearchBackend, settings: SearchSettings
    ) -> SearchService:
        """Provide search synchronizer domain service."""
        return SearchService(backend=backend, settings=settings)
