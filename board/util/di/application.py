"""Application layer DI providers."""

from dishka import Scope, provide

from board.application.usecase.comment import (
    CreateCommentUseCase,
    CreateReplyUseCase,
    DeleteCommentUseCase,
    GetCommentUseCase,
    ListCommentsUseCase,
    ListUserCommentsUseCase,
    SearchCommentsUseCase,
    SubscribeCommentsUseCase,
    UpdateCommentUseCase,
)
from board.domain.service import (
    AttachmentService,
    CommentService,
    EventBroadcaster,
    SearchService,
)
from board.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Write use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        attachment_service: AttachmentService,
        search_service: SearchService,
        broadcaster: EventBroadcaster,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            attachment_service=attachment_service,
            search_service=search_service,
            broadcaster=broadcaster,
        )

    @provide(scope=Scope.REQUEST)
    def get_create_reply_use_case(
        self, create_comment: CreateCommentUseCase
    ) -> CreateReplyUseCase:
        """Provide create reply use case."""
        return CreateReplyUseCase(create_comment=create_comment)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self,
        comment_service: CommentService,
        attachment_service: AttachmentService,
        search_service: SearchService,
        broadcaster: EventBroadcaster,
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            comment_service=comment_service,
            attachment_service=attachment_service,
            search_service=search_service,
            broadcaster=broadcaster,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self,
        comment_service: CommentService,
        search_service: SearchService,
        broadcaster: EventBroadcaster,
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service,
            search_service=search_service,
            broadcaster=broadcaster,
        )

    # Read use cases
    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self, comment_service: CommentService
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_search_comments_use_case(
        self, comment_service: CommentService, search_service: SearchService
    ) -> SearchCommentsUseCase:
        """Provide search comments use case."""
        return SearchCommentsUseCase(
            comment_service=comment_service, search_service=search_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_user_comments_use_case(
        self, comment_service: CommentService
    ) -> ListUserCommentsUseCase:
        """Provide list user comments use case."""
        return ListUserCommentsUseCase(comment_service=comment_service)

    # Live events
    @provide(scope=Scope.APP)
    def get_subscribe_comments_use_case(
        self, broadcaster: EventBroadcaster
    ) -> SubscribeCommentsUseCase:
        """Provide subscribe use case (no request state involved)."""
        return SubscribeCommentsUseCase(broadcaster=broadcaster)
