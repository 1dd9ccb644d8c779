"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.usecase.thread import (
    DeleteCommentUseCase,
    ExportThreadUseCase,
    GetNotificationsUseCase,
    GetThreadUseCase,
    ReplyUseCase,
)
from discuss.domain.service import ThreadCoordinator
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(
        self, coordinator: ThreadCoordinator
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(coordinator=coordinator)

    @provide(scope=Scope.REQUEST)
    def get_reply_use_case(self, coordinator: ThreadCoordinator) -> ReplyUseCase:
        """Provide reply use case."""
        return ReplyUseCase(coordinator=coordinator)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, coordinator: ThreadCoordinator
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(coordinator=coordinator)

    @provide(scope=Scope.REQUEST)
    def get_export_thread_use_case(
        self, coordinator: ThreadCoordinator
    ) -> ExportThreadUseCase:
        """Provide export thread use case."""
        return ExportThreadUseCase(coordinator=coordinator)

    @provide(scope=Scope.REQUEST)
    def get_get_notifications_use_case(
        self, coordinator: ThreadCoordinator
    ) -> GetNotificationsUseCase:
        """Provide get notifications use case."""
        return GetNotificationsUseCase(coordinator=coordinator)
