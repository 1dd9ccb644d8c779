"""Domain layer DI providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire

from discuss.config import ThreadSettings
from discuss.domain.repository import CommentStore
from discuss.domain.service import ThreadCoordinator
from discuss.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    The coordinator is APP-scoped: it owns the thread's comments and its
    pending mutations outlive the request that started them.
    """

    scope = Scope.APP

    @provide
    async def get_thread_coordinator(
        self, store: CommentStore, settings: ThreadSettings
    ) -> AsyncIterator[ThreadCoordinator]:
        """Provide the thread coordinator.

        Waits for in-flight mutations when the container closes.
        """
        coordinator = ThreadCoordinator(store=store, settings=settings)
        yield coordinator
        if coordinator.pending_count:
            logfire.info(
                "Draining pending mutations", pending=coordinator.pending_count
            )
        await coordinator.drain()
