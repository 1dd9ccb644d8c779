"""Record store infrastructure providers."""

import random
from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire

from discuss.config import Settings
from discuss.domain.repository import CommentStore
from discuss.persistence.database import (
    create_engine,
    create_schema,
    create_session_factory,
)
from discuss.persistence.repository import SqlCommentStore
from discuss.persistence.repository.inmemory import InMemoryCommentStore
from discuss.util.di.base import ProviderBase


class StoreProvider(ProviderBase):
    """Record store component base."""

    __mock_component__ = "store"


class ProdStoreProvider(StoreProvider):
    """Production store provider.

    Selects the simulated in-memory store or the durable SQL store from
    ``settings.store.backend``.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_comment_store(self, settings: Settings) -> AsyncIterator[CommentStore]:
        """Provide the comment store, disposing the engine on shutdown."""
        store_settings = settings.store

        if store_settings.backend == "memory":
            logfire.info(
                "Using in-memory comment store",
                failure_rate=store_settings.failure_rate,
                seed_sample_data=store_settings.seed_sample_data,
            )
            yield InMemoryCommentStore(
                latency=store_settings.latency,
                failure_rate=store_settings.failure_rate,
                seed_sample_data=store_settings.seed_sample_data,
                rng=random.Random(store_settings.random_seed),
            )
            return

        engine = create_engine(settings)
        await create_schema(engine)
        logfire.info("Using SQL comment store", dialect=engine.dialect.name)
        try:
            yield SqlCommentStore(
                create_session_factory(engine),
                seed_sample_data=store_settings.seed_sample_data,
            )
        finally:
            await engine.dispose()
