"""In-memory comment store with simulated latency and failures."""

import asyncio
import random
from collections import Counter
from typing import List, Optional
from uuid import uuid4

import logfire

from discuss.config import StoreLatency
from discuss.domain.error import StoreUnavailableError
from discuss.domain.model.comment import Comment, CommentDraft, utcnow
from discuss.domain.repository.comment import CommentStore
from discuss.domain.service.tree_builder import collect_subtree_ids
from discuss.domain.value import CommentId, StoreOperation
from discuss.persistence.sample import sample_comments


class InMemoryCommentStore(CommentStore):
    """In-memory implementation of CommentStore.

    Simulates a remote store: every call sleeps for the configured latency,
    and add/delete calls fail randomly with ``failure_rate`` probability or
    deterministically after ``fail_next()``.
    """

    def __init__(
        self,
        latency: Optional[StoreLatency] = None,
        failure_rate: float = 0.0,
        seed_sample_data: bool = False,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._comments: List[Comment] = []
        self._latency = latency or StoreLatency(list_ms=0, add_ms=0, delete_ms=0)
        self._failure_rate = failure_rate
        self._rng = rng or random.Random()
        # Seeded by the first list, add or delete, unless cleared before
        self._initialized = not seed_sample_data
        self._forced_failures: Counter[StoreOperation] = Counter()

    def fail_next(self, operation: StoreOperation, times: int = 1) -> None:
        """Make the next ``times`` calls of ``operation`` fail."""
        self._forced_failures[operation] += times

    async def list(self) -> List[Comment]:
        """Return every stored comment in insertion order."""
        await self._simulate(StoreOperation.LIST)
        self._ensure_seeded()
        return list(self._comments)

    async def add(self, draft: CommentDraft) -> Comment:
        """Append a comment with a fresh id and timestamp."""
        await self._simulate(StoreOperation.ADD)
        self._ensure_seeded()
        comment = Comment(
            id=CommentId(f"comment_{uuid4().hex}"),
            parent_id=draft.parent_id,
            content=draft.content,
            author=draft.author,
            created_at=utcnow(),
        )
        self._comments.append(comment)
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Remove a comment and all of its descendants."""
        await self._simulate(StoreOperation.DELETE)
        self._ensure_seeded()
        doomed = collect_subtree_ids(self._comments, comment_id)
        self._comments = [c for c in self._comments if c.id not in doomed]

    async def clear(self) -> None:
        """Remove every comment (without re-seeding)."""
        self._comments = []
        self._initialized = True

    def _ensure_seeded(self) -> None:
        if self._initialized:
            return
        self._comments = sample_comments()
        self._initialized = True
        logfire.info("Store seeded with sample thread", count=len(self._comments))

    async def _simulate(self, operation: StoreOperation) -> None:
        delay_ms = {
            StoreOperation.LIST: self._latency.list_ms,
            StoreOperation.ADD: self._latency.add_ms,
            StoreOperation.DELETE: self._latency.delete_ms,
        }[operation]
        # Always yield so callers observe the call as asynchronous
        await asyncio.sleep(delay_ms / 1000)

        if self._forced_failures[operation] > 0:
            self._forced_failures[operation] -= 1
            raise StoreUnavailableError(operation.value, "injected failure")

        if (
            operation != StoreOperation.LIST
            and self._failure_rate > 0
            and self._rng.random() < self._failure_rate
        ):
            raise StoreUnavailableError(operation.value, "simulated network failure")
