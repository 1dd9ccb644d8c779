"""Unit tests for InMemoryCommentStore."""

import random
import time

import pytest

from discuss.config import StoreLatency
from discuss.domain.error import StoreUnavailableError
from discuss.domain.model import CommentDraft
from discuss.domain.value import StoreOperation
from discuss.persistence.repository.inmemory import InMemoryCommentStore


class TestSeeding:
    """Tests for sample data seeding."""

    @pytest.mark.asyncio
    async def test_seeds_sample_thread_on_first_list(self):
        """An empty seeded store should return the sample thread."""
        store = InMemoryCommentStore(seed_sample_data=True)

        comments = await store.list()

        assert [c.id for c in comments] == ["1", "2", "3", "4", "5", "6", "7"]
        assert comments[0].author == "Alice"
        assert comments[5].parent_id is None
        assert not any(c.optimistic for c in comments)

    @pytest.mark.asyncio
    async def test_no_seed_by_default(self):
        """Without seeding the store starts empty."""
        store = InMemoryCommentStore()

        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_clear_does_not_reseed(self):
        """clear() should leave the store empty for good."""
        store = InMemoryCommentStore(seed_sample_data=True)
        await store.list()

        await store.clear()

        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_first_add_seeds_before_appending(self):
        """An add issued before any list should land after the sample."""
        store = InMemoryCommentStore(seed_sample_data=True)

        comment = await store.add(
            CommentDraft(parent_id="7", content="Hi", author="Zoe")
        )

        ids = [c.id for c in await store.list()]
        assert ids == ["1", "2", "3", "4", "5", "6", "7", comment.id]

    @pytest.mark.asyncio
    async def test_first_delete_applies_to_sample(self):
        """A delete issued before any list should not be undone by seeding."""
        store = InMemoryCommentStore(seed_sample_data=True)

        await store.delete("1")

        assert [c.id for c in await store.list()] == ["6", "7"]

    @pytest.mark.asyncio
    async def test_list_returns_a_copy(self):
        """Mutating the returned list should not affect the store."""
        store = InMemoryCommentStore(seed_sample_data=True)

        (await store.list()).clear()

        assert len(await store.list()) == 7


class TestMutations:
    """Tests for add and delete."""

    @pytest.mark.asyncio
    async def test_add_assigns_id_and_timestamp(self):
        """Added comments should get a durable id and aware timestamp."""
        store = InMemoryCommentStore()

        comment = await store.add(
            CommentDraft(parent_id=None, content="Hello", author="Zoe")
        )

        assert comment.id.startswith("comment_")
        assert comment.created_at.tzinfo is not None
        assert comment.optimistic is False
        assert await store.list() == [comment]

    @pytest.mark.asyncio
    async def test_delete_cascades_to_descendants(self):
        """Deleting a comment should remove its whole subtree."""
        store = InMemoryCommentStore(seed_sample_data=True)

        await store.delete("2")

        assert [c.id for c in await store.list()] == ["1", "6", "7"]

    @pytest.mark.asyncio
    async def test_delete_unknown_is_noop(self):
        """Unknown ids should not raise."""
        store = InMemoryCommentStore(seed_sample_data=True)

        await store.delete("nope")

        assert len(await store.list()) == 7


class TestFailureInjection:
    """Tests for fail_next and failure_rate."""

    @pytest.mark.asyncio
    async def test_fail_next_fails_once(self):
        """fail_next should fail exactly the requested number of calls."""
        store = InMemoryCommentStore()
        store.fail_next(StoreOperation.ADD)
        draft = CommentDraft(content="Hi", author="Zoe")

        with pytest.raises(StoreUnavailableError):
            await store.add(draft)
        comment = await store.add(draft)

        assert await store.list() == [comment]

    @pytest.mark.asyncio
    async def test_failure_rate_applies_to_mutations_only(self):
        """Random failures should never hit list()."""
        store = InMemoryCommentStore(
            seed_sample_data=True, failure_rate=1.0, rng=random.Random(1)
        )

        assert len(await store.list()) == 7
        with pytest.raises(StoreUnavailableError):
            await store.add(CommentDraft(content="Hi", author="Zoe"))
        with pytest.raises(StoreUnavailableError):
            await store.delete("1")
        assert len(await store.list()) == 7

    @pytest.mark.asyncio
    async def test_latency_is_simulated(self):
        """Calls should take at least the configured latency."""
        store = InMemoryCommentStore(
            latency=StoreLatency(list_ms=30, add_ms=0, delete_ms=0)
        )

        started = time.monotonic()
        await store.list()

        assert time.monotonic() - started >= 0.025
