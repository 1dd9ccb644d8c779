"""Unit tests for the thread use cases."""

import pytest

from discuss.application.usecase.thread import (
    DeleteCommentRequest,
    DeleteCommentUseCase,
    ExportThreadUseCase,
    GetNotificationsUseCase,
    GetThreadUseCase,
    ReplyRequest,
    ReplyUseCase,
)
from discuss.domain.error import NotFoundError, PendingCommentError, ValidationError
from discuss.domain.model import CommentDraft
from discuss.domain.repository import CommentStore
from discuss.domain.service import ADD_FAILED_MESSAGE, ThreadCoordinator
from discuss.domain.value import StoreOperation
from tests.harness import create_env_fixture

# Unit test fixture - zero-latency in-memory store, no sample data
unit_env = create_env_fixture()


async def _seed(store: CommentStore):
    """Store a root with one reply and return both."""
    root = await store.add(CommentDraft(content="Root", author="Alice"))
    child = await store.add(
        CommentDraft(parent_id=root.id, content="Child", author="Bob")
    )
    return root, child


class TestGetThread:
    """Tests for GetThreadUseCase."""

    @pytest.mark.asyncio
    async def test_empty_thread(self, unit_env):
        """An empty store should give no roots and zero stats."""
        use_case = await unit_env.get(GetThreadUseCase)

        response = await use_case.execute()

        assert response.roots == []
        assert response.stats.total == 0
        assert response.stats.max_depth == 0
        assert response.pending_mutations == 0

    @pytest.mark.asyncio
    async def test_loads_on_first_use(self, unit_env):
        """The first read should load the store into the coordinator."""
        store = await unit_env.get(CommentStore)
        root, child = await _seed(store)
        use_case = await unit_env.get(GetThreadUseCase)

        response = await use_case.execute()

        assert [r.comment_id for r in response.roots] == [root.id]
        node = response.roots[0].children[0]
        assert node.comment_id == child.id
        assert node.depth == 1
        assert response.stats.total == 2
        assert response.stats.max_depth == 1


class TestReply:
    """Tests for ReplyUseCase."""

    @pytest.mark.asyncio
    async def test_returns_optimistic_comment(self, unit_env):
        """The response should echo the optimistic record."""
        use_case = await unit_env.get(ReplyUseCase)
        coordinator = await unit_env.get(ThreadCoordinator)

        response = await use_case.execute(
            ReplyRequest(parent_id=None, content="Hello", author="Zoe")
        )

        assert response.comment.optimistic is True
        assert response.comment.comment_id.startswith("temp_")
        assert response.comment.parent_id is None

        await coordinator.drain()
        assert [c.content for c in coordinator.comments] == ["Hello"]
        assert not coordinator.comments[0].optimistic

    @pytest.mark.asyncio
    async def test_blank_content_rejected(self, unit_env):
        """Whitespace-only content should raise ValidationError."""
        use_case = await unit_env.get(ReplyUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(ReplyRequest(content="   ", author="Zoe"))


class TestDeleteComment:
    """Tests for DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_returns_removed_ids(self, unit_env):
        """The response should list the comment and its replies."""
        store = await unit_env.get(CommentStore)
        root, child = await _seed(store)
        use_case = await unit_env.get(DeleteCommentUseCase)
        coordinator = await unit_env.get(ThreadCoordinator)

        response = await use_case.execute(DeleteCommentRequest(comment_id=root.id))

        assert response.comment_id == root.id
        assert sorted(response.removed_ids) == sorted([root.id, child.id])
        assert coordinator.comments == ()
        await coordinator.drain()
        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_unknown_comment(self, unit_env):
        """Unknown ids should raise NotFoundError."""
        use_case = await unit_env.get(DeleteCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(DeleteCommentRequest(comment_id="nope"))

    @pytest.mark.asyncio
    async def test_pending_comment(self, unit_env):
        """Deleting an unconfirmed reply should raise PendingCommentError."""
        reply_use_case = await unit_env.get(ReplyUseCase)
        delete_use_case = await unit_env.get(DeleteCommentUseCase)

        reply = await reply_use_case.execute(ReplyRequest(content="Hi", author="Zoe"))

        with pytest.raises(PendingCommentError):
            await delete_use_case.execute(
                DeleteCommentRequest(comment_id=reply.comment.comment_id)
            )


class TestExportThread:
    """Tests for ExportThreadUseCase."""

    @pytest.mark.asyncio
    async def test_exports_in_display_order(self, unit_env):
        """Export should list parents before their replies."""
        store = await unit_env.get(CommentStore)
        root, child = await _seed(store)
        second_root = await store.add(CommentDraft(content="Later", author="Eve"))
        use_case = await unit_env.get(ExportThreadUseCase)

        response = await use_case.execute()

        assert [c.comment_id for c in response.comments] == [
            root.id,
            child.id,
            second_root.id,
        ]
        assert response.total == 3


class TestGetNotifications:
    """Tests for GetNotificationsUseCase."""

    @pytest.mark.asyncio
    async def test_notifications_delivered_once(self, unit_env):
        """A failed reply should produce one notification, delivered once."""
        store = await unit_env.get(CommentStore)
        coordinator = await unit_env.get(ThreadCoordinator)
        use_case = await unit_env.get(GetNotificationsUseCase)
        store.fail_next(StoreOperation.ADD)

        await coordinator.post("Doomed", "Zoe")
        first = await use_case.execute()
        second = await use_case.execute()

        assert [n.message for n in first.notifications] == [ADD_FAILED_MESSAGE]
        assert first.notifications[0].level == "error"
        assert first.notifications[0].operation == "add"
        assert second.notifications == []
