"""End-to-end tests for the thread endpoints."""

from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from discuss.domain.repository import CommentStore
from discuss.domain.service import ADD_FAILED_MESSAGE, ThreadCoordinator
from discuss.domain.value import StoreOperation
from discuss.interface.api.app import create_app
from tests.di import build_test_container


@pytest_asyncio.fixture
async def container():
    """Test container with a fresh, empty in-memory store."""
    test_container = build_test_container()
    yield test_container
    await test_container.close()


@pytest_asyncio.fixture
async def client(container):
    """HTTP client talking to the app in-process."""
    app_instance = create_app(container)
    async with AsyncClient(
        transport=ASGITransport(app=app_instance), base_url="http://test"
    ) as http_client:
        yield http_client


async def _settle(container) -> None:
    """Wait for every pending mutation to be confirmed or rolled back."""
    coordinator = await container.get(ThreadCoordinator)
    await coordinator.drain()


class TestHealth:
    """Tests for GET /health."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        """Health check should report healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_health_timestamp_is_utc(self, client):
        """The health timestamp should carry a UTC offset."""
        response = await client.get("/health")

        timestamp = datetime.fromisoformat(
            response.json()["timestamp"].replace("Z", "+00:00")
        )
        assert timestamp.utcoffset() == timedelta(0)


class TestThreadEndpoints:
    """End-to-end tests for /thread."""

    @pytest.mark.asyncio
    async def test_get_empty_thread(self, client):
        """Should return an empty forest when no comments exist."""
        response = await client.get("/thread")

        assert response.status_code == 200
        data = response.json()
        assert data["roots"] == []
        assert data["stats"] == {"total": 0, "max_depth": 0}

    @pytest.mark.asyncio
    async def test_post_comment_then_read_confirmed(self, client, container):
        """A posted comment should be optimistic first, confirmed later."""
        response = await client.post(
            "/thread/comments", json={"content": "Hello", "author": "Zoe"}
        )

        assert response.status_code == 202
        posted = response.json()["comment"]
        assert posted["optimistic"] is True
        assert posted["comment_id"].startswith("temp_")

        await _settle(container)
        data = (await client.get("/thread")).json()

        assert len(data["roots"]) == 1
        root = data["roots"][0]
        assert root["content"] == "Hello"
        assert root["optimistic"] is False
        assert root["comment_id"] != posted["comment_id"]
        assert data["pending_mutations"] == 0

    @pytest.mark.asyncio
    async def test_nested_reply_and_delete(self, client, container):
        """Deleting a root should remove its replies as well."""
        await client.post("/thread/comments", json={"content": "Root", "author": "A"})
        await _settle(container)
        root_id = (await client.get("/thread")).json()["roots"][0]["comment_id"]

        reply = await client.post(
            "/thread/comments",
            json={"parent_id": root_id, "content": "Reply", "author": "B"},
        )
        assert reply.status_code == 202
        await _settle(container)

        tree = (await client.get("/thread")).json()
        child = tree["roots"][0]["children"][0]
        assert child["depth"] == 1
        assert tree["stats"] == {"total": 2, "max_depth": 1}

        response = await client.delete(f"/thread/comments/{root_id}")

        assert response.status_code == 202
        assert sorted(response.json()["removed_ids"]) == sorted(
            [root_id, child["comment_id"]]
        )
        await _settle(container)
        store = await container.get(CommentStore)
        assert await store.list() == []
        assert (await client.get("/thread")).json()["roots"] == []

    @pytest.mark.asyncio
    async def test_delete_unknown_comment(self, client):
        """Unknown ids should give 404."""
        response = await client.delete("/thread/comments/nope")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_blank_content_rejected(self, client):
        """Whitespace-only content should give 400."""
        response = await client.post(
            "/thread/comments", json={"content": "   ", "author": "Zoe"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_author_rejected(self, client):
        """Missing required fields should fail request validation."""
        response = await client.post("/thread/comments", json={"content": "Hi"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_failed_post_raises_notification(self, client, container):
        """A store failure should roll back and be reported once."""
        store = await container.get(CommentStore)
        store.fail_next(StoreOperation.ADD)

        response = await client.post(
            "/thread/comments", json={"content": "Doomed", "author": "Zoe"}
        )
        assert response.status_code == 202
        await _settle(container)

        assert (await client.get("/thread")).json()["roots"] == []
        first = (await client.get("/thread/notifications")).json()
        second = (await client.get("/thread/notifications")).json()
        assert [n["message"] for n in first["notifications"]] == [ADD_FAILED_MESSAGE]
        assert first["notifications"][0]["operation"] == "add"
        assert second["notifications"] == []

    @pytest.mark.asyncio
    async def test_load_failure_returns_503(self, client, container):
        """A failing initial load should give 503."""
        store = await container.get(CommentStore)
        store.fail_next(StoreOperation.LIST)

        response = await client.get("/thread")

        assert response.status_code == 503
        assert response.json()["detail"] == "Failed to load comments"

    @pytest.mark.asyncio
    async def test_export_in_display_order(self, client, container):
        """Export should flatten the forest parents first."""
        await client.post("/thread/comments", json={"content": "Root", "author": "A"})
        await _settle(container)
        root_id = (await client.get("/thread")).json()["roots"][0]["comment_id"]
        await client.post(
            "/thread/comments",
            json={"parent_id": root_id, "content": "Reply", "author": "B"},
        )
        await _settle(container)

        response = await client.get("/thread/export")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [c["content"] for c in data["comments"]] == ["Root", "Reply"]
