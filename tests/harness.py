"""Test harness for unit, integration and E2E tests.

Settings are loaded from environment variables (configure via .env or export).
"""

import pytest_asyncio

from discuss.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container afterwards (drains pending mutations)

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - zero-latency in-memory store, no seed data
        unit_env = create_env_fixture()

        # Production store selection (settings.store.backend)
        prod_env = create_env_fixture(unmock={"store"})

        @pytest.mark.asyncio
        async def test_reply(unit_env):
            coordinator = await unit_env.get(ThreadCoordinator)
            await coordinator.post("Hello", "Alice")
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        # Open request-scoped context
        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
