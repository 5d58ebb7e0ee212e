"""Test harness for unit and integration tests.

Integration tests assume PostgreSQL is running with migrations applied
(`python scripts/run_migrations.py`). Settings are loaded from environment
variables (configure via .env or export).
"""

import pytest_asyncio

from fpv.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields a request-scoped container for service access
    - Closes the container afterwards (disposing any connection pool)

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no database needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_post(unit_env):
            repo = await unit_env.get(PostRepository)
            post = await repo.save(Post(...))
            assert post.id is not None
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        try:
            async with container() as request_container:
                yield request_container
        finally:
            await container.close()

    return _test_environment
