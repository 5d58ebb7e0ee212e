"""Unit tests for the health routes."""

import json

import pytest

from fpv.config import Settings
from fpv.interface.api.routes.health import health_check, storage_health
from fpv.persistence.repository.inmemory import InMemoryStorageClient


class TestHealthCheck:
    """Tests for health_check()."""

    @pytest.mark.asyncio
    async def test_reports_ok_with_version(self):
        """The service reports itself as running."""
        # Arrange
        settings = Settings(environment="test")

        # Act
        response = await health_check(settings)

        # Assert
        assert response.status == "OK"
        assert response.version == "1.0.0"
        assert response.git_sha == settings.git_sha
        assert "gitSha" in response.model_dump(by_alias=True)


class TestStorageHealth:
    """Tests for storage_health()."""

    @pytest.mark.asyncio
    async def test_reachable_database(self):
        """A successful ping reports OK."""
        # Act
        response = await storage_health(InMemoryStorageClient())

        # Assert
        assert response.status == "OK"

    @pytest.mark.asyncio
    async def test_unreachable_database(self):
        """A failed ping is a 500 with a generic message."""
        # Arrange
        storage = InMemoryStorageClient()
        storage.available = False

        # Act
        response = await storage_health(storage)

        # Assert
        assert response.status_code == 500
        assert json.loads(response.body) == {
            "status": "unavailable",
            "error": "Database connection failed",
        }
