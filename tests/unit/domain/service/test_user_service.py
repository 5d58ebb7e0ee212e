"""Unit tests for UserService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from fpv.domain.error import ConflictError, NotFoundError, ValidationError
from fpv.domain.service import UserService
from fpv.domain.value import UserId, VerifiedIdentity
from fpv.persistence.repository.inmemory import InMemoryUserRepository
from tests.conftest import BASE_TIME, make_user


def _identity(**overrides) -> VerifiedIdentity:
    fields = {
        "external_id": "firebase-uid-1",
        "email": "ava@example.com",
        "display_name": "Ava Flyer",
        "avatar_url": "https://img.example.com/ava.png",
        "provider": "google.com",
    }
    fields.update(overrides)
    return VerifiedIdentity(**fields)


class TestSyncUser:
    """Tests for UserService.sync_user()."""

    @pytest.mark.asyncio
    async def test_first_sync_creates_user(self):
        """A new identity creates a user with matching login and creation time."""
        # Arrange
        user_repo = InMemoryUserRepository()
        service = UserService(user_repo)

        # Act
        user = await service.sync_user(_identity())

        # Assert
        assert user.external_id == "firebase-uid-1"
        assert user.email == "ava@example.com"
        assert user.name == "Ava Flyer"
        assert user.image == "https://img.example.com/ava.png"
        assert user.provider == "google.com"
        assert user.created_at == user.last_login_at
        assert await user_repo.count() == 1

    @pytest.mark.asyncio
    async def test_name_falls_back_to_email_local_part(self):
        """Without a display name the email's local part is used."""
        # Arrange
        service = UserService(InMemoryUserRepository())

        # Act
        user = await service.sync_user(
            _identity(display_name=None, email="quadpilot@example.com")
        )

        # Assert
        assert user.name == "quadpilot"

    @pytest.mark.asyncio
    async def test_second_sync_keeps_single_record(self):
        """Syncing again updates the same user rather than creating another."""
        # Arrange
        user_repo = InMemoryUserRepository()
        service = UserService(user_repo)
        first = await service.sync_user(_identity())

        # Act
        second = await service.sync_user(_identity(display_name="Ava F."))

        # Assert
        assert second.id == first.id
        assert second.name == "Ava F."
        assert second.created_at == first.created_at
        assert second.last_login_at >= first.last_login_at
        assert await user_repo.count() == 1

    @pytest.mark.asyncio
    async def test_resync_refreshes_last_login_only(self):
        """Empty incoming name and avatar leave the stored values alone."""
        # Arrange
        user_repo = InMemoryUserRepository()
        stored = make_user(name="Stored Name", external_id="firebase-uid-1")
        stored = stored.model_copy(update={"image": "https://img/old.png"})
        await user_repo.save(stored)
        service = UserService(user_repo)

        # Act
        synced = await service.sync_user(
            _identity(display_name=None, avatar_url=None, email=stored.email)
        )

        # Assert
        assert synced.name == "Stored Name"
        assert synced.image == "https://img/old.png"
        assert synced.last_login_at > BASE_TIME
        assert synced.created_at == BASE_TIME

    @pytest.mark.asyncio
    async def test_missing_email_on_first_sync_is_rejected(self):
        """A new user must have an email."""
        # Arrange
        service = UserService(InMemoryUserRepository())

        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            await service.sync_user(_identity(email=None))

        assert exc_info.value.errors[0].field == "email"

    @pytest.mark.asyncio
    async def test_overlong_email_is_rejected(self):
        """An email wider than the users column is a validation error."""
        # Arrange
        user_repo = InMemoryUserRepository()
        service = UserService(user_repo)
        email = "p" * 250 + "@example.com"

        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            await service.sync_user(_identity(email=email))

        assert exc_info.value.errors[0].field == "email"
        assert await user_repo.count() == 0

    @pytest.mark.asyncio
    async def test_overlong_display_name_is_truncated(self):
        """Names longer than 255 characters are cut on create and on resync."""
        # Arrange
        service = UserService(InMemoryUserRepository())

        # Act
        created = await service.sync_user(_identity(display_name="A" * 300))
        resynced = await service.sync_user(_identity(display_name="B" * 400))

        # Assert
        assert created.name == "A" * 255
        assert resynced.name == "B" * 255

    @pytest.mark.asyncio
    async def test_email_owned_by_other_identity_conflicts(self):
        """Email uniqueness holds across different Firebase UIDs."""
        # Arrange
        user_repo = InMemoryUserRepository()
        await user_repo.save(make_user(email="ava@example.com", external_id="other"))
        service = UserService(user_repo)

        # Act & Assert
        with pytest.raises(ConflictError):
            await service.sync_user(_identity())

        assert await user_repo.count() == 1


class TestUserLookups:
    """Tests for the read side of UserService."""

    @pytest.mark.asyncio
    async def test_get_synced_user_requires_prior_sync(self):
        """A verified identity without a record is reported as not found."""
        # Arrange
        service = UserService(InMemoryUserRepository())

        # Act & Assert
        with pytest.raises(NotFoundError) as exc_info:
            await service.get_synced_user(_identity())

        assert str(exc_info.value) == "User not found. Please sync your account first."

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self):
        """Unknown IDs raise NotFoundError."""
        # Arrange
        service = UserService(InMemoryUserRepository())

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.get_by_id(UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_get_authors_skips_unknown_ids(self):
        """Batch lookup returns only users that exist."""
        # Arrange
        user_repo = InMemoryUserRepository()
        author = make_user()
        await user_repo.save(author)
        service = UserService(user_repo)

        # Act
        authors = await service.get_authors([author.id, UserId(uuid4())])

        # Assert
        assert list(authors) == [author.id]

    @pytest.mark.asyncio
    async def test_count_users(self):
        """count_users counts every stored user."""
        # Arrange
        user_repo = InMemoryUserRepository()
        for offset in range(3):
            await user_repo.save(
                make_user().model_copy(
                    update={"created_at": BASE_TIME + timedelta(minutes=offset)}
                )
            )
        service = UserService(user_repo)

        # Act & Assert
        assert await service.count_users() == 3
