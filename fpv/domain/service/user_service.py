"""User domain service (the user directory)."""

from typing import Iterable
from uuid import uuid4

import logfire

from fpv.domain.error import ConflictError, NotFoundError, ValidationError
from fpv.domain.model import User
from fpv.domain.model.common import utcnow
from fpv.domain.repository import UserRepository
from fpv.domain.value import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    FieldError,
    UserId,
    VerifiedIdentity,
)

from .base import Service


def _display_name(name: str) -> str:
    # Provider names have no length limit; the stored name does
    return name[:NAME_MAX_LENGTH]


class UserService(Service):
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def sync_user(self, identity: VerifiedIdentity) -> User:
        """Create or refresh the user behind a verified identity.

        New users get the identity's fields and now as both creation and
        last-login time. Existing users get their name and avatar overwritten
        only by non-empty incoming values; last login is always refreshed.

        Args:
            identity: Identity already verified by the identity provider

        Returns:
            The persisted user

        Raises:
            ValidationError: If the identity carries no email, or one too
                long to store
            ConflictError: If the email belongs to a different user
        """
        with logfire.span(
            "user_service.sync_user", external_id=identity.external_id
        ):
            now = utcnow()
            user = await self.user_repository.find_by_external_id(
                identity.external_id
            )

            if user is None:
                if not identity.email:
                    raise ValidationError(
                        [FieldError(field="email", message="Email required")]
                    )
                if len(identity.email) > EMAIL_MAX_LENGTH:
                    raise ValidationError(
                        [
                            FieldError(
                                field="email",
                                message=f"Email must be at most {EMAIL_MAX_LENGTH} characters",
                            )
                        ]
                    )

                owner = await self.user_repository.find_by_email(identity.email)
                if owner is not None:
                    logfire.error(
                        "Email already owned by another identity",
                        external_id=identity.external_id,
                        owner_id=str(owner.id),
                    )
                    raise ConflictError(
                        f"Email {identity.email} is already registered"
                    )

                user = User(
                    id=UserId(uuid4()),
                    external_id=identity.external_id,
                    email=identity.email,
                    name=_display_name(
                        identity.display_name
                        or identity.email.split("@")[0]
                        or identity.email
                    ),
                    image=identity.avatar_url or None,
                    provider=identity.provider,
                    created_at=now,
                    last_login_at=now,
                )
                saved = await self.user_repository.save(user)
                logfire.info(
                    "New user created", user_id=str(saved.id), email=saved.email
                )
                return saved

            updates = {"last_login_at": now}
            if identity.display_name:
                updates["name"] = _display_name(identity.display_name)
            if identity.avatar_url:
                updates["image"] = identity.avatar_url

            saved = await self.user_repository.save(user.model_copy(update=updates))
            logfire.info("User updated", user_id=str(saved.id), email=saved.email)
            return saved

    async def get_user_by_external_id(self, external_id: str) -> User | None:
        """Get user by Firebase UID.

        Args:
            external_id: Identity provider user ID

        Returns:
            User if found, None otherwise
        """
        with logfire.span(
            "user_service.get_user_by_external_id", external_id=external_id
        ):
            user = await self.user_repository.find_by_external_id(external_id)
            if user:
                logfire.info("User found", external_id=external_id, user_id=str(user.id))
            else:
                logfire.warn("User not found", external_id=external_id)
            return user

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_synced_user(self, identity: VerifiedIdentity) -> User:
        """Get the stored user for a verified identity.

        Raises:
            NotFoundError: If the identity has never been synced
        """
        user = await self.get_user_by_external_id(identity.external_id)
        if user is None:
            raise NotFoundError(
                "User",
                identity.external_id,
                message="User not found. Please sync your account first.",
            )
        return user

    async def get_authors(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Batch-load users for author summaries."""
        ids = set(user_ids)
        if not ids:
            return {}
        return await self.user_repository.find_by_ids(ids)

    async def count_users(self) -> int:
        """Count all users."""
        return await self.user_repository.count()
