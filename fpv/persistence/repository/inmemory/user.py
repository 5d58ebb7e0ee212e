"""In-memory user repository for testing."""

from typing import Iterable, Optional

from fpv.domain.error import ConflictError
from fpv.domain.model.user import User
from fpv.domain.repository.user import UserRepository
from fpv.domain.value import UserId

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def _users(self) -> dict[UserId, User]:
        return self._store.users

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Find several users at once."""
        return {
            user_id: self._users[user_id]
            for user_id in set(user_ids)
            if user_id in self._users
        }

    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        """Find a user by their Firebase UID."""
        for user in self._users.values():
            if user.external_id == external_id:
                return user
        return None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user, enforcing the same unique keys as the table."""
        for other in self._users.values():
            if other.id == user.id:
                continue
            if other.email == user.email or other.external_id == user.external_id:
                raise ConflictError("Email or external ID already in use")

        existing = self._users.get(user.id)
        if existing is not None and existing.external_id != user.external_id:
            # external_id never changes once assigned
            user = user.model_copy(update={"external_id": existing.external_id})

        self._users[user.id] = user
        return user

    async def count(self) -> int:
        """Count all users."""
        return len(self._users)
