"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from fpv.domain.model.user import User
from fpv.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Find several users at once (avoids N+1 lookups).

        Args:
            user_ids: IDs to look up

        Returns:
            Mapping of found user IDs to users; unknown IDs are absent
        """
        pass

    @abstractmethod
    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        """Find a user by their Firebase UID.

        Args:
            external_id: The identity provider's user ID

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user

        Raises:
            ConflictError: If the email or external ID belongs to another user
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all users."""
        pass
