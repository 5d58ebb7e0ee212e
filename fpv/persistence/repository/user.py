"""PostgreSQL implementation of User repository."""

from typing import Iterable, Optional

import logfire
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fpv.domain.error import ConflictError
from fpv.domain.model import User
from fpv.domain.repository import UserRepository
from fpv.domain.value import UserId
from fpv.persistence.mappers import row_to_user, user_to_dict
from fpv.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Find several users in one query."""
        ids = list(set(user_ids))
        if not ids:
            return {}

        stmt = select(users_table).where(users_table.c.id.in_(ids))
        result = await self.session.execute(stmt)
        users = [row_to_user(dict(row)) for row in result.mappings()]
        return {user.id: user for user in users}

    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        """Find a user by their Firebase UID.

        Args:
            external_id: Firebase UID

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.external_id == external_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.email == email)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user

        Raises:
            ConflictError: If the email or external ID is taken by another user
        """
        with logfire.span("user_repository.save", user_id=str(user.id)):
            # Check if user exists
            existing = await self.find_by_id(user.id)

            user_dict = user_to_dict(user)

            if existing:
                # external_id never changes once assigned
                user_dict.pop("external_id")
                stmt = (
                    users_table.update()
                    .where(users_table.c.id == user.id)
                    .values(**user_dict)
                )
            else:
                stmt = users_table.insert().values(**user_dict)

            try:
                await self.session.execute(stmt)
                await self.session.flush()
            except IntegrityError as e:
                logfire.warn(
                    "User uniqueness violation", user_id=str(user.id), error=str(e)
                )
                raise ConflictError("Email or external ID already in use") from e

            return user

    async def count(self) -> int:
        """Count all users."""
        stmt = select(func.count()).select_from(users_table)
        result = await self.session.execute(stmt)
        return result.scalar() or 0
