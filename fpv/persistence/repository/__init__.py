"""PostgreSQL repository implementations."""

from fpv.persistence.repository.post import PostgresPostRepository
from fpv.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresPostRepository",
]
