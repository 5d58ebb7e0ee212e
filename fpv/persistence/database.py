"""Database connection and session management.

Provides the async database engine, session factory and storage health
checks for PostgreSQL.
"""

from abc import ABC, abstractmethod

import logfire
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from fpv.config import DatabaseSettings
from fpv.domain.error import StorageError


def create_engine(settings: DatabaseSettings, echo: bool = False) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Database settings (URL and pool sizing)
        echo: Log SQL statements

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.pool_timeout,
        pool_recycle=settings.pool_recycle,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
        autocommit=False,  # Explicit transaction management
    )


class StorageClient(ABC):
    """Handle on the backing store, used for health checks and shutdown."""

    @abstractmethod
    async def ping(self) -> None:
        """Check the store is reachable.

        Raises:
            StorageError: If the store can't be reached
        """
        pass

    @abstractmethod
    async def dispose(self) -> None:
        """Release every pooled connection."""
        pass


class Database(StorageClient):
    """PostgreSQL storage client.

    Owns the engine and session factory for the lifetime of the app container.
    """

    def __init__(self, settings: DatabaseSettings, echo: bool = False) -> None:
        self.engine = create_engine(settings, echo=echo)
        self.session_factory = create_session_factory(self.engine)

    async def ping(self) -> None:
        with logfire.span("database.ping"):
            try:
                async with self.engine.connect() as connection:
                    await connection.execute(text("SELECT 1"))
            except (SQLAlchemyError, OSError) as e:
                logfire.error("Database unreachable", error=str(e))
                raise StorageError("Database unreachable") from e

    async def dispose(self) -> None:
        await self.engine.dispose()
        logfire.info("Database connections disposed")
