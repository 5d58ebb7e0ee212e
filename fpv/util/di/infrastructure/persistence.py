"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fpv.config import Settings
from fpv.domain.error import ConflictError, StorageError
from fpv.domain.repository import PostRepository, UserRepository
from fpv.persistence.database import Database, StorageClient
from fpv.persistence.repository import (
    PostgresPostRepository,
    PostgresUserRepository,
)
from fpv.util.di.base import ProviderBase
from fpv.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_database(self, settings: Settings) -> AsyncIterator[Database]:
        """Provide the database for the app's lifetime.

        The connection pool is disposed when the container closes.
        """
        database = Database(settings.database, echo=settings.debug)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(database.engine)
        yield database
        await database.dispose()

    @provide(scope=Scope.APP)
    def get_storage_client(self, database: Database) -> StorageClient:
        """Provide storage client for health checks."""
        return database

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, database: Database
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return database.session_factory

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except IntegrityError as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise ConflictError("Write conflicts with existing data") from e
            except SQLAlchemyError as e:
                logfire.error("Session rollback after storage failure", error=str(e))
                await session.rollback()
                raise StorageError("Storage operation failed") from e
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session)
