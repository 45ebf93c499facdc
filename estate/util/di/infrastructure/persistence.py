"""Identity store providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from estate.config import Settings
from estate.domain.repository import IdentityRepository
from estate.persistence.database import create_engine, create_session_factory
from estate.persistence.repository import PostgresIdentityRepository
from estate.util.di.base import ProviderBase
from estate.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Where identities are stored."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL via asyncpg. One engine per process, one session per request."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """One session per request.

        Use cases commit their own writes before answering. Anything still
        uncommitted when the request ends is rolled back.
        """
        async with session_factory() as session:
            yield session
            if session.in_transaction():
                await session.rollback()

    @provide(scope=Scope.REQUEST)
    def identity_repository(self, session: AsyncSession) -> IdentityRepository:
        return PostgresIdentityRepository(session)
