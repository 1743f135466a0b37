"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from carpool.config import Settings
from carpool.domain.repository import (
    MessageRepository,
    NotificationRepository,
    ParticipationRepository,
    TransactionScope,
    TripRepository,
    UserRepository,
)
from carpool.persistence.database import create_engine, create_session_factory
from carpool.persistence.repository import (
    PostgresMessageRepository,
    PostgresNotificationRepository,
    PostgresParticipationRepository,
    PostgresTransactionScope,
    PostgresTripRepository,
    PostgresUserRepository,
)
from carpool.util.di.base import ProviderBase
from carpool.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_trip_repository(self, session: AsyncSession) -> TripRepository:
        """Provide Trip repository."""
        return PostgresTripRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_participation_repository(
        self, session: AsyncSession
    ) -> ParticipationRepository:
        """Provide Participation repository."""
        return PostgresParticipationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, session: AsyncSession) -> MessageRepository:
        """Provide Message repository."""
        return PostgresMessageRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, session: AsyncSession
    ) -> NotificationRepository:
        """Provide Notification repository."""
        return PostgresNotificationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_transaction_scope(self, session: AsyncSession) -> TransactionScope:
        """Provide savepoints on the request session."""
        return PostgresTransactionScope(session)
