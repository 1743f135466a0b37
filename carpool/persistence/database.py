"""Async engine and session factory for the carpool database."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from carpool.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine.

    Connections are tagged with the application name so they can be told
    apart in ``pg_stat_activity`` next to migration runs.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"server_settings": {"application_name": "carpool-api"}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the factory for request-scoped sessions.

    Repositories flush explicitly, and domain models are rebuilt from rows, so
    nothing relies on ORM expiry or autoflush.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
