"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from board.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine.

    Every connection carries a server-side statement timeout, so a stuck
    query releases its row locks instead of blocking votes on the same item.

    Args:
        settings: Application settings with database URL and pool sizing

    Returns:
        Configured async engine
    """
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        connect_args={
            "server_settings": {
                "application_name": database.application_name,
                "statement_timeout": str(database.statement_timeout_ms),
            }
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used for one session per request.

    Objects stay usable after commit because responses are built from them
    once the transaction is over.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
