"""Database connection and session management.

Provides async database engine and session factory for the SQL store.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from discuss.config import Settings
from discuss.persistence.tables import metadata


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    options: dict = {
        "echo": settings.debug,  # Log SQL queries in debug mode
        "pool_pre_ping": True,  # Verify connections before using
    }
    if not settings.database_url.startswith("sqlite"):
        options["pool_size"] = settings.database.pool_size
        options["max_overflow"] = settings.database.max_overflow
    return create_async_engine(settings.database_url, **options)


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
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create missing tables."""
    async with engine.begin() as connection:
        await connection.run_sync(metadata.create_all)
