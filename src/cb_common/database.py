"""Async engine construction.

Nothing connects at import time: `build_engine` is called once by the
bootstrap, which probes the connection and falls back to in-memory stores if
PostgreSQL is unreachable.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine with connect and per-command timeouts (asyncpg)."""
    if not settings.DATABASE_URL:
        raise ValueError("DATABASE_URL is not configured")
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=10,
        pool_pre_ping=True,
        connect_args={
            "timeout": settings.DB_TIMEOUT_SECONDS,
            "command_timeout": settings.DB_TIMEOUT_SECONDS,
        },
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
