"""Alembic environment for the burger schema.

Revisions are raw SQL, so there is no metadata to autogenerate from. The
online path reuses the application's engine factory and therefore the same
asyncpg connect and command timeouts as the service.
"""
import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from config.settings import settings
from src.cb_common.database import build_engine
from src.cb_common.logging_config import configure_logging

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)
else:
    configure_logging(settings.LOG_LEVEL)


def _require_database_url() -> str:
    if not settings.DATABASE_URL:
        raise RuntimeError("DATABASE_URL must point at PostgreSQL to migrate the burger schema")
    return settings.DATABASE_URL


def emit_sql_script() -> None:
    """`alembic upgrade --sql`: print the DDL and catalog seed instead of executing it."""
    context.configure(
        url=_require_database_url(),
        target_metadata=None,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _apply(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=None)
    with context.begin_transaction():
        context.run_migrations()


async def apply_to_database() -> None:
    _require_database_url()
    engine = build_engine(settings)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_apply)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    emit_sql_script()
else:
    asyncio.run(apply_to_database())
