"""UserRegistry — PostgreSQL implementation over the shared `users` table."""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.cb_common.errors import StoreUnavailableError

_USER_EXISTS_SQL = text("SELECT 1 FROM users WHERE id = :id")
_COUNT_USERS_SQL = text("SELECT COUNT(*) FROM users")


class SqlUserRegistry:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def user_exists(self, user_id: str) -> bool:
        try:
            async with self._session_factory() as session:
                result = await session.execute(_USER_EXISTS_SQL, {"id": user_id})
                return result.scalar_one_or_none() is not None
        except (SQLAlchemyError, OSError, TimeoutError) as exc:
            raise StoreUnavailableError("user_exists") from exc

    async def count_users(self) -> int:
        try:
            async with self._session_factory() as session:
                result = await session.execute(_COUNT_USERS_SQL)
                return int(result.scalar_one())
        except (SQLAlchemyError, OSError, TimeoutError) as exc:
            raise StoreUnavailableError("count_users") from exc
