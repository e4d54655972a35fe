"""CatalogRepository — PostgreSQL implementation using raw text() SQL.

Every call opens its own session: admission control looks up toppings
concurrently and an AsyncSession must not be shared between tasks.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.cb_catalog.domain.models import Burger, Topping
from src.cb_common.errors import StoreUnavailableError
from src.cb_common.money import to_money

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_BURGER_COLUMNS = "id, name, description, price, image_ref"
_TOPPING_COLUMNS = "id, name, description, category, price, image_ref"

_LIST_BURGERS_SQL = text(f"SELECT {_BURGER_COLUMNS} FROM burgers ORDER BY id")
_GET_BURGER_SQL = text(f"SELECT {_BURGER_COLUMNS} FROM burgers WHERE id = :id")

_LIST_TOPPINGS_SQL = text(f"""
    SELECT {_TOPPING_COLUMNS}
    FROM toppings
    WHERE (CAST(:category AS TEXT) IS NULL OR category = CAST(:category AS TEXT))
    ORDER BY id
""")
_GET_TOPPING_SQL = text(f"SELECT {_TOPPING_COLUMNS} FROM toppings WHERE id = :id")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_burger(row: Any) -> Burger:
    return Burger(
        id=row.id,
        name=row.name,
        description=row.description,
        price=to_money(row.price),
        image_ref=row.image_ref,
    )


def _row_to_topping(row: Any) -> Topping:
    return Topping(
        id=row.id,
        name=row.name,
        description=row.description,
        category=row.category,
        price=to_money(row.price),
        image_ref=row.image_ref,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class SqlCatalogRepository:
    """Concrete CatalogRepositoryProtocol — all operations are read-only queries."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def _fetch(self, sql: Any, params: dict[str, Any], operation: str) -> list[Any]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(sql, params)
                return list(result.fetchall())
        except (SQLAlchemyError, OSError, TimeoutError) as exc:
            raise StoreUnavailableError(operation) from exc

    async def list_burgers(self) -> list[Burger]:
        rows = await self._fetch(_LIST_BURGERS_SQL, {}, "list_burgers")
        return [_row_to_burger(r) for r in rows]

    async def get_burger(self, burger_id: str) -> Burger | None:
        rows = await self._fetch(_GET_BURGER_SQL, {"id": burger_id}, "get_burger")
        return _row_to_burger(rows[0]) if rows else None

    async def list_toppings(self, category: str | None = None) -> list[Topping]:
        rows = await self._fetch(_LIST_TOPPINGS_SQL, {"category": category}, "list_toppings")
        return [_row_to_topping(r) for r in rows]

    async def get_topping(self, topping_id: str) -> Topping | None:
        rows = await self._fetch(_GET_TOPPING_SQL, {"id": topping_id}, "get_topping")
        return _row_to_topping(rows[0]) if rows else None
