# src/cb_order/infrastructure/persistence.py
"""SqlOrderStore — raw SQL persistence implementation.

Each operation runs in its own short session and commits before returning.
Writes to the same order from a user cancel and the status worker are
last-write-wins; an UPDATE that finds the row gone returns None.
"""
import json
from collections.abc import Callable
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.cb_common.enums import OrderStatus
from src.cb_common.errors import StoreUnavailableError
from src.cb_common.money import to_money
from src.cb_order.domain.models import Order, OrderItem, OrderUpdate

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_SELECT_COLUMNS = """
    id, user_id, items, status, total, nickname,
    created_at, estimated_completion_at, ready_at, completed_at
"""

_INSERT_ORDER_SQL = text(f"""
    INSERT INTO orders (id, user_id, items, status, total, nickname,
        created_at, estimated_completion_at)
    VALUES (:id, :user_id, CAST(:items AS JSONB), :status, :total, :nickname,
        :created_at, :estimated_completion_at)
    RETURNING {_SELECT_COLUMNS}
""")

_LIST_ORDERS_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders
    WHERE (CAST(:user_id AS TEXT) IS NULL OR user_id = CAST(:user_id AS TEXT))
    ORDER BY created_at DESC
""")

_GET_ORDER_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders
    WHERE id = :id
      AND (CAST(:user_id AS TEXT) IS NULL OR user_id = CAST(:user_id AS TEXT))
""")

_UPDATE_STATUS_SQL = text(f"""
    UPDATE orders
    SET status = :status
    WHERE id = :id
      AND (CAST(:user_id AS TEXT) IS NULL OR user_id = CAST(:user_id AS TEXT))
    RETURNING {_SELECT_COLUMNS}
""")

_UPDATE_PARTIAL_SQL = text(f"""
    UPDATE orders
    SET status       = COALESCE(CAST(:status AS TEXT), status),
        ready_at     = COALESCE(CAST(:ready_at AS TIMESTAMPTZ), ready_at),
        completed_at = COALESCE(CAST(:completed_at AS TIMESTAMPTZ), completed_at),
        nickname     = COALESCE(CAST(:nickname AS TEXT), nickname)
    WHERE id = :id
    RETURNING {_SELECT_COLUMNS}
""")

_DELETE_ORDER_SQL = text("""
    DELETE FROM orders
    WHERE id = :id
      AND (CAST(:user_id AS TEXT) IS NULL OR user_id = CAST(:user_id AS TEXT))
""")

_COUNT_BY_STATUS_SQL = text("SELECT status, COUNT(*) AS n FROM orders GROUP BY status")


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _items_to_json(items: list[OrderItem]) -> str:
    return json.dumps(
        [
            {
                "burgerId": i.burger_id,
                "quantity": i.quantity,
                "extraToppingIds": list(i.extra_topping_ids),
            }
            for i in items
        ]
    )


def _items_from_json(raw: Any) -> list[OrderItem]:
    # asyncpg hands JSONB back as text unless a codec is registered
    data = json.loads(raw) if isinstance(raw, (str, bytes)) else raw
    return [
        OrderItem(
            burger_id=str(i["burgerId"]),
            quantity=int(i["quantity"]),
            extra_topping_ids=tuple(i.get("extraToppingIds") or ()),
        )
        for i in data or []
    ]


def _row_to_order(row: Any) -> Order:
    """Convert a DB result row to an Order domain object."""
    return Order(
        id=row.id,
        user_id=row.user_id,
        created_at=row.created_at,
        items=_items_from_json(row.items),
        total_price=to_money(row.total),
        estimated_completion_at=row.estimated_completion_at,
        status=OrderStatus(row.status),
        ready_at=row.ready_at,
        completed_at=row.completed_at,
        nickname=row.nickname,
    )


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class SqlOrderStore:
    """Concrete implementation of OrderStoreProtocol using raw SQL."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def _run(
        self,
        operation: str,
        sql: Any,
        params: dict[str, Any],
        handle: Callable[[Any], Any],
        commit: bool = False,
    ) -> Any:
        try:
            async with self._session_factory() as session:
                result = await session.execute(sql, params)
                value = handle(result)
                if commit:
                    await session.commit()
                return value
        except (SQLAlchemyError, OSError, TimeoutError) as exc:
            raise StoreUnavailableError(operation) from exc

    @staticmethod
    def _one_or_none(result: Any) -> Order | None:
        row = result.fetchone()
        return _row_to_order(row) if row else None

    async def list(self, user_id: str | None = None) -> list[Order]:
        return await self._run(
            "list_orders",
            _LIST_ORDERS_SQL,
            {"user_id": user_id},
            lambda r: [_row_to_order(row) for row in r.fetchall()],
        )

    async def get(self, order_id: str, user_id: str | None = None) -> Order | None:
        return await self._run(
            "get_order",
            _GET_ORDER_SQL,
            {"id": order_id, "user_id": user_id},
            self._one_or_none,
        )

    async def create(self, order: Order) -> Order:
        created = await self._run(
            "create_order",
            _INSERT_ORDER_SQL,
            {
                "id": order.id,
                "user_id": order.user_id,
                "items": _items_to_json(order.items),
                "status": order.status.value,
                "total": order.total_price,
                "nickname": order.nickname,
                "created_at": order.created_at,
                "estimated_completion_at": order.estimated_completion_at,
            },
            self._one_or_none,
            commit=True,
        )
        return created if created is not None else order

    async def update_status(
        self, order_id: str, status: OrderStatus, user_id: str | None = None
    ) -> Order | None:
        return await self._run(
            "update_order_status",
            _UPDATE_STATUS_SQL,
            {"id": order_id, "status": status.value, "user_id": user_id},
            self._one_or_none,
            commit=True,
        )

    async def update_partial(self, order_id: str, fields: OrderUpdate) -> Order | None:
        if fields.is_empty():
            return await self.get(order_id)
        return await self._run(
            "update_order",
            _UPDATE_PARTIAL_SQL,
            {
                "id": order_id,
                "status": fields.status.value if fields.status else None,
                "ready_at": fields.ready_at,
                "completed_at": fields.completed_at,
                "nickname": fields.nickname,
            },
            self._one_or_none,
            commit=True,
        )

    async def delete(self, order_id: str, user_id: str | None = None) -> bool:
        return await self._run(
            "delete_order",
            _DELETE_ORDER_SQL,
            {"id": order_id, "user_id": user_id},
            lambda r: (r.rowcount or 0) > 0,
            commit=True,
        )

    async def count_by_status(self) -> dict[str, int]:
        counts = {s.value: 0 for s in OrderStatus}
        rows = await self._run(
            "count_orders", _COUNT_BY_STATUS_SQL, {}, lambda r: r.fetchall()
        )
        for row in rows:
            counts[row.status] = int(row.n)
        return counts
