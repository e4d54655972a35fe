"""InMemoryOrderStore — OrderStoreProtocol backed by a dict.

Selected at startup when PostgreSQL is unreachable. Callers get copies, so
mutating a returned Order never changes the stored one.
"""
import asyncio
from dataclasses import replace

from src.cb_common.enums import OrderStatus
from src.cb_order.domain.models import Order, OrderUpdate


class InMemoryOrderStore:
    def __init__(self) -> None:
        self._orders: dict[str, Order] = {}
        self._lock = asyncio.Lock()

    def _owned(self, order_id: str, user_id: str | None) -> Order | None:
        order = self._orders.get(order_id)
        if order is None or (user_id is not None and order.user_id != user_id):
            return None
        return order

    async def list(self, user_id: str | None = None) -> list[Order]:
        orders = [
            replace(o) for o in self._orders.values() if user_id is None or o.user_id == user_id
        ]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders

    async def get(self, order_id: str, user_id: str | None = None) -> Order | None:
        order = self._owned(order_id, user_id)
        return replace(order) if order else None

    async def create(self, order: Order) -> Order:
        async with self._lock:
            self._orders[order.id] = replace(order, items=list(order.items))
        return replace(order)

    async def update_status(
        self, order_id: str, status: OrderStatus, user_id: str | None = None
    ) -> Order | None:
        async with self._lock:
            order = self._owned(order_id, user_id)
            if order is None:
                return None
            order.status = status
            return replace(order)

    async def update_partial(self, order_id: str, fields: OrderUpdate) -> Order | None:
        async with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return None
            if fields.status is not None:
                order.status = fields.status
            if fields.ready_at is not None:
                order.ready_at = fields.ready_at
            if fields.completed_at is not None:
                order.completed_at = fields.completed_at
            if fields.nickname is not None:
                order.nickname = fields.nickname
            return replace(order)

    async def delete(self, order_id: str, user_id: str | None = None) -> bool:
        async with self._lock:
            if self._owned(order_id, user_id) is None:
                return False
            del self._orders[order_id]
            return True

    async def count_by_status(self) -> dict[str, int]:
        counts = {s.value: 0 for s in OrderStatus}
        for order in self._orders.values():
            counts[order.status.value] += 1
        return counts
