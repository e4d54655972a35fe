# src/cb_order/domain/repository.py
"""OrderStore Protocol — interface contract for persistence layer.

When `user_id` is given, an order owned by someone else behaves exactly like
an order that does not exist (None / False), never like a permission error.
"""
from typing import Protocol

from src.cb_common.enums import OrderStatus
from src.cb_order.domain.models import Order, OrderUpdate


class OrderStoreProtocol(Protocol):
    async def list(self, user_id: str | None = None) -> list[Order]: ...

    async def get(self, order_id: str, user_id: str | None = None) -> Order | None: ...

    async def create(self, order: Order) -> Order: ...

    async def update_status(
        self, order_id: str, status: OrderStatus, user_id: str | None = None
    ) -> Order | None: ...

    async def update_partial(self, order_id: str, fields: OrderUpdate) -> Order | None: ...

    async def delete(self, order_id: str, user_id: str | None = None) -> bool: ...

    async def count_by_status(self) -> dict[str, int]: ...
