"""Pydantic schemas for cb_order API requests and responses."""
from datetime import datetime
from typing import Any

from pydantic import Field

from src.cb_common.schemas import CamelModel, MoneyOut
from src.cb_order.domain.models import Order, OrderItem

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class OrderItemRequest(CamelModel):
    burger_id: str
    # Checked by admission control (positive integer, bool rejected)
    quantity: Any = None
    extra_topping_ids: list[str] = Field(default_factory=list)


class CreateOrderRequest(CamelModel):
    user_id: str | None = None
    items: list[OrderItemRequest] | None = None
    nickname: str | None = Field(None, max_length=100)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class OrderItemOut(CamelModel):
    burger_id: str
    quantity: int
    extra_topping_ids: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, item: OrderItem) -> "OrderItemOut":
        return cls(
            burger_id=item.burger_id,
            quantity=item.quantity,
            extra_topping_ids=list(item.extra_topping_ids),
        )


class OrderResponse(CamelModel):
    """Order as returned to clients. The owning userId is never echoed back."""

    id: str
    status: str
    created_at: datetime
    items: list[OrderItemOut]
    total_price: MoneyOut
    estimated_completion_at: datetime
    ready_at: datetime | None = None
    completed_at: datetime | None = None
    nickname: str | None = None

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            status=order.status.value,
            created_at=order.created_at,
            items=[OrderItemOut.from_domain(i) for i in order.items],
            total_price=order.total_price,
            estimated_completion_at=order.estimated_completion_at,
            ready_at=order.ready_at,
            completed_at=order.completed_at,
            nickname=order.nickname,
        )


class CancelOrderResponse(CamelModel):
    message: str
    order_id: str


class StatusResponse(CamelModel):
    status: str
    active_orders: int | None = None
    total_orders: int | None = None
    registered_users: int | None = None
    timestamp: datetime
    error: str | None = None
