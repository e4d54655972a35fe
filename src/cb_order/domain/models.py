"""Order domain model — pure dataclasses, no SQLAlchemy dependency."""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from src.cb_common.enums import OrderStatus


@dataclass(frozen=True)
class OrderItem:
    burger_id: str
    quantity: int
    extra_topping_ids: tuple[str, ...] = ()


@dataclass
class Order:
    id: str
    user_id: str
    created_at: datetime
    items: list[OrderItem]
    total_price: Decimal
    estimated_completion_at: datetime
    status: OrderStatus = OrderStatus.PENDING
    # Stamped once by the status worker
    ready_at: datetime | None = None
    completed_at: datetime | None = None
    nickname: str | None = None

    @property
    def burger_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def topping_count(self) -> int:
        return sum(len(item.extra_topping_ids) * item.quantity for item in self.items)

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    @property
    def is_cancellable(self) -> bool:
        return self.status == OrderStatus.PENDING


@dataclass(frozen=True)
class OrderUpdate:
    """Partial update applied by the trusted worker. None means "leave unchanged".

    Items and total price never change after creation, so they are not here.
    """

    status: OrderStatus | None = None
    ready_at: datetime | None = None
    completed_at: datetime | None = None
    nickname: str | None = None

    def is_empty(self) -> bool:
        return all(
            v is None for v in (self.status, self.ready_at, self.completed_at, self.nickname)
        )


@dataclass
class QueueDepth:
    """Number of stored orders per status."""

    counts: dict[str, int] = field(
        default_factory=lambda: {s.value: 0 for s in OrderStatus}
    )

    @property
    def active(self) -> int:
        return self.counts[OrderStatus.PENDING.value] + self.counts[
            OrderStatus.IN_PREPARATION.value
        ]

    @property
    def total(self) -> int:
        return sum(self.counts.values())
