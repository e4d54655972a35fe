"""Kitchen status rules for the reconciliation pass.

Each rule has a deterministic ceiling and a randomized band below it:

    pending         -> in-preparation  always after 3 min, coin flip from 1 min
    in-preparation  -> ready           always 3 min past the estimate, coin flip
                                       within 3 min either side of it
    ready           -> completed       always after 2 min, coin flip from 1 min

The coin is only consulted inside a randomized band, so an order past its
ceiling advances no matter what the coin would say.
"""
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime

from src.cb_common.datetime_utils import minutes_since
from src.cb_common.enums import OrderStatus
from src.cb_order.domain.models import Order, OrderUpdate

CoinFlip = Callable[[], bool]

PENDING_MIN_MINUTES = 1
PENDING_MAX_MINUTES = 3
PREPARATION_WINDOW_MINUTES = 3
READY_MIN_MINUTES = 1
READY_MAX_MINUTES = 2


@dataclass(frozen=True)
class Transition:
    order_id: str
    from_status: OrderStatus
    to_status: OrderStatus
    update: OrderUpdate

    @property
    def edge(self) -> str:
        return edge_name(self.from_status, self.to_status)


def edge_name(from_status: OrderStatus, to_status: OrderStatus) -> str:
    return f"{from_status.value}->{to_status.value}"


TRANSITION_EDGES: tuple[str, ...] = (
    edge_name(OrderStatus.PENDING, OrderStatus.IN_PREPARATION),
    edge_name(OrderStatus.IN_PREPARATION, OrderStatus.READY),
    edge_name(OrderStatus.READY, OrderStatus.COMPLETED),
)


def should_start_preparation(order: Order, now: datetime, coin: CoinFlip) -> bool:
    m = minutes_since(order.created_at, now)
    return m > PENDING_MAX_MINUTES or (m >= PENDING_MIN_MINUTES and coin())


def should_mark_ready(order: Order, now: datetime, coin: CoinFlip) -> bool:
    d = minutes_since(order.estimated_completion_at, now)
    return d > PREPARATION_WINDOW_MINUTES or (abs(d) <= PREPARATION_WINDOW_MINUTES and coin())


def should_complete(order: Order, now: datetime, coin: CoinFlip) -> bool:
    if order.ready_at is None:
        return False
    r = minutes_since(order.ready_at, now)
    return r >= READY_MIN_MINUTES and (r > READY_MAX_MINUTES or coin())


def next_transition(order: Order, now: datetime, coin: CoinFlip) -> Transition | None:
    """Decide at most one forward step for `order` as of `now`."""
    if order.status == OrderStatus.PENDING:
        if should_start_preparation(order, now, coin):
            return Transition(
                order.id,
                OrderStatus.PENDING,
                OrderStatus.IN_PREPARATION,
                OrderUpdate(status=OrderStatus.IN_PREPARATION),
            )
    elif order.status == OrderStatus.IN_PREPARATION:
        if should_mark_ready(order, now, coin):
            return Transition(
                order.id,
                OrderStatus.IN_PREPARATION,
                OrderStatus.READY,
                OrderUpdate(status=OrderStatus.READY, ready_at=now),
            )
    elif order.status == OrderStatus.READY:
        if should_complete(order, now, coin):
            return Transition(
                order.id,
                OrderStatus.READY,
                OrderStatus.COMPLETED,
                OrderUpdate(status=OrderStatus.COMPLETED, completed_at=now),
            )
    return None


def plan_transitions(
    orders: Iterable[Order], now: datetime, coin: CoinFlip
) -> list[Transition]:
    """One transition at most per order; terminal orders are skipped."""
    planned: list[Transition] = []
    for order in orders:
        if order.status.is_terminal:
            continue
        transition = next_transition(order, now, coin)
        if transition is not None:
            planned.append(transition)
    return planned
