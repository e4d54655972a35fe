"""Business metrics for the kitchen dashboards.

Registered on the default prometheus_client registry, which the
Instrumentator exposes at /metrics alongside the HTTP metrics.
"""
from prometheus_client import Counter, Gauge, Histogram

from src.cb_order.application.worker import ReconciliationReport
from src.cb_order.domain.models import Order

ORDERS_PLACED = Counter(
    "burger_orders_placed_total",
    "Orders accepted by admission control",
    ["has_nickname", "has_toppings"],
)
ORDER_VALUE = Histogram(
    "burger_order_value",
    "Order total price in dollars",
    buckets=(5, 10, 20, 30, 50, 75, 100, 200, 500),
)
ORDER_BURGER_COUNT = Histogram(
    "burger_order_burger_count",
    "Burgers per order",
    buckets=(1, 2, 3, 5, 10, 20, 50),
)
STATUS_TRANSITIONS = Counter(
    "burger_order_status_transitions_total",
    "Orders advanced by the status worker",
    ["from_status", "to_status"],
)
ORDERS_CANCELLED = Counter(
    "burger_orders_cancelled_total",
    "Orders cancelled by their owner",
    ["from_status"],
)
QUEUE_DEPTH = Gauge(
    "burger_queue_depth",
    "Orders per status after the last reconciliation pass",
    ["status"],
)
FAILED_UPDATES = Counter(
    "burger_status_update_failures_total",
    "Per-order update failures during reconciliation",
)


def record_order_placed(order: Order) -> None:
    ORDERS_PLACED.labels(
        has_nickname=str(bool(order.nickname)).lower(),
        has_toppings=str(order.topping_count > 0).lower(),
    ).inc()
    ORDER_VALUE.observe(float(order.total_price))
    ORDER_BURGER_COUNT.observe(order.burger_count)


def record_order_cancelled(order: Order) -> None:
    ORDERS_CANCELLED.labels(from_status=order.status.value).inc()


def record_reconciliation(report: ReconciliationReport) -> None:
    for edge, count in report.transitions.items():
        if count:
            from_status, to_status = edge.split("->")
            STATUS_TRANSITIONS.labels(from_status=from_status, to_status=to_status).inc(count)
    for status, depth in report.queue_depth.items():
        QUEUE_DEPTH.labels(status=status).set(depth)
    if report.failed:
        FAILED_UPDATES.inc(report.failed)
