"""Tests for the business metrics recorders."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

from prometheus_client import REGISTRY

from src.cb_order.application.worker import ReconciliationReport
from src.cb_order.domain.models import Order, OrderItem
from src.cb_order.infrastructure import metrics

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _sample(name: str, labels: dict[str, str] | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


def _order() -> Order:
    return Order(
        id="order-1",
        user_id="user-1",
        created_at=NOW,
        items=[OrderItem(burger_id="1", quantity=2, extra_topping_ids=("7",))],
        total_price=Decimal("19.00"),
        estimated_completion_at=NOW + timedelta(minutes=4),
        nickname="Sam",
    )


class TestRecorders:
    def test_order_placed(self) -> None:
        labels = {"has_nickname": "true", "has_toppings": "true"}
        before = _sample("burger_orders_placed_total", labels)
        metrics.record_order_placed(_order())
        assert _sample("burger_orders_placed_total", labels) == before + 1

    def test_order_cancelled(self) -> None:
        before = _sample("burger_orders_cancelled_total", {"from_status": "pending"})
        metrics.record_order_cancelled(_order())
        assert _sample("burger_orders_cancelled_total", {"from_status": "pending"}) == before + 1

    def test_reconciliation(self) -> None:
        labels = {"from_status": "pending", "to_status": "in-preparation"}
        before = _sample("burger_order_status_transitions_total", labels)
        report = ReconciliationReport(ran_at=NOW)
        report.transitions["pending->in-preparation"] = 3
        report.queue_depth = {"pending": 4, "ready": 1}
        metrics.record_reconciliation(report)
        assert _sample("burger_order_status_transitions_total", labels) == before + 3
        assert _sample("burger_queue_depth", {"status": "pending"}) == 4
