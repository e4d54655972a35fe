"""Tests for InMemoryOrderStore."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from src.cb_common.enums import OrderStatus
from src.cb_order.domain.models import Order, OrderItem, OrderUpdate
from src.cb_order.infrastructure.memory import InMemoryOrderStore

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _make_order(order_id: str = "order-1", user_id: str = "user-1", age: int = 0) -> Order:
    created_at = NOW - timedelta(minutes=age)
    return Order(
        id=order_id,
        user_id=user_id,
        created_at=created_at,
        items=[OrderItem(burger_id="1", quantity=2, extra_topping_ids=("7",))],
        total_price=Decimal("19.00"),
        estimated_completion_at=created_at + timedelta(minutes=4),
    )


class TestCreateAndRead:
    @pytest.mark.asyncio
    async def test_create_then_get(self, store: InMemoryOrderStore) -> None:
        await store.create(_make_order())
        order = await store.get("order-1")
        assert order is not None
        assert order.total_price == Decimal("19.00")
        assert order.status == OrderStatus.PENDING

    @pytest.mark.asyncio
    async def test_returns_copies(self, store: InMemoryOrderStore) -> None:
        await store.create(_make_order())
        fetched = await store.get("order-1")
        fetched.status = OrderStatus.CANCELLED
        again = await store.get("order-1")
        assert again.status == OrderStatus.PENDING

    @pytest.mark.asyncio
    async def test_list_newest_first_and_scoped(self, store: InMemoryOrderStore) -> None:
        await store.create(_make_order("old", age=30))
        await store.create(_make_order("new", age=1))
        await store.create(_make_order("other", user_id="user-2", age=5))
        assert [o.id for o in await store.list()] == ["new", "other", "old"]
        assert [o.id for o in await store.list("user-1")] == ["new", "old"]


class TestOwnershipScoping:
    @pytest.mark.asyncio
    async def test_foreign_owner_looks_missing(self, store: InMemoryOrderStore) -> None:
        await store.create(_make_order())
        assert await store.get("order-1", "user-2") is None
        assert await store.get("order-1", "user-2") == await store.get("nope", "user-2")

    @pytest.mark.asyncio
    async def test_scoped_update_and_delete(self, store: InMemoryOrderStore) -> None:
        await store.create(_make_order())
        assert await store.update_status("order-1", OrderStatus.READY, "user-2") is None
        assert await store.delete("order-1", "user-2") is False
        assert (await store.get("order-1")).status == OrderStatus.PENDING

        updated = await store.update_status("order-1", OrderStatus.READY, "user-1")
        assert updated.status == OrderStatus.READY
        assert await store.delete("order-1", "user-1") is True
        assert await store.get("order-1") is None


class TestUpdatePartial:
    @pytest.mark.asyncio
    async def test_only_given_fields_change(self, store: InMemoryOrderStore) -> None:
        await store.create(_make_order())
        updated = await store.update_partial(
            "order-1", OrderUpdate(status=OrderStatus.READY, ready_at=NOW)
        )
        assert updated.status == OrderStatus.READY
        assert updated.ready_at == NOW
        assert updated.completed_at is None
        assert updated.total_price == Decimal("19.00")
        assert updated.burger_count == 2

    @pytest.mark.asyncio
    async def test_missing_order_returns_none(self, store: InMemoryOrderStore) -> None:
        assert await store.update_partial("gone", OrderUpdate(status=OrderStatus.READY)) is None


class TestCountByStatus:
    @pytest.mark.asyncio
    async def test_counts_every_status(self, store: InMemoryOrderStore) -> None:
        await store.create(_make_order("a"))
        await store.create(_make_order("b"))
        await store.update_status("b", OrderStatus.COMPLETED)
        counts = await store.count_by_status()
        assert counts == {
            "pending": 1,
            "in-preparation": 0,
            "ready": 0,
            "completed": 1,
            "cancelled": 0,
        }
