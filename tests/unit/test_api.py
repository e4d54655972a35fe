"""API tests through httpx ASGITransport against in-memory stores."""

import pytest
from unittest.mock import AsyncMock

from httpx import ASGITransport, AsyncClient

from src.cb_common.enums import OrderStatus
from src.main import app


def _body(user_id: str | None = "user-1", **kwargs) -> dict:
    body = {
        "items": kwargs.pop("items", [{"burgerId": "1", "quantity": 2, "extraToppingIds": ["7"]}]),
        **kwargs,
    }
    if user_id is not None:
        body["userId"] = user_id
    return body


class TestHealth:
    @pytest.mark.asyncio
    async def test_root_and_api(self, client: AsyncClient) -> None:
        for path in ("/", "/api"):
            resp = await client.get(path)
            assert resp.status_code == 200
            data = resp.json()
            assert data["status"] == "up"
            assert data["activeOrders"] == 0
            assert "error" not in data

    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.json()["status"] == "ok"

    @pytest.mark.asyncio
    async def test_request_id_header_matches_error_envelope(self, client: AsyncClient) -> None:
        resp = await client.get("/api/orders/order-missing")
        assert resp.status_code == 404
        assert resp.headers["X-Request-ID"].startswith("req_")
        assert resp.json()["request_id"] == resp.headers["X-Request-ID"]


class TestCatalogEndpoints:
    @pytest.mark.asyncio
    async def test_list_burgers(self, client: AsyncClient) -> None:
        resp = await client.get("/api/burgers")
        assert resp.status_code == 200
        assert len(resp.json()) == 6
        assert resp.json()[0]["price"] == 8.5

    @pytest.mark.asyncio
    async def test_missing_burger(self, client: AsyncClient) -> None:
        resp = await client.get("/api/burgers/99")
        assert resp.status_code == 404
        assert resp.json()["code"] == 3001

    @pytest.mark.asyncio
    async def test_topping_categories(self, client: AsyncClient) -> None:
        resp = await client.get("/api/toppings/categories")
        assert resp.json() == ["vegetable", "meat", "cheese", "sauce", "extras"]

    @pytest.mark.asyncio
    async def test_toppings_by_category(self, client: AsyncClient) -> None:
        resp = await client.get("/api/toppings", params={"category": "sauce"})
        assert {t["name"] for t in resp.json()} == {"House Sauce", "Chipotle Mayo"}


class TestPlaceOrder:
    @pytest.mark.asyncio
    async def test_created(self, client: AsyncClient) -> None:
        resp = await client.post("/api/orders", json=_body(nickname="Sam"))
        assert resp.status_code == 201
        data = resp.json()
        assert data["totalPrice"] == 19.0
        assert data["status"] == "pending"
        assert data["id"].startswith("order-")
        assert data["nickname"] == "Sam"
        assert "userId" not in data
        assert "readyAt" not in data
        assert "completedAt" not in data
        assert "estimatedCompletionAt" in data

    @pytest.mark.asyncio
    async def test_missing_user_id(self, client: AsyncClient) -> None:
        resp = await client.post("/api/orders", json=_body(user_id=None))
        assert resp.status_code == 400
        assert resp.json()["message"] == "userId is required"

    @pytest.mark.asyncio
    async def test_unregistered_user(self, client: AsyncClient) -> None:
        resp = await client.post("/api/orders", json=_body(user_id="stranger"))
        assert resp.status_code == 401
        assert "https://agent.example.com" in resp.json()["message"]

    @pytest.mark.asyncio
    async def test_unknown_topping_is_400(self, client: AsyncClient) -> None:
        body = _body(items=[{"burgerId": "1", "quantity": 1, "extraToppingIds": ["404"]}])
        resp = await client.post("/api/orders", json=body)
        assert resp.status_code == 400
        assert resp.json()["code"] == 3002
        assert (await client.get("/api/orders")).json() == []

    @pytest.mark.asyncio
    async def test_malformed_body_is_400(self, client: AsyncClient) -> None:
        resp = await client.post("/api/orders", json={"userId": "user-1", "items": "nope"})
        assert resp.status_code == 400
        assert resp.json()["code"] == 4001

    @pytest.mark.asyncio
    async def test_sixth_active_order_is_429(self, client: AsyncClient) -> None:
        for _ in range(5):
            assert (await client.post("/api/orders", json=_body())).status_code == 201
        resp = await client.post("/api/orders", json=_body())
        assert resp.status_code == 429


class TestOrderQueries:
    @pytest.mark.asyncio
    async def test_list_and_filter(self, client: AsyncClient, store) -> None:
        first = (await client.post("/api/orders", json=_body())).json()
        await client.post("/api/orders", json=_body(user_id="user-2"))
        await store.update_status(first["id"], OrderStatus.READY)

        mine = await client.get("/api/orders", params={"userId": "user-1"})
        assert [o["id"] for o in mine.json()] == [first["id"]]

        ready = await client.get("/api/orders", params={"status": "Ready", "last": "1h"})
        assert [o["id"] for o in ready.json()] == [first["id"]]

    @pytest.mark.asyncio
    async def test_get_scoped(self, client: AsyncClient) -> None:
        created = (await client.post("/api/orders", json=_body())).json()
        assert (await client.get(f"/api/orders/{created['id']}")).status_code == 200
        other = await client.get(f"/api/orders/{created['id']}", params={"userId": "user-2"})
        missing = await client.get("/api/orders/order-0-doesnotexist", params={"userId": "user-2"})
        assert other.status_code == missing.status_code == 404
        assert other.json().keys() == missing.json().keys()
        assert other.json()["code"] == missing.json()["code"] == 4004

    @pytest.mark.asyncio
    @pytest.mark.parametrize("last", ["20000000h", "99999999999999h"])
    async def test_huge_last_window_lists_everything(self, client: AsyncClient, last: str) -> None:
        created = (await client.post("/api/orders", json=_body())).json()
        resp = await client.get("/api/orders", params={"last": last})
        assert resp.status_code == 200
        assert [o["id"] for o in resp.json()] == [created["id"]]


class TestCancelOrder:
    @pytest.mark.asyncio
    async def test_cancel(self, client: AsyncClient) -> None:
        created = (await client.post("/api/orders", json=_body())).json()
        resp = await client.delete(f"/api/orders/{created['id']}", params={"userId": "user-1"})
        assert resp.status_code == 200
        assert resp.json()["orderId"] == created["id"]
        assert (await client.get(f"/api/orders/{created['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_cancel_without_user_id(self, client: AsyncClient) -> None:
        resp = await client.delete("/api/orders/order-1")
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_cancel_not_pending_is_409(self, client: AsyncClient, store) -> None:
        created = (await client.post("/api/orders", json=_body())).json()
        await store.update_status(created["id"], OrderStatus.IN_PREPARATION)
        resp = await client.delete(f"/api/orders/{created['id']}", params={"userId": "user-1"})
        assert resp.status_code == 409


class TestUnexpectedErrors:
    @pytest.mark.asyncio
    async def test_rendered_as_internal_error_envelope(self, container, store) -> None:
        store.list = AsyncMock(side_effect=RuntimeError("boom"))  # type: ignore[method-assign]
        app.state.container = container
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            resp = await ac.get("/api/orders")
        assert resp.status_code == 500
        body = resp.json()
        assert body["code"] == 9002
        assert body["message"] == "Internal server error"
        assert "boom" not in body["message"]
