"""Shared test fixtures."""

import random

import pytest
from httpx import ASGITransport, AsyncClient

from config.settings import Settings
from src.bootstrap import AppContainer, build_container
from src.cb_catalog.infrastructure.memory import InMemoryCatalogRepository
from src.cb_order.infrastructure.memory import InMemoryOrderStore
from src.cb_user.infrastructure.memory import InMemoryUserRegistry
from src.main import app


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        DATABASE_URL=None,
        AGENT_WEBAPP_URL="https://agent.example.com",
        STATUS_WORKER_ENABLED=False,
    )


@pytest.fixture
def catalog() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def users() -> InMemoryUserRegistry:
    return InMemoryUserRegistry(["user-1", "user-2"])


@pytest.fixture
def store() -> InMemoryOrderStore:
    return InMemoryOrderStore()


@pytest.fixture
def container(test_settings, catalog, users, store) -> AppContainer:
    return build_container(
        test_settings,
        catalog=catalog,
        users=users,
        orders=store,
        rng=random.Random(1234),
    )


@pytest.fixture
async def client(container: AppContainer) -> AsyncClient:
    """Async HTTP client against the app with in-memory stores installed."""
    app.state.container = container
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
