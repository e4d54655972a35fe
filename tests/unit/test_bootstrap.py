"""Tests for store selection at startup."""

from unittest.mock import AsyncMock, patch

import pytest

from config.settings import Settings
from src import bootstrap
from src.cb_catalog.infrastructure.persistence import SqlCatalogRepository
from src.cb_order.infrastructure.memory import InMemoryOrderStore
from src.cb_order.infrastructure.persistence import SqlOrderStore
from src.cb_user.infrastructure.memory import InMemoryUserRegistry


class TestInitContainer:
    @pytest.mark.asyncio
    async def test_no_database_url_uses_memory(self) -> None:
        container = await bootstrap.init_container(Settings(DATABASE_URL=None))
        assert container.backend == bootstrap.BACKEND_MEMORY
        assert isinstance(container.orders, InMemoryOrderStore)
        assert container.engine is None

    @pytest.mark.asyncio
    async def test_registered_ids_seed_memory_registry(self) -> None:
        container = await bootstrap.init_container(
            Settings(DATABASE_URL=None, REGISTERED_USER_IDS="alice, bob")
        )
        assert isinstance(container.users, InMemoryUserRegistry)
        assert await container.users.user_exists("alice")
        assert not await container.users.user_exists("carol")

    @pytest.mark.asyncio
    async def test_unreachable_database_falls_back(self) -> None:
        settings = Settings(DATABASE_URL="postgresql+asyncpg://u:p@localhost:1/db")
        with patch.object(bootstrap, "_probe", AsyncMock(side_effect=OSError("refused"))):
            container = await bootstrap.init_container(settings)
        assert container.backend == bootstrap.BACKEND_MEMORY
        assert isinstance(container.orders, InMemoryOrderStore)

    @pytest.mark.asyncio
    async def test_reachable_database_uses_sql_everywhere(self) -> None:
        settings = Settings(DATABASE_URL="postgresql+asyncpg://u:p@localhost:1/db")
        with patch.object(bootstrap, "_probe", AsyncMock(return_value=None)):
            container = await bootstrap.init_container(settings)
        try:
            assert container.backend == bootstrap.BACKEND_SQL
            assert isinstance(container.orders, SqlOrderStore)
            assert isinstance(container.catalog, SqlCatalogRepository)
        finally:
            await bootstrap.close_container(container)
