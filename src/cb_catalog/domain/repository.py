# src/cb_catalog/domain/repository.py
"""CatalogRepository Protocol — read-only burger and topping lookups.

Two implementations exist (PostgreSQL and in-memory); the bootstrap picks one
at startup and callers never know which.
"""

from typing import Protocol

from src.cb_catalog.domain.models import Burger, Topping


class CatalogRepositoryProtocol(Protocol):
    async def list_burgers(self) -> list[Burger]: ...

    async def get_burger(self, burger_id: str) -> Burger | None: ...

    async def list_toppings(self, category: str | None = None) -> list[Topping]: ...

    async def get_topping(self, topping_id: str) -> Topping | None: ...
