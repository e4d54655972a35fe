"""In-memory catalog, used when PostgreSQL is unavailable at startup."""

from collections.abc import Iterable

from src.cb_catalog.domain.models import Burger, Topping
from src.cb_catalog.infrastructure.seed import load_burgers, load_toppings


class InMemoryCatalogRepository:
    def __init__(
        self,
        burgers: Iterable[Burger] | None = None,
        toppings: Iterable[Topping] | None = None,
    ) -> None:
        self._burgers = {b.id: b for b in (load_burgers() if burgers is None else burgers)}
        self._toppings = {t.id: t for t in (load_toppings() if toppings is None else toppings)}

    async def list_burgers(self) -> list[Burger]:
        return list(self._burgers.values())

    async def get_burger(self, burger_id: str) -> Burger | None:
        return self._burgers.get(burger_id)

    async def list_toppings(self, category: str | None = None) -> list[Topping]:
        return [t for t in self._toppings.values() if category is None or t.category == category]

    async def get_topping(self, topping_id: str) -> Topping | None:
        return self._toppings.get(topping_id)
