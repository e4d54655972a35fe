"""CatalogApplicationService — read-only composition over the catalog repository."""

from src.cb_catalog.application.schemas import BurgerOut, ToppingOut
from src.cb_catalog.domain.repository import CatalogRepositoryProtocol
from src.cb_common.enums import ToppingCategory
from src.cb_common.errors import BurgerNotFoundError, ToppingNotFoundError


class CatalogApplicationService:
    def __init__(self, repo: CatalogRepositoryProtocol) -> None:
        self._repo = repo

    async def list_burgers(self) -> list[BurgerOut]:
        return [BurgerOut.from_domain(b) for b in await self._repo.list_burgers()]

    async def get_burger(self, burger_id: str) -> BurgerOut:
        burger = await self._repo.get_burger(burger_id)
        if burger is None:
            raise BurgerNotFoundError(burger_id, http_status=404)
        return BurgerOut.from_domain(burger)

    async def list_toppings(self, category: str | None) -> list[ToppingOut]:
        # Unknown categories are ignored and the full list is returned
        known = {c.value for c in ToppingCategory}
        effective = category if category in known else None
        toppings = await self._repo.list_toppings(effective)
        return [ToppingOut.from_domain(t) for t in toppings]

    async def get_topping(self, topping_id: str) -> ToppingOut:
        topping = await self._repo.get_topping(topping_id)
        if topping is None:
            raise ToppingNotFoundError(topping_id, http_status=404)
        return ToppingOut.from_domain(topping)

    @staticmethod
    def list_categories() -> list[str]:
        return [c.value for c in ToppingCategory]
