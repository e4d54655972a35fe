"""cb_catalog REST endpoints.

GET /burgers                  — full menu
GET /burgers/{burger_id}      — single burger
GET /toppings                 — all toppings, optional ?category=
GET /toppings/categories      — category names
GET /toppings/{topping_id}    — single topping
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.bootstrap import AppContainer, get_container
from src.cb_catalog.application.schemas import BurgerOut, ToppingOut

router = APIRouter(tags=["catalog"])


@router.get("/burgers", response_model=list[BurgerOut])
async def list_burgers(
    container: Annotated[AppContainer, Depends(get_container)],
) -> list[BurgerOut]:
    return await container.catalog_service.list_burgers()


@router.get("/burgers/{burger_id}", response_model=BurgerOut)
async def get_burger(
    burger_id: str,
    container: Annotated[AppContainer, Depends(get_container)],
) -> BurgerOut:
    return await container.catalog_service.get_burger(burger_id)


@router.get("/toppings/categories", response_model=list[str])
async def list_topping_categories(
    container: Annotated[AppContainer, Depends(get_container)],
) -> list[str]:
    return container.catalog_service.list_categories()


@router.get("/toppings", response_model=list[ToppingOut])
async def list_toppings(
    container: Annotated[AppContainer, Depends(get_container)],
    category: str | None = Query(None, description="vegetable, meat, cheese, sauce or extras"),
) -> list[ToppingOut]:
    return await container.catalog_service.list_toppings(category)


@router.get("/toppings/{topping_id}", response_model=ToppingOut)
async def get_topping(
    topping_id: str,
    container: Annotated[AppContainer, Depends(get_container)],
) -> ToppingOut:
    return await container.catalog_service.get_topping(topping_id)
