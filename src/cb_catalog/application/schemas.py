"""Pydantic schemas for cb_catalog API responses."""

from src.cb_catalog.domain.models import Burger, Topping
from src.cb_common.schemas import CamelModel, MoneyOut


class BurgerOut(CamelModel):
    id: str
    name: str
    description: str
    price: MoneyOut
    image_url: str

    @classmethod
    def from_domain(cls, b: Burger) -> "BurgerOut":
        return cls(
            id=b.id,
            name=b.name,
            description=b.description,
            price=b.price,
            image_url=b.image_ref,
        )


class ToppingOut(CamelModel):
    id: str
    name: str
    description: str
    category: str
    price: MoneyOut
    image_url: str

    @classmethod
    def from_domain(cls, t: Topping) -> "ToppingOut":
        return cls(
            id=t.id,
            name=t.name,
            description=t.description,
            category=t.category,
            price=t.price,
            image_url=t.image_ref,
        )
