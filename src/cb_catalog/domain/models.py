"""Catalog domain models — pure dataclasses, immutable reference data."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Burger:
    id: str
    name: str
    description: str
    price: Decimal
    image_ref: str


@dataclass(frozen=True)
class Topping:
    id: str
    name: str
    description: str
    category: str  # vegetable / meat / cheese / sauce / extras
    price: Decimal
    image_ref: str
