"""Bundled menu data — backs the in-memory catalog and the Alembic seed revision."""

import json
from pathlib import Path
from typing import Any

from src.cb_catalog.domain.models import Burger, Topping
from src.cb_common.money import to_money

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def _load(name: str) -> list[dict[str, Any]]:
    return json.loads((_DATA_DIR / name).read_text(encoding="utf-8"))


def load_burgers() -> list[Burger]:
    return [
        Burger(
            id=str(raw["id"]),
            name=raw["name"],
            description=raw["description"],
            price=to_money(raw["price"]),
            image_ref=raw["imageUrl"],
        )
        for raw in _load("burgers.json")
    ]


def load_toppings() -> list[Topping]:
    return [
        Topping(
            id=str(raw["id"]),
            name=raw["name"],
            description=raw["description"],
            category=raw["category"],
            price=to_money(raw["price"]),
            image_ref=raw["imageUrl"],
        )
        for raw in _load("toppings.json")
    ]
