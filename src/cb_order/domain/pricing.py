"""Order pricing and kitchen time estimate."""
import random
from collections.abc import Iterable
from datetime import datetime, timedelta
from decimal import Decimal

from src.cb_common.money import to_money

BASE_MIN_MINUTES = 3
BASE_MAX_MINUTES = 5
FREE_BURGERS = 2  # burgers beyond this add one minute each to both bounds


def item_price(burger_price: Decimal, topping_prices: Iterable[Decimal], quantity: int) -> Decimal:
    """(burger + Σ toppings) × quantity."""
    unit = burger_price + sum(topping_prices, Decimal("0"))
    return to_money(unit * quantity)


def estimate_window(burger_count: int) -> tuple[int, int]:
    """Inclusive [min, max] minutes for an order of `burger_count` burgers."""
    extra = max(0, burger_count - FREE_BURGERS)
    return BASE_MIN_MINUTES + extra, BASE_MAX_MINUTES + extra


def estimate_completion(
    created_at: datetime, burger_count: int, rng: random.Random
) -> datetime:
    low, high = estimate_window(burger_count)
    return created_at + timedelta(minutes=rng.randint(low, high))
