"""Decimal money helpers.

Prices are `Decimal` end to end; floats only appear at the JSON boundary.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Quantize any numeric input to two decimal places (half-up)."""
    if isinstance(value, float):
        # str() first so 8.5 becomes Decimal("8.5"), not its binary expansion
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
