"""Global enums — values must match DB CHECK constraints exactly."""

from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    IN_PREPARATION = "in-preparation"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)

    @property
    def is_active(self) -> bool:
        """Counts against the per-user concurrent order limit."""
        return self in (OrderStatus.PENDING, OrderStatus.IN_PREPARATION)


class ToppingCategory(str, Enum):
    VEGETABLE = "vegetable"
    MEAT = "meat"
    CHEESE = "cheese"
    SAUCE = "sauce"
    EXTRAS = "extras"
