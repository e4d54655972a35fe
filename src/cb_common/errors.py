"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: User
  3xxx: Catalog
  4xxx: Order
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: User ---

class UserNotRegisteredError(AppError):
    def __init__(self, registration_url: str) -> None:
        super().__init__(
            1001,
            "The specified userId is not registered. "
            f"Please login to get a valid userId at: {registration_url}",
            401,
        )


# --- 3xxx: Catalog ---

class BurgerNotFoundError(AppError):
    """Raised with 400 when the id came from an order body, 404 on a direct lookup."""

    def __init__(self, burger_id: str, http_status: int = 400) -> None:
        super().__init__(3001, f"Burger with ID {burger_id} not found", http_status)


class ToppingNotFoundError(AppError):
    def __init__(self, topping_id: str, http_status: int = 400) -> None:
        super().__init__(3002, f"Topping with ID {topping_id} not found", http_status)


# --- 4xxx: Order ---

class InvalidRequestError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4001, detail, 400)


class OrderNotFoundError(AppError):
    def __init__(self, order_id: str) -> None:
        super().__init__(4004, f"Order not found: {order_id}", 404)


class TooManyActiveOrdersError(AppError):
    def __init__(self, limit: int) -> None:
        super().__init__(4005, f"Too many active orders: limit is {limit} per user", 429)


class OrderNotCancellableError(AppError):
    def __init__(self, order_id: str, status: str) -> None:
        super().__init__(4006, f"Order {order_id} in status {status} cannot be cancelled", 409)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class StoreUnavailableError(AppError):
    def __init__(self, operation: str) -> None:
        super().__init__(9003, f"Internal server error: store unavailable during {operation}", 500)
