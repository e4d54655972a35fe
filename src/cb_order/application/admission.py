"""Order admission control and pricing.

Checks run in a fixed order and the first failure wins:

    1. user registered                      -> UserNotRegisteredError (401)
    2. at least one item                    -> InvalidRequestError (400)
    3. fewer active orders than the cap     -> TooManyActiveOrdersError (429)
    4. total burgers within the per-order cap
    5. every quantity a positive integer
    6. every burger id known                -> BurgerNotFoundError (400)
    7. every extra topping id known         -> ToppingNotFoundError (400)

Nothing is persisted unless every check passes.
"""
import asyncio
import logging
import random
from collections.abc import Callable, Sequence
from datetime import datetime
from decimal import Decimal

from src.cb_catalog.domain.models import Burger, Topping
from src.cb_catalog.domain.repository import CatalogRepositoryProtocol
from src.cb_common.datetime_utils import utc_now
from src.cb_common.errors import (
    BurgerNotFoundError,
    InvalidRequestError,
    ToppingNotFoundError,
    TooManyActiveOrdersError,
    UserNotRegisteredError,
)
from src.cb_common.id_generator import generate_order_id
from src.cb_common.money import to_money
from src.cb_order.application.schemas import OrderItemRequest
from src.cb_order.domain.models import Order, OrderItem
from src.cb_order.domain.pricing import estimate_completion, item_price
from src.cb_order.domain.repository import OrderStoreProtocol
from src.cb_user.domain.repository import UserRegistryProtocol

logger = logging.getLogger(__name__)


def _as_quantity(value: object) -> int | None:
    """Positive integer quantity, or None when `value` is not one.

    JSON has a single number type, so 2.0 counts as 2; 2.5 and True do not.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float) and value.is_integer() and value > 0:
        return int(value)
    return None


class OrderAdmissionService:
    def __init__(
        self,
        orders: OrderStoreProtocol,
        catalog: CatalogRepositoryProtocol,
        users: UserRegistryProtocol,
        *,
        max_active_orders: int,
        max_burgers: int,
        registration_url: str,
        clock: Callable[[], datetime] = utc_now,
        rng: random.Random | None = None,
        id_factory: Callable[[], str] = generate_order_id,
    ) -> None:
        self._orders = orders
        self._catalog = catalog
        self._users = users
        self._max_active_orders = max_active_orders
        self._max_burgers = max_burgers
        self._registration_url = registration_url
        self._clock = clock
        self._rng = rng or random.Random()
        self._id_factory = id_factory

    async def create_order(
        self,
        user_id: str,
        items: Sequence[OrderItemRequest] | None,
        nickname: str | None = None,
    ) -> Order:
        if not await self._users.user_exists(user_id):
            raise UserNotRegisteredError(self._registration_url)

        if not items:
            raise InvalidRequestError("Order must contain at least one burger")

        existing = await self._orders.list(user_id)
        active = sum(1 for o in existing if o.is_active)
        if active >= self._max_active_orders:
            raise TooManyActiveOrdersError(self._max_active_orders)

        quantities = [_as_quantity(item.quantity) for item in items]
        # Invalid quantities count as zero here; check 5 reports them
        total_burgers = sum(q or 0 for q in quantities)
        if total_burgers > self._max_burgers:
            raise InvalidRequestError(
                f"Order cannot exceed {self._max_burgers} burgers in total"
            )
        for item, quantity in zip(items, quantities):
            if quantity is None:
                raise InvalidRequestError(
                    f"Quantity for burger {item.burger_id} must be a positive integer"
                )

        burgers, toppings = await self._resolve_catalog(items)

        order_items: list[OrderItem] = []
        total = Decimal("0")
        for item, quantity in zip(items, quantities):
            burger = burgers[item.burger_id]
            topping_prices = [toppings[t].price for t in item.extra_topping_ids]
            total += item_price(burger.price, topping_prices, quantity)
            order_items.append(
                OrderItem(
                    burger_id=item.burger_id,
                    quantity=quantity,
                    extra_topping_ids=tuple(item.extra_topping_ids),
                )
            )

        created_at = self._clock()
        order = Order(
            id=self._id_factory(),
            user_id=user_id,
            created_at=created_at,
            items=order_items,
            total_price=to_money(total),
            estimated_completion_at=estimate_completion(
                created_at, total_burgers, self._rng
            ),
            nickname=nickname,
        )
        created = await self._orders.create(order)
        logger.info(
            "Order %s accepted: %d burger(s), total %s",
            created.id,
            total_burgers,
            created.total_price,
        )
        return created

    async def _resolve_catalog(
        self, items: Sequence[OrderItemRequest]
    ) -> tuple[dict[str, Burger], dict[str, Topping]]:
        """Look up every referenced burger and topping concurrently.

        Missing ids are reported in request order, burgers before toppings.
        """
        burger_ids = list(dict.fromkeys(item.burger_id for item in items))
        topping_ids = list(
            dict.fromkeys(t for item in items for t in item.extra_topping_ids)
        )

        found_burgers, found_toppings = await asyncio.gather(
            asyncio.gather(*(self._catalog.get_burger(b) for b in burger_ids)),
            asyncio.gather(*(self._catalog.get_topping(t) for t in topping_ids)),
        )

        burgers = {bid: b for bid, b in zip(burger_ids, found_burgers) if b is not None}
        toppings = {tid: t for tid, t in zip(topping_ids, found_toppings) if t is not None}

        for burger_id in burger_ids:
            if burger_id not in burgers:
                raise BurgerNotFoundError(burger_id)
        for topping_id in topping_ids:
            if topping_id not in toppings:
                raise ToppingNotFoundError(topping_id)
        return burgers, toppings
