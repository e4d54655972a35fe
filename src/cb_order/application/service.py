# src/cb_order/application/service.py
"""OrderApplicationService — HTTP-facing order operations.

Requests arrive as validated schemas; responses leave as OrderResponse, which
never carries the owner's userId.
"""
import logging
from collections.abc import Callable
from datetime import datetime

from src.cb_common.datetime_utils import utc_now
from src.cb_common.errors import (
    AppError,
    InvalidRequestError,
    OrderNotCancellableError,
    OrderNotFoundError,
)
from src.cb_order.application.admission import OrderAdmissionService
from src.cb_order.application.schemas import (
    CancelOrderResponse,
    CreateOrderRequest,
    OrderResponse,
    StatusResponse,
)
from src.cb_order.domain.filters import filter_orders, parse_statuses
from src.cb_order.domain.models import Order, QueueDepth
from src.cb_order.domain.repository import OrderStoreProtocol
from src.cb_user.domain.repository import UserRegistryProtocol

logger = logging.getLogger(__name__)

OrderHook = Callable[[Order], None]


def _noop(order: Order) -> None:
    return None


class OrderApplicationService:
    def __init__(
        self,
        store: OrderStoreProtocol,
        admission: OrderAdmissionService,
        users: UserRegistryProtocol,
        *,
        clock: Callable[[], datetime] = utc_now,
        on_placed: OrderHook = _noop,
        on_cancelled: OrderHook = _noop,
    ) -> None:
        self._store = store
        self._admission = admission
        self._users = users
        self._clock = clock
        self._on_placed = on_placed
        self._on_cancelled = on_cancelled

    async def place_order(self, req: CreateOrderRequest) -> OrderResponse:
        if not req.user_id:
            raise InvalidRequestError("userId is required")
        order = await self._admission.create_order(req.user_id, req.items, req.nickname)
        self._on_placed(order)
        return OrderResponse.from_domain(order)

    async def list_orders(
        self,
        user_id: str | None = None,
        status: str | None = None,
        last: str | None = None,
    ) -> list[OrderResponse]:
        orders = await self._store.list(user_id)
        filtered = filter_orders(
            orders, statuses=parse_statuses(status), since=last, now=self._clock()
        )
        return [OrderResponse.from_domain(o) for o in filtered]

    async def get_order(self, order_id: str, user_id: str | None = None) -> OrderResponse:
        order = await self._store.get(order_id, user_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return OrderResponse.from_domain(order)

    async def cancel_order(self, order_id: str, user_id: str | None) -> CancelOrderResponse:
        if not user_id:
            raise InvalidRequestError("userId is required")
        order = await self._store.get(order_id, user_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if not order.is_cancellable:
            raise OrderNotCancellableError(order_id, order.status.value)
        # A concurrent delete between get and delete looks like a missing order
        if not await self._store.delete(order_id, user_id):
            raise OrderNotFoundError(order_id)
        self._on_cancelled(order)
        logger.info("Order %s cancelled by its owner", order_id)
        return CancelOrderResponse(message="Order cancelled successfully", order_id=order_id)

    async def status_summary(self) -> StatusResponse:
        now = self._clock()
        try:
            depth = QueueDepth()
            depth.counts.update(await self._store.count_by_status())
            registered = await self._users.count_users()
        except AppError as exc:
            logger.warning("Health check could not read the stores: %s", exc.message)
            return StatusResponse(status="up", timestamp=now, error=exc.message)
        return StatusResponse(
            status="up",
            active_orders=depth.active,
            total_orders=depth.total,
            registered_users=registered,
            timestamp=now,
        )
