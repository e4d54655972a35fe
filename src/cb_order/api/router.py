"""cb_order REST endpoints.

POST   /orders              — place an order (admission control)
GET    /orders              — list, ?userId= ?status=a,b ?last=15m|2h
GET    /orders/{order_id}   — single order, ?userId= scopes it
DELETE /orders/{order_id}   — cancel a pending order, ?userId= required
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.bootstrap import AppContainer, get_container
from src.cb_order.application.schemas import (
    CancelOrderResponse,
    CreateOrderRequest,
    OrderResponse,
)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post(
    "",
    response_model=OrderResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def place_order(
    body: CreateOrderRequest,
    container: Annotated[AppContainer, Depends(get_container)],
) -> OrderResponse:
    return await container.order_service.place_order(body)


@router.get("", response_model=list[OrderResponse], response_model_exclude_none=True)
async def list_orders(
    container: Annotated[AppContainer, Depends(get_container)],
    user_id: str | None = Query(None, alias="userId"),
    status_filter: str | None = Query(None, alias="status"),
    last: str | None = Query(None, description="Recency window such as 15m or 2h"),
) -> list[OrderResponse]:
    return await container.order_service.list_orders(user_id, status_filter, last)


@router.get("/{order_id}", response_model=OrderResponse, response_model_exclude_none=True)
async def get_order(
    order_id: str,
    container: Annotated[AppContainer, Depends(get_container)],
    user_id: str | None = Query(None, alias="userId"),
) -> OrderResponse:
    return await container.order_service.get_order(order_id, user_id)


@router.delete("/{order_id}", response_model=CancelOrderResponse)
async def cancel_order(
    order_id: str,
    container: Annotated[AppContainer, Depends(get_container)],
    user_id: str | None = Query(None, alias="userId"),
) -> CancelOrderResponse:
    return await container.order_service.cancel_order(order_id, user_id)
