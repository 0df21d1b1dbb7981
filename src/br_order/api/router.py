# src/br_order/api/router.py
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from config.settings import settings
from src.br_order.application.schemas import (
    CreateOrderRequest,
    ErrorResponse,
    OrderResponse,
)
from src.br_order.application.store import OrderStore

router = APIRouter(prefix="/orders", tags=["orders"])

_ERRORS = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_order_store(request: Request) -> OrderStore:
    """FastAPI dependency: the store handle the app was constructed with."""
    return request.app.state.order_store


@router.get("", response_model=list[OrderResponse], responses=_ERRORS)
async def list_orders(
    store: Annotated[OrderStore, Depends(get_order_store)],
    wallet: str | None = Query(None, description="Filter by wallet address"),
    limit: int = Query(
        settings.DEFAULT_ORDER_LIMIT,
        ge=1,
        le=settings.MAX_ORDER_LIMIT,
        description="Maximum number of orders, newest first",
    ),
    before: int | None = Query(
        None, ge=1, description="Only orders with a smaller id (next page cursor)"
    ),
) -> list[OrderResponse]:
    orders = await store.query(wallet, limit, before)
    return [OrderResponse.from_order(o) for o in orders]


@router.post("", response_model=OrderResponse, status_code=201, responses=_ERRORS)
async def create_order(
    req: CreateOrderRequest,
    store: Annotated[OrderStore, Depends(get_order_store)],
) -> OrderResponse:
    order = await store.append(req.to_draft())
    return OrderResponse.from_order(order)


@router.get("/{order_id}", response_model=OrderResponse, responses={404: {"model": ErrorResponse}})
async def get_order(
    order_id: int,
    store: Annotated[OrderStore, Depends(get_order_store)],
) -> OrderResponse:
    return OrderResponse.from_order(await store.get_order(order_id))
