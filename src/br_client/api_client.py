"""api_client.py

Thin async REST wrapper around the /api/orders endpoints.

* Centralises base-URL and timeout handling so OrderSync only calls
  ``list_orders()`` and ``create_order()``.
* Turns every failure (non-2xx status or transport error) into a single
  ``OrdersApiError`` carrying a human-readable message.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any

import httpx
from pydantic import ValidationError

from config.settings import settings
from src.br_order.application.schemas import OrderResponse
from src.br_order.domain.models import Order, OrderDraft

FETCH_FAILED = "Failed to fetch orders"
CREATE_FAILED = "Failed to create order"
FETCH_NETWORK_ERROR = "Network error while fetching orders"
CREATE_NETWORK_ERROR = "Network error while creating order"


class OrdersApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _number(value: Decimal) -> float:
    return float(value)


def draft_to_payload(draft: OrderDraft) -> dict[str, Any]:
    """camelCase JSON body for POST /orders."""
    payload: dict[str, Any] = {
        "orderType": draft.order_type,
        "cryptoCurrency": draft.crypto_currency,
        "fiatCurrency": draft.fiat_currency,
        "cryptoAmount": _number(draft.crypto_amount),
        "fiatAmount": _number(draft.fiat_amount),
        "exchangeRate": _number(draft.exchange_rate),
        "walletAddress": draft.wallet_address,
        "ratesStatus": draft.rates_status,
    }
    if draft.payment_method:
        payload["paymentMethod"] = draft.payment_method
    return payload


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return default


class OrdersApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout or settings.HTTP_TIMEOUT_SECONDS,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def list_orders(
        self,
        wallet_address: str,
        limit: int | None = None,
        before: int | None = None,
    ) -> list[Order]:
        params = {
            "wallet": wallet_address,
            "limit": str(limit or settings.DEFAULT_ORDER_LIMIT),
        }
        if before is not None:
            params["before"] = str(before)
        try:
            response = await self._client.get("/api/orders", params=params)
        except httpx.HTTPError as exc:
            raise OrdersApiError(FETCH_NETWORK_ERROR) from exc
        if response.is_error:
            raise OrdersApiError(_error_message(response, FETCH_FAILED), response.status_code)
        try:
            body = response.json()
            if not isinstance(body, list):
                raise OrdersApiError(FETCH_FAILED, response.status_code)
            return [OrderResponse.model_validate(item).to_order() for item in body]
        except (ValueError, ValidationError) as exc:
            raise OrdersApiError(FETCH_FAILED, response.status_code) from exc

    async def create_order(self, draft: OrderDraft) -> Order:
        try:
            response = await self._client.post("/api/orders", json=draft_to_payload(draft))
        except httpx.HTTPError as exc:
            raise OrdersApiError(CREATE_NETWORK_ERROR) from exc
        if response.is_error:
            raise OrdersApiError(_error_message(response, CREATE_FAILED), response.status_code)
        try:
            return OrderResponse.model_validate(response.json()).to_order()
        except (ValueError, ValidationError) as exc:
            raise OrdersApiError(CREATE_FAILED, response.status_code) from exc
