# src/br_order/application/schemas.py
"""Wire schemas for the /orders endpoints.

Requests are camelCase (as sent by the dashboard), responses are the stored
order record in snake_case. Amounts are Decimal internally and JSON numbers on
the wire.
"""
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

from src.br_order.domain.models import Order, OrderDraft


class CreateOrderRequest(BaseModel):
    """POST /orders body.

    order_type and wallet_address are deliberately loose here: their absence or
    invalid values are business validation errors (400 with a message), raised by
    the store, not schema errors.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    order_type: str | None = None
    crypto_currency: str = ""
    fiat_currency: str | None = None
    crypto_amount: Decimal
    fiat_amount: Decimal
    exchange_rate: Decimal
    payment_method: str | None = None
    wallet_address: str | None = None
    rates_status: str | None = None

    def to_draft(self) -> OrderDraft:
        return OrderDraft(
            order_type=self.order_type or "",
            crypto_currency=self.crypto_currency,
            fiat_currency=self.fiat_currency or "USD",
            crypto_amount=self.crypto_amount,
            fiat_amount=self.fiat_amount,
            exchange_rate=self.exchange_rate,
            payment_method=self.payment_method,
            wallet_address=self.wallet_address or "",
            rates_status=self.rates_status or "live",
        )


class OrderResponse(BaseModel):
    id: int
    user_id: int
    order_type: str
    crypto_currency: str
    fiat_currency: str
    crypto_amount: Decimal
    fiat_amount: Decimal
    exchange_rate: Decimal
    status: str
    payment_method: str | None = None
    transaction_hash: str | None = None
    wallet_address: str
    rates_status: str
    created_at: datetime
    completed_at: datetime | None = None

    @field_serializer("crypto_amount", "fiat_amount", "exchange_rate", when_used="json")
    def _decimal_as_number(self, value: Decimal) -> float:
        return float(value)

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            user_id=order.user_id,
            order_type=order.order_type,
            crypto_currency=order.crypto_currency,
            fiat_currency=order.fiat_currency,
            crypto_amount=order.crypto_amount,
            fiat_amount=order.fiat_amount,
            exchange_rate=order.exchange_rate,
            status=order.status,
            payment_method=order.payment_method,
            transaction_hash=order.transaction_hash,
            wallet_address=order.wallet_address,
            rates_status=order.rates_status,
            created_at=order.created_at,
            completed_at=order.completed_at,
        )

    def to_order(self) -> Order:
        return Order(
            id=self.id,
            user_id=self.user_id,
            order_type=self.order_type,
            crypto_currency=self.crypto_currency,
            fiat_currency=self.fiat_currency,
            crypto_amount=self.crypto_amount,
            fiat_amount=self.fiat_amount,
            exchange_rate=self.exchange_rate,
            status=self.status,
            payment_method=self.payment_method,
            transaction_hash=self.transaction_hash,
            wallet_address=self.wallet_address,
            rates_status=self.rates_status,
            created_at=self.created_at,
            completed_at=self.completed_at,
        )


class ErrorResponse(BaseModel):
    error: str
    code: int
