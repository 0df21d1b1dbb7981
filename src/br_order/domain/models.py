"""Order domain models: pure dataclasses, no SQLAlchemy dependency."""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Account:
    id: int
    wallet_address: str  # natural key, case-preserving
    created_at: datetime
    updated_at: datetime
    kyc_status: str = "pending"
    total_volume: Decimal = Decimal("0")  # cumulative fiat_amount


@dataclass
class OrderDraft:
    """A validated, not-yet-stored order as submitted by a client."""
    order_type: str  # buy / sell
    crypto_currency: str
    crypto_amount: Decimal
    fiat_amount: Decimal
    exchange_rate: Decimal
    wallet_address: str
    fiat_currency: str = "USD"
    payment_method: str | None = None
    rates_status: str = "live"


@dataclass
class Order:
    id: int
    user_id: int
    order_type: str
    crypto_currency: str
    fiat_currency: str
    crypto_amount: Decimal
    fiat_amount: Decimal
    exchange_rate: Decimal
    wallet_address: str
    rates_status: str
    created_at: datetime
    status: str = "pending"
    payment_method: str | None = None
    transaction_hash: str | None = None
    completed_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in ("completed", "failed", "cancelled")
