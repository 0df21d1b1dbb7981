"""Global enums: values are the exact strings used on the wire and in storage."""

from enum import Enum


class OrderType(str, Enum):
    BUY = "buy"
    SELL = "sell"


class OrderStatus(str, Enum):
    # Only PENDING is ever assigned; no transition endpoint exists yet.
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class KycStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class RatesProvenance(str, Enum):
    """How fresh the rate table is."""
    HARDCODED = "hardcoded"
    UPDATING = "updating"
    LIVE = "live"


class AssetSymbol(str, Enum):
    """Crypto assets the dashboard tracks balances for."""
    ETH = "ETH"
    BTC = "BTC"
    USDC = "USDC"
    USDT = "USDT"
    ARB = "ARB"

    @property
    def key(self) -> str:
        """Lowercase balance key: ETH -> 'eth'."""
        return self.value.lower()

    @classmethod
    def resolve(cls, code: object) -> "AssetSymbol | None":
        """Case-insensitive lookup. Unknown or non-string codes resolve to None."""
        if not isinstance(code, str):
            return None
        try:
            return cls(code.strip().upper())
        except ValueError:
            return None


class FiatCurrency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
