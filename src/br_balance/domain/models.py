"""Balance: a derived snapshot, never an authoritative record."""
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from src.br_common.amounts import ZERO, parse_amount, quantize_crypto, quantize_fiat
from src.br_common.enums import AssetSymbol


def zero_amounts() -> dict[AssetSymbol, Decimal]:
    return {asset: quantize_crypto(ZERO) for asset in AssetSymbol}


@dataclass(frozen=True)
class Balance:
    """Per-asset holdings plus their USD valuation.

    ``order_count`` separates "this account has no orders" (0) from "nothing
    loaded yet", which callers represent as ``None`` instead of a Balance.
    """

    amounts: Mapping[AssetSymbol, Decimal]
    total_usd: Decimal
    order_count: int = 0

    def __post_init__(self) -> None:
        merged = zero_amounts()
        merged.update(self.amounts)
        object.__setattr__(self, "amounts", MappingProxyType(merged))

    @property
    def has_orders(self) -> bool:
        return self.order_count > 0

    def get(self, asset: "str | AssetSymbol") -> Decimal:
        """Case-insensitive lookup: 'eth', 'ETH' and AssetSymbol.ETH all work.

        Unknown symbols read as zero.
        """
        symbol = asset if isinstance(asset, AssetSymbol) else AssetSymbol.resolve(asset)
        if symbol is None:
            return quantize_crypto(ZERO)
        return self.amounts[symbol]

    def display(self, asset: "str | AssetSymbol") -> str:
        """Amount as shown next to a form field; '0' when empty or unknown."""
        amount = self.get(asset)
        return "0" if not amount else f"{amount.normalize():f}"

    def to_snapshot(self) -> dict[str, Any]:
        """JSON-friendly form for the local cache: {'eth': '1.200000', ..., 'usd': '4368.30'}."""
        data: dict[str, Any] = {asset.key: str(amount) for asset, amount in self.amounts.items()}
        data["usd"] = str(self.total_usd)
        data["order_count"] = self.order_count
        return data

    @classmethod
    def from_snapshot(cls, data: Mapping[str, Any]) -> "Balance | None":
        """Rebuild a cached snapshot. Corrupt entries return None rather than raise."""
        if not isinstance(data, Mapping):
            return None
        amounts: dict[AssetSymbol, Decimal] = {}
        for asset in AssetSymbol:
            value = parse_amount(data.get(asset.key, "0"))
            if value is None or value < 0:
                return None
            amounts[asset] = quantize_crypto(value)
        total = parse_amount(data.get("usd", "0"))
        if total is None:
            return None
        count = data.get("order_count", 0)
        return cls(
            amounts=amounts,
            total_usd=quantize_fiat(total),
            order_count=count if isinstance(count, int) and count >= 0 else 0,
        )

    @classmethod
    def zero(cls) -> "Balance":
        return cls(amounts={}, total_usd=quantize_fiat(ZERO), order_count=0)
