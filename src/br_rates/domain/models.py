"""Rate table and provenance state: pure dataclasses."""
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType

from src.br_common.enums import RatesProvenance

USD = "USD"


@dataclass(frozen=True)
class ExchangeRates:
    """Crypto -> USD unit prices and fiat -> USD-per-unit rates.

    Immutable: a refresh swaps the whole table, never a single entry.
    USD is always pinned to 1.
    """

    crypto: Mapping[str, Decimal]
    fiat: Mapping[str, Decimal]

    def __post_init__(self) -> None:
        crypto = {k.upper(): Decimal(v) for k, v in self.crypto.items()}
        fiat = {k.upper(): Decimal(v) for k, v in self.fiat.items()}
        fiat[USD] = Decimal("1")
        object.__setattr__(self, "crypto", MappingProxyType(crypto))
        object.__setattr__(self, "fiat", MappingProxyType(fiat))

    def usd_price(self, crypto: str) -> Decimal:
        """USD price of one unit of crypto, 0 when unknown."""
        return self.crypto.get(crypto.upper(), Decimal("0"))

    def usd_per_unit(self, fiat: str) -> Decimal | None:
        return self.fiat.get(fiat.upper())


@dataclass(frozen=True)
class RatesState:
    status: RatesProvenance = RatesProvenance.HARDCODED
    last_updated: str | None = None  # "HH:MM", set by a successful refresh
    error: str | None = None


HARDCODED_RATES = ExchangeRates(
    crypto={
        "ETH": Decimal("3640.25"),
        "BTC": Decimal("65000.00"),
        "USDC": Decimal("1.00"),
        "USDT": Decimal("1.00"),
        "ARB": Decimal("2.45"),
    },
    fiat={
        "EUR": Decimal("1.10"),  # 1 EUR = 1.10 USD
        "GBP": Decimal("1.27"),  # 1 GBP = 1.27 USD
        USD: Decimal("1.00"),
    },
)

