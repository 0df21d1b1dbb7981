"""Balance reconciliation: derive holdings purely from order history.

reconcile() is a fold over the whole order list. Buys and sells are summed per
asset first and the net is clamped at zero afterwards, so the result does not
depend on the order the list arrives in. Duplicated orders count twice.
"""
import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any, Protocol

from src.br_balance.domain.models import Balance
from src.br_common.amounts import ZERO, parse_amount, quantize_crypto, quantize_fiat
from src.br_common.enums import AssetSymbol, OrderType

logger = logging.getLogger(__name__)


class UsdPriceSource(Protocol):
    """Anything that prices one unit of a crypto in USD (RateOracle, ExchangeRates)."""

    def usd_price(self, crypto: str) -> Decimal: ...


def portfolio_value(amounts: Mapping[AssetSymbol, Decimal], prices: UsdPriceSource) -> Decimal:
    """USD valuation of non-zero holdings. Assets without a price add nothing."""
    total = ZERO
    for asset, amount in amounts.items():
        if not amount:
            continue
        total += amount * prices.usd_price(asset.value)
    return quantize_fiat(total)


def reconcile(
    orders: Iterable[Any],
    prices: UsdPriceSource,
    wallet_address: str | None = None,
) -> Balance:
    """Fold an account's orders into a Balance.

    ``orders`` may be domain Orders or wire records; only ``order_type``,
    ``crypto_currency``, ``crypto_amount`` (and ``wallet_address`` when filtering)
    are read. Orders for unknown assets or with unusable amounts are skipped.
    """
    bought: dict[AssetSymbol, Decimal] = {asset: ZERO for asset in AssetSymbol}
    sold: dict[AssetSymbol, Decimal] = {asset: ZERO for asset in AssetSymbol}
    counted = 0

    for order in orders:
        if wallet_address is not None and getattr(order, "wallet_address", None) != wallet_address:
            continue
        counted += 1
        asset = AssetSymbol.resolve(getattr(order, "crypto_currency", None))
        amount = parse_amount(getattr(order, "crypto_amount", None))
        if asset is None or amount is None or amount < 0:
            logger.debug("Skipping order %s: unusable asset or amount", getattr(order, "id", "?"))
            continue
        order_type = getattr(order, "order_type", None)
        if order_type == OrderType.BUY.value:
            bought[asset] += amount
        elif order_type == OrderType.SELL.value:
            sold[asset] += amount

    amounts = {
        asset: quantize_crypto(max(ZERO, bought[asset] - sold[asset])) for asset in AssetSymbol
    }
    return Balance(
        amounts=amounts,
        total_usd=portfolio_value(amounts, prices),
        order_count=counted,
    )


def revalue(balance: Balance, prices: UsdPriceSource) -> Balance:
    """Same holdings, valuation recomputed against the current rate table."""
    return Balance(
        amounts=balance.amounts,
        total_usd=portfolio_value(balance.amounts, prices),
        order_count=balance.order_count,
    )
