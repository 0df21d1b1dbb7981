"""Shared state and submission flow for the Buy and Sell forms."""
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from decimal import Decimal

from src.br_client.api_client import CREATE_FAILED
from src.br_client.order_sync import OrderSync
from src.br_common.amounts import parse_amount, quantize_crypto, quantize_fiat
from src.br_common.enums import AssetSymbol, FiatCurrency, OrderType
from src.br_forms.conversion import crypto_to_fiat, fiat_to_crypto
from src.br_order.domain.models import Order, OrderDraft
from src.br_rates.application.oracle import RateOracle

logger = logging.getLogger(__name__)


def _resolve_fiat(code: "str | FiatCurrency") -> FiatCurrency:
    if isinstance(code, FiatCurrency):
        return code
    return FiatCurrency(code.strip().upper())


class ConversionForm(ABC):
    """Form state: a crypto/fiat pair plus the two linked amount fields.

    Subclasses decide which field drives recomputation after a pair switch and
    when submission is allowed.
    """

    order_type: OrderType

    def __init__(
        self,
        oracle: RateOracle,
        sync: OrderSync,
        wallet_address: str | None,
        *,
        crypto: "str | AssetSymbol" = AssetSymbol.ETH,
        fiat: "str | FiatCurrency" = FiatCurrency.USD,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self._oracle = oracle
        self._sync = sync
        self._on_close = on_close
        self.wallet_address = wallet_address
        self.crypto = self._resolve_crypto(crypto)
        self.fiat = _resolve_fiat(fiat)
        self.crypto_amount = ""
        self.fiat_amount = ""
        self.is_submitting = False
        self.is_open = True
        self.submit_error: str | None = None

    @staticmethod
    def _resolve_crypto(code: "str | AssetSymbol") -> AssetSymbol:
        symbol = code if isinstance(code, AssetSymbol) else AssetSymbol.resolve(code)
        if symbol is None:
            raise ValueError(f"Unsupported crypto currency: {code}")
        return symbol

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    @property
    def unit_price(self) -> Decimal:
        return self._oracle.unit_price(self.crypto.value, self.fiat.value)

    @property
    def exchange_rate_label(self) -> str:
        """'1 ETH = 3,640.25 USD'; four decimals for non-USD fiat."""
        places = 2 if self.fiat is FiatCurrency.USD else 4
        return f"1 {self.crypto.value} = {self.unit_price:,.{places}f} {self.fiat.value}"

    def set_fiat_amount(self, value: str) -> None:
        self.fiat_amount = value
        self.crypto_amount = fiat_to_crypto(value, self.unit_price)

    def set_crypto_amount(self, value: str) -> None:
        self.crypto_amount = value
        self.fiat_amount = crypto_to_fiat(value, self.unit_price)

    def select_crypto(self, code: "str | AssetSymbol") -> None:
        self.crypto = self._resolve_crypto(code)
        self._recompute()

    def select_fiat(self, code: "str | FiatCurrency") -> None:
        self.fiat = _resolve_fiat(code)
        self._recompute()

    @abstractmethod
    def _recompute(self) -> None: ...

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    @property
    @abstractmethod
    def can_submit(self) -> bool: ...

    @abstractmethod
    def _payment_method(self) -> str | None: ...

    def build_draft(self) -> OrderDraft:
        return OrderDraft(
            order_type=self.order_type.value,
            crypto_currency=self.crypto.value,
            fiat_currency=self.fiat.value,
            crypto_amount=quantize_crypto(parse_amount(self.crypto_amount) or Decimal("0")),
            fiat_amount=quantize_fiat(parse_amount(self.fiat_amount) or Decimal("0")),
            exchange_rate=self.unit_price,
            payment_method=self._payment_method(),
            wallet_address=self.wallet_address or "",
            rates_status=self._oracle.provenance.value,
        )

    async def submit(self) -> Order | None:
        """Send the order through OrderSync; close the form on success.

        OrderSync.submit() reloads the wallet's orders, so the balance is
        recomputed against the new order before this returns.
        """
        if not self.can_submit:
            return None
        self.is_submitting = True
        self.submit_error = None
        try:
            order = await self._sync.submit(self.build_draft())
        finally:
            self.is_submitting = False
        if order is None:
            self.submit_error = self._sync.error or CREATE_FAILED
            logger.warning("%s order failed: %s", self.order_type.value, self.submit_error)
            return None
        self.close()
        return order

    def close(self) -> None:
        if not self.is_open:
            return
        self.is_open = False
        if self._on_close is not None:
            self._on_close()
