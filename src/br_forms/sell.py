from collections.abc import Callable
from decimal import Decimal

from src.br_balance.domain.models import Balance
from src.br_common.amounts import ZERO, parse_amount
from src.br_common.enums import OrderType
from src.br_forms.base import ConversionForm

INSUFFICIENT_BALANCE = "Insufficient balance"
INVALID_AMOUNT = "Enter an amount greater than zero"

WITHDRAWAL_METHODS = ("bank_transfer", "paypal", "card")


class SellForm(ConversionForm):
    """Crypto in, fiat out. The amount is checked against the derived balance.

    ``balance_source`` is read on every check so the form always sees the
    engine's latest result, not the balance at the time it was opened.
    """

    order_type = OrderType.SELL

    def __init__(
        self,
        *args,
        balance_source: Callable[[], Balance | None],
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._balance_source = balance_source
        self.withdrawal_method = ""

    @property
    def available(self) -> Decimal:
        balance = self._balance_source()
        return balance.get(self.crypto) if balance is not None else ZERO

    @property
    def available_display(self) -> str:
        balance = self._balance_source()
        return balance.display(self.crypto) if balance is not None else "0"

    @property
    def requested(self) -> Decimal | None:
        return parse_amount(self.crypto_amount)

    @property
    def insufficient_balance(self) -> bool:
        requested = self.requested
        return requested is not None and requested > self.available

    @property
    def is_amount_valid(self) -> bool:
        requested = self.requested
        return requested is not None and ZERO < requested <= self.available

    @property
    def validation_message(self) -> str | None:
        if not self.crypto_amount:
            return None
        if self.insufficient_balance:
            return INSUFFICIENT_BALANCE
        if not self.is_amount_valid:
            return INVALID_AMOUNT
        return None

    def use_max(self) -> None:
        self.set_crypto_amount(self.available_display)

    def _recompute(self) -> None:
        # The crypto side is what the seller holds, so it drives the pair switch.
        if self.crypto_amount:
            self.set_crypto_amount(self.crypto_amount)

    def _payment_method(self) -> str | None:
        return self.withdrawal_method or None

    @property
    def can_submit(self) -> bool:
        return (
            self.is_amount_valid
            and bool(self.withdrawal_method)
            and bool(self.wallet_address)
            and self.unit_price > 0
            and not self.is_submitting
        )
