from src.br_common.amounts import parse_amount
from src.br_common.enums import OrderType
from src.br_forms.base import ConversionForm

PAYMENT_METHODS = ("card", "bank_transfer", "apple_pay", "google_pay")


class BuyForm(ConversionForm):
    """Fiat in, crypto out. No balance check: the fiat payment is assumed to clear."""

    order_type = OrderType.BUY

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.payment_method = ""

    def _recompute(self) -> None:
        # The fiat side is what the buyer typed, so it drives the pair switch.
        if self.fiat_amount:
            self.set_fiat_amount(self.fiat_amount)

    def _payment_method(self) -> str | None:
        return self.payment_method or None

    @property
    def can_submit(self) -> bool:
        fiat = parse_amount(self.fiat_amount)
        return (
            fiat is not None
            and fiat > 0
            and bool(self.payment_method)
            and bool(self.wallet_address)
            and self.unit_price > 0
            and not self.is_submitting
        )
