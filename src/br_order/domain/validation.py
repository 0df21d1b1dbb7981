"""Draft validation: runs before the store touches any account or order row."""
from src.br_common.enums import OrderType
from src.br_common.errors import (
    InvalidAmountError,
    InvalidExchangeRateError,
    InvalidOrderTypeError,
    MalformedRequestError,
    WalletAddressRequiredError,
)
from src.br_order.domain.models import OrderDraft

_ORDER_TYPES = {t.value for t in OrderType}


def validate_draft(draft: OrderDraft) -> None:
    """Raise the first AppError the draft violates; return None if it is storable."""
    if not draft.wallet_address or not draft.wallet_address.strip():
        raise WalletAddressRequiredError()
    if draft.order_type not in _ORDER_TYPES:
        raise InvalidOrderTypeError(draft.order_type)
    if not draft.crypto_currency or not draft.crypto_currency.strip():
        raise MalformedRequestError("Crypto currency is required")
    if draft.crypto_amount < 0:
        raise InvalidAmountError("cryptoAmount")
    if draft.fiat_amount < 0:
        raise InvalidAmountError("fiatAmount")
    if draft.exchange_rate <= 0:
        raise InvalidExchangeRateError()
