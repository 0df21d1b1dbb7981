"""Tests for br_order.domain.validation."""
from decimal import Decimal
from typing import Any

import pytest

from src.br_common.errors import (
    InvalidAmountError,
    InvalidExchangeRateError,
    InvalidOrderTypeError,
    MalformedRequestError,
    WalletAddressRequiredError,
)
from src.br_order.domain.models import OrderDraft
from src.br_order.domain.validation import validate_draft


def _make_draft(**kwargs: Any) -> OrderDraft:
    return OrderDraft(
        order_type=kwargs.get("order_type", "buy"),
        crypto_currency=kwargs.get("crypto_currency", "ETH"),
        crypto_amount=kwargs.get("crypto_amount", Decimal("1")),
        fiat_amount=kwargs.get("fiat_amount", Decimal("3640.25")),
        exchange_rate=kwargs.get("exchange_rate", Decimal("3640.25")),
        wallet_address=kwargs.get("wallet_address", "0xABC"),
    )


class TestValidateDraft:
    def test_valid_buy_and_sell(self) -> None:
        validate_draft(_make_draft())
        validate_draft(_make_draft(order_type="sell"))

    def test_zero_amounts_allowed(self) -> None:
        validate_draft(_make_draft(crypto_amount=Decimal("0"), fiat_amount=Decimal("0")))

    @pytest.mark.parametrize("wallet", ["", "   "])
    def test_missing_wallet(self, wallet: str) -> None:
        with pytest.raises(WalletAddressRequiredError):
            validate_draft(_make_draft(wallet_address=wallet))

    @pytest.mark.parametrize("order_type", ["", "BUY", "hold", "swap"])
    def test_invalid_order_type(self, order_type: str) -> None:
        with pytest.raises(InvalidOrderTypeError):
            validate_draft(_make_draft(order_type=order_type))

    def test_wallet_checked_before_order_type(self) -> None:
        with pytest.raises(WalletAddressRequiredError):
            validate_draft(_make_draft(wallet_address="", order_type="hold"))

    def test_missing_crypto_currency(self) -> None:
        with pytest.raises(MalformedRequestError):
            validate_draft(_make_draft(crypto_currency=""))

    def test_negative_crypto_amount(self) -> None:
        with pytest.raises(InvalidAmountError, match="cryptoAmount"):
            validate_draft(_make_draft(crypto_amount=Decimal("-0.1")))

    def test_negative_fiat_amount(self) -> None:
        with pytest.raises(InvalidAmountError, match="fiatAmount"):
            validate_draft(_make_draft(fiat_amount=Decimal("-1")))

    @pytest.mark.parametrize("rate", [Decimal("0"), Decimal("-3")])
    def test_non_positive_rate(self, rate: Decimal) -> None:
        with pytest.raises(InvalidExchangeRateError):
            validate_draft(_make_draft(exchange_rate=rate))
