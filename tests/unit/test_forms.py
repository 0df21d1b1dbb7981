# tests/unit/test_forms.py
"""Unit tests for the Buy and Sell transaction forms."""
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.br_balance.domain.models import Balance
from src.br_client.api_client import CREATE_FAILED
from src.br_common.enums import AssetSymbol, FiatCurrency
from src.br_forms.base import ConversionForm
from src.br_forms.buy import BuyForm
from src.br_forms.sell import INSUFFICIENT_BALANCE, INVALID_AMOUNT, SellForm
from src.br_order.domain.models import Order
from src.br_rates.application.oracle import RateOracle

WALLET = "0xABC"


def _make_sync(submit_result: Any = None, error: str | None = None) -> MagicMock:
    sync = MagicMock()
    sync.submit = AsyncMock(return_value=submit_result)
    sync.error = error
    return sync


def _make_order(**kwargs: Any) -> Order:
    return Order(
        id=kwargs.get("id", 1),
        user_id=1,
        order_type=kwargs.get("order_type", "buy"),
        crypto_currency="ETH",
        fiat_currency="USD",
        crypto_amount=Decimal("0.027471"),
        fiat_amount=Decimal("100.00"),
        exchange_rate=Decimal("3640.25"),
        wallet_address=WALLET,
        rates_status="hardcoded",
        created_at=datetime(2026, 10, 19, 9, 30, tzinfo=UTC),
    )


def _make_balance(eth: str) -> Balance:
    return Balance(
        amounts={AssetSymbol.ETH: Decimal(eth)},
        total_usd=Decimal("0"),
        order_count=1,
    )


def _make_buy(sync: MagicMock | None = None, **kwargs: Any) -> BuyForm:
    return BuyForm(RateOracle(), sync or _make_sync(), WALLET, **kwargs)


def _make_sell(balance: Balance | None, sync: MagicMock | None = None, **kwargs: Any) -> SellForm:
    return SellForm(
        RateOracle(),
        sync or _make_sync(),
        WALLET,
        balance_source=lambda: balance,
        **kwargs,
    )


class TestBuyForm:
    def test_fiat_drives_crypto(self) -> None:
        form = _make_buy()
        form.set_fiat_amount("100")
        assert form.crypto_amount == "0.027471"

    def test_crypto_drives_fiat(self) -> None:
        form = _make_buy()
        form.set_crypto_amount("1")
        assert form.fiat_amount == "3640.25"

    def test_invalid_input_clears_counterpart(self) -> None:
        form = _make_buy()
        form.set_fiat_amount("100")
        form.set_fiat_amount("abc")
        assert form.crypto_amount == ""

    def test_can_submit_requires_payment_method(self) -> None:
        form = _make_buy()
        form.set_fiat_amount("100")
        assert form.can_submit is False
        form.payment_method = "card"
        assert form.can_submit is True

    def test_can_submit_requires_positive_fiat(self) -> None:
        form = _make_buy()
        form.payment_method = "card"
        form.set_fiat_amount("0")
        assert form.can_submit is False

    def test_can_submit_requires_wallet(self) -> None:
        form = BuyForm(RateOracle(), _make_sync(), None)
        form.payment_method = "card"
        form.set_fiat_amount("100")
        assert form.can_submit is False

    def test_pair_switch_recomputes_from_fiat(self) -> None:
        form = _make_buy()
        form.set_fiat_amount("100")
        form.select_crypto("btc")
        assert form.crypto is AssetSymbol.BTC
        assert form.fiat_amount == "100"
        assert form.crypto_amount == "0.001538"

    def test_fiat_switch_uses_converted_price(self) -> None:
        form = _make_buy()
        form.select_fiat("EUR")
        assert form.fiat is FiatCurrency.EUR
        # 3640.25 / 1.10
        assert form.exchange_rate_label == "1 ETH = 3,309.3182 EUR"

    def test_usd_label(self) -> None:
        assert _make_buy().exchange_rate_label == "1 ETH = 3,640.25 USD"

    def test_unknown_crypto_rejected(self) -> None:
        form = _make_buy()
        with pytest.raises(ValueError):
            form.select_crypto("DOGE")

    def test_build_draft(self) -> None:
        form = _make_buy()
        form.payment_method = "card"
        form.set_fiat_amount("100")
        draft = form.build_draft()
        assert draft.order_type == "buy"
        assert draft.crypto_amount == Decimal("0.027471")
        assert draft.fiat_amount == Decimal("100.00")
        assert draft.exchange_rate == Decimal("3640.25")
        assert draft.payment_method == "card"
        assert draft.wallet_address == WALLET
        assert draft.rates_status == "hardcoded"

    async def test_submit_success_closes_form(self) -> None:
        order = _make_order()
        sync = _make_sync(submit_result=order)
        on_close = MagicMock()
        form = _make_buy(sync, on_close=on_close)
        form.payment_method = "card"
        form.set_fiat_amount("100")
        assert await form.submit() is order
        assert form.is_open is False
        assert form.is_submitting is False
        on_close.assert_called_once()

    async def test_submit_failure_keeps_form_open(self) -> None:
        sync = _make_sync(submit_result=None, error="Wallet address is required")
        form = _make_buy(sync)
        form.payment_method = "card"
        form.set_fiat_amount("100")
        assert await form.submit() is None
        assert form.is_open is True
        assert form.submit_error == "Wallet address is required"

    async def test_submit_failure_without_message(self) -> None:
        form = _make_buy(_make_sync())
        form.payment_method = "card"
        form.set_fiat_amount("100")
        await form.submit()
        assert form.submit_error == CREATE_FAILED

    async def test_submit_disabled_does_nothing(self) -> None:
        sync = _make_sync()
        form = _make_buy(sync)
        assert await form.submit() is None
        sync.submit.assert_not_awaited()


class TestSellForm:
    def test_insufficient_balance_blocks_submit(self) -> None:
        form = _make_sell(_make_balance("0.5"))
        form.withdrawal_method = "bank_transfer"
        form.set_crypto_amount("0.6")
        assert form.insufficient_balance is True
        assert form.validation_message == INSUFFICIENT_BALANCE
        assert form.can_submit is False

    def test_exact_balance_allowed(self) -> None:
        form = _make_sell(_make_balance("0.5"))
        form.withdrawal_method = "bank_transfer"
        form.set_crypto_amount("0.5")
        assert form.validation_message is None
        assert form.can_submit is True

    def test_requires_withdrawal_method(self) -> None:
        form = _make_sell(_make_balance("0.5"))
        form.set_crypto_amount("0.1")
        assert form.can_submit is False

    def test_zero_amount_invalid(self) -> None:
        form = _make_sell(_make_balance("0.5"))
        form.set_crypto_amount("0")
        assert form.validation_message == INVALID_AMOUNT
        assert form.can_submit is False

    def test_empty_amount_has_no_message(self) -> None:
        assert _make_sell(_make_balance("0.5")).validation_message is None

    def test_use_max(self) -> None:
        form = _make_sell(_make_balance("0.5"))
        form.use_max()
        assert form.crypto_amount == "0.5"
        assert form.fiat_amount == "1820.13"

    def test_no_balance_reads_zero(self) -> None:
        form = _make_sell(None)
        assert form.available == Decimal("0")
        assert form.available_display == "0"
        form.set_crypto_amount("0.1")
        assert form.insufficient_balance is True

    def test_balance_source_is_read_live(self) -> None:
        holder = {"balance": _make_balance("0.1")}
        form = SellForm(
            RateOracle(), _make_sync(), WALLET, balance_source=lambda: holder["balance"]
        )
        form.set_crypto_amount("0.3")
        assert form.insufficient_balance is True
        holder["balance"] = _make_balance("1")
        assert form.insufficient_balance is False

    def test_pair_switch_recomputes_from_crypto(self) -> None:
        form = _make_sell(_make_balance("1"))
        form.set_crypto_amount("1")
        form.select_fiat("GBP")
        assert form.crypto_amount == "1"
        # 3640.25 / 1.27 = 2866.3385...
        assert form.fiat_amount == "2866.34"

    async def test_submit_sends_sell_draft(self) -> None:
        order = _make_order(order_type="sell")
        sync = _make_sync(submit_result=order)
        form = _make_sell(_make_balance("1"), sync)
        form.withdrawal_method = "paypal"
        form.set_crypto_amount("0.25")
        assert await form.submit() is order
        draft = sync.submit.await_args.args[0]
        assert draft.order_type == "sell"
        assert draft.crypto_amount == Decimal("0.250000")
        assert draft.fiat_amount == Decimal("910.06")
        assert draft.payment_method == "paypal"


class TestConversionFormHooks:
    def test_subclass_missing_hook_cannot_be_created(self) -> None:
        class NoPaymentForm(ConversionForm):
            def _recompute(self) -> None:
                pass

            @property
            def can_submit(self) -> bool:
                return False

        with pytest.raises(TypeError):
            NoPaymentForm(RateOracle(), _make_sync(), WALLET)
