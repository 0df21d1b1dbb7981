# tests/unit/test_local_state.py
"""Unit tests for the advisory local state: balance cache and preferences."""
import json
from decimal import Decimal

from src.br_balance.domain.models import Balance
from src.br_client.local_state import (
    DARK_MODE_KEY,
    BalanceCache,
    LocalStateStore,
    Preferences,
    balance_key,
)
from src.br_common.enums import AssetSymbol


def _make_balance() -> Balance:
    return Balance(
        amounts={AssetSymbol.ETH: Decimal("1.200000"), AssetSymbol.ARB: Decimal("10.000000")},
        total_usd=Decimal("4392.80"),
        order_count=3,
    )


class TestLocalStateStore:
    def test_missing_key_reads_none(self) -> None:
        state = LocalStateStore()
        assert state.get_item("nope") is None
        assert state.read_json("nope") is None

    def test_json_round_trip(self) -> None:
        state = LocalStateStore()
        state.write_json("k", {"a": [1, 2]})
        assert state.get_item("k") == json.dumps({"a": [1, 2]})
        assert state.read_json("k") == {"a": [1, 2]}

    def test_corrupt_entry_reads_none(self) -> None:
        state = LocalStateStore()
        state.set_item("k", "{not json")
        assert state.read_json("k") is None

    def test_remove_item(self) -> None:
        state = LocalStateStore()
        state.set_item("k", "1")
        state.remove_item("k")
        state.remove_item("k")
        assert state.get_item("k") is None


class TestBalanceCache:
    def test_key_is_per_wallet(self) -> None:
        assert balance_key("0xABC") == "bridgify-balance:0xABC"

    def test_save_then_load(self) -> None:
        state = LocalStateStore()
        cache = BalanceCache(state)
        cache.save("0xABC", _make_balance())
        loaded = cache.load("0xABC")
        assert loaded == _make_balance()
        assert cache.load("0xDEF") is None

    def test_snapshot_uses_lowercase_asset_keys(self) -> None:
        state = LocalStateStore()
        BalanceCache(state).save("0xABC", _make_balance())
        raw = state.read_json(balance_key("0xABC"))
        assert raw["eth"] == "1.200000"
        assert raw["btc"] == "0.000000"
        assert raw["usd"] == "4392.80"

    def test_corrupt_snapshot_reads_as_missing(self) -> None:
        state = LocalStateStore()
        state.write_json(balance_key("0xABC"), {"eth": "-1"})
        assert BalanceCache(state).load("0xABC") is None
        state.set_item(balance_key("0xABC"), "garbage")
        assert BalanceCache(state).load("0xABC") is None


class TestPreferences:
    def test_dark_mode_defaults_on(self) -> None:
        assert Preferences(LocalStateStore()).dark_mode is True

    def test_toggle_persists(self) -> None:
        state = LocalStateStore()
        prefs = Preferences(state)
        assert prefs.toggle_dark_mode() is False
        assert Preferences(state).dark_mode is False
        assert state.get_item(DARK_MODE_KEY) == "false"

    def test_non_bool_value_falls_back_to_default(self) -> None:
        state = LocalStateStore()
        state.write_json(DARK_MODE_KEY, "yes")
        assert Preferences(state).dark_mode is True
