"""Advisory local state: the dashboard's equivalent of browser storage.

Values are JSON-encoded under fixed string keys and live for the lifetime of
the process. Nothing here is authoritative: the balance snapshot is overwritten
by every order load, and a corrupt entry simply reads as missing.
"""
import json
import logging
from typing import Any

from src.br_balance.domain.models import Balance

logger = logging.getLogger(__name__)

BALANCE_KEY_PREFIX = "bridgify-balance"
DARK_MODE_KEY = "bridgify-dark-mode"


def balance_key(wallet_address: str) -> str:
    return f"{BALANCE_KEY_PREFIX}:{wallet_address}"


class LocalStateStore:
    """Key/value store holding JSON strings."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def read_json(self, key: str) -> Any:
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt local state entry %s", key)
            return None

    def write_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value))


class BalanceCache:
    """Last computed balance per wallet, for instant paint before orders load."""

    def __init__(self, state: LocalStateStore) -> None:
        self._state = state

    def load(self, wallet_address: str) -> Balance | None:
        data = self._state.read_json(balance_key(wallet_address))
        return Balance.from_snapshot(data) if data is not None else None

    def save(self, wallet_address: str, balance: Balance) -> None:
        self._state.write_json(balance_key(wallet_address), balance.to_snapshot())


class Preferences:
    """Dark mode defaults to on when nothing has been stored."""

    def __init__(self, state: LocalStateStore) -> None:
        self._state = state

    @property
    def dark_mode(self) -> bool:
        value = self._state.read_json(DARK_MODE_KEY)
        return value if isinstance(value, bool) else True

    def set_dark_mode(self, enabled: bool) -> None:
        self._state.write_json(DARK_MODE_KEY, bool(enabled))

    def toggle_dark_mode(self) -> bool:
        enabled = not self.dark_mode
        self.set_dark_mode(enabled)
        return enabled
