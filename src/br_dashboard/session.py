"""WalletSession: the dashboard's view of one connected wallet.

Data flow: OrderSync (orders) -> reconcile() -> Balance -> forms, with the
balance snapshot mirrored into the local cache after every recomputation.
"""
import logging
from enum import Enum

from src.br_balance.domain.models import Balance
from src.br_balance.engine import reconcile, revalue
from src.br_client.local_state import BalanceCache, LocalStateStore, Preferences
from src.br_client.order_sync import OrderSync
from src.br_common.amounts import fiat_to_display
from src.br_forms.buy import BuyForm
from src.br_forms.sell import SellForm
from src.br_order.domain.models import Order
from src.br_rates.application.oracle import RateOracle

logger = logging.getLogger(__name__)


class BalanceState(str, Enum):
    DISCONNECTED = "disconnected"
    LOADING = "loading"  # nothing to show yet
    CACHED = "cached"  # painted from the local cache, fresh orders pending
    EMPTY = "empty"  # orders loaded, the account has none
    READY = "ready"


class WalletSession:
    def __init__(
        self,
        oracle: RateOracle,
        sync: OrderSync,
        local_state: LocalStateStore | None = None,
    ) -> None:
        self.oracle = oracle
        self.sync = sync
        state = local_state or LocalStateStore()
        self._cache = BalanceCache(state)
        self.preferences = Preferences(state)
        self.wallet_address: str | None = None
        self.balance: Balance | None = None
        self._fresh = False
        self.buy_form: BuyForm | None = None
        self.sell_form: SellForm | None = None
        self._unsubscribe = sync.subscribe(self._on_orders)

    @property
    def is_connected(self) -> bool:
        return self.wallet_address is not None

    @property
    def balance_state(self) -> BalanceState:
        if not self.is_connected:
            return BalanceState.DISCONNECTED
        if self.balance is None:
            return BalanceState.LOADING
        if not self._fresh:
            return BalanceState.CACHED
        return BalanceState.READY if self.balance.has_orders else BalanceState.EMPTY

    @property
    def portfolio_display(self) -> str:
        """Total USD value as shown in the header; empty while nothing is loaded."""
        if self.balance is None:
            return ""
        return fiat_to_display(self.balance.total_usd)

    # ------------------------------------------------------------------
    # Wallet lifecycle
    # ------------------------------------------------------------------

    async def connect(self, wallet_address: str) -> None:
        if not wallet_address:
            raise ValueError("wallet_address is required")
        if self.wallet_address not in (None, wallet_address):
            await self.disconnect()
        self.wallet_address = wallet_address
        self.balance = self._cache.load(wallet_address)
        self._fresh = False
        logger.info("Wallet %s connected", wallet_address)
        self.sync.start(wallet_address)
        await self.sync.load(wallet_address)

    async def disconnect(self) -> None:
        wallet = self.wallet_address
        await self.sync.stop()
        self.wallet_address = None
        self.balance = None
        self._fresh = False
        self._close_forms()
        if wallet is not None:
            logger.info("Wallet %s disconnected", wallet)

    async def close(self) -> None:
        """Tear down: disconnect and stop listening to the sync."""
        await self.disconnect()
        self._unsubscribe()

    # ------------------------------------------------------------------
    # Recomputation
    # ------------------------------------------------------------------

    def _on_orders(self, orders: list[Order]) -> None:
        if self.wallet_address is None:
            return
        self.balance = reconcile(orders, self.oracle, self.wallet_address)
        self._fresh = True
        self._cache.save(self.wallet_address, self.balance)

    async def refresh_rates(self) -> bool:
        """Refresh the rate table and revalue the current balance."""
        ok = await self.oracle.refresh()
        if ok and self.balance is not None and self.wallet_address is not None:
            self.balance = revalue(self.balance, self.oracle)
            self._cache.save(self.wallet_address, self.balance)
        return ok

    # ------------------------------------------------------------------
    # Forms
    # ------------------------------------------------------------------

    def open_buy_form(self, **kwargs) -> BuyForm:
        self.buy_form = BuyForm(
            self.oracle,
            self.sync,
            self.wallet_address,
            on_close=self._buy_closed,
            **kwargs,
        )
        return self.buy_form

    async def open_sell_form(self, **kwargs) -> SellForm:
        """Reload orders first so the form validates against a fresh balance."""
        await self.sync.load()
        self.sell_form = SellForm(
            self.oracle,
            self.sync,
            self.wallet_address,
            balance_source=lambda: self.balance,
            on_close=self._sell_closed,
            **kwargs,
        )
        return self.sell_form

    def _buy_closed(self) -> None:
        self.buy_form = None

    def _sell_closed(self) -> None:
        self.sell_form = None

    def _close_forms(self) -> None:
        for form in (self.buy_form, self.sell_form):
            if form is not None:
                form.close()
