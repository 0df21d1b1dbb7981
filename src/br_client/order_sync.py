"""OrderSync: client-side cache of one wallet's orders.

The order store is the authority. ``load()`` always replaces the local list
with the full server result; ``submit()`` is a two-phase update: phase one
prepends the created order locally, phase two reloads from the server and
overwrites whatever phase one produced. Overlapping loads are not ordered:
whichever resolves last wins.
"""
import asyncio
import contextlib
import logging
from collections.abc import Callable
from typing import Protocol

from config.settings import settings
from src.br_client.api_client import OrdersApiError
from src.br_order.domain.models import Order, OrderDraft

logger = logging.getLogger(__name__)

OrdersListener = Callable[[list[Order]], None]


class OrdersApi(Protocol):
    async def list_orders(
        self,
        wallet_address: str,
        limit: int | None = None,
        before: int | None = None,
    ) -> list[Order]: ...

    async def create_order(self, draft: OrderDraft) -> Order: ...


class OrderSync:
    def __init__(
        self,
        api: OrdersApi,
        *,
        poll_seconds: float | None = None,
        limit: int | None = None,
    ) -> None:
        self._api = api
        self._poll_seconds = settings.ORDER_POLL_SECONDS if poll_seconds is None else poll_seconds
        self._limit = limit or settings.MAX_ORDER_LIMIT
        self._wallet: str | None = None
        self._orders: list[Order] = []
        self._loaded = False
        self._listeners: list[OrdersListener] = []
        self._poll_task: asyncio.Task[None] | None = None
        self.error: str | None = None
        self.is_loading = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def wallet_address(self) -> str | None:
        return self._wallet

    @property
    def orders(self) -> list[Order]:
        return list(self._orders)

    @property
    def loaded(self) -> bool:
        """True once a load for the active wallet has succeeded."""
        return self._loaded

    @property
    def is_polling(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    def subscribe(self, listener: OrdersListener) -> Callable[[], None]:
        """Call ``listener`` on every cache replacement. Returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, orders: list[Order]) -> None:
        self._orders = orders
        for listener in list(self._listeners):
            listener(self.orders)

    def _record_error(self, exc: OrdersApiError) -> None:
        self.error = exc.message
        logger.warning("Order sync error (wallet=%s): %s", self._wallet, exc.message)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def load(self, wallet_address: str | None = None) -> list[Order] | None:
        """Fetch the wallet's orders and replace the cache.

        No-op (returns None) without a wallet. A failure keeps the cached orders
        and records ``error``. A response for a wallet that is no longer active
        is dropped.
        """
        wallet = wallet_address or self._wallet
        if not wallet:
            return None
        self.is_loading = True
        self.error = None
        logger.debug("Loading orders for wallet %s", wallet)
        try:
            orders = await self._fetch_history(wallet)
        except OrdersApiError as exc:
            self._record_error(exc)
            return None
        finally:
            self.is_loading = False
        if self._wallet is not None and wallet != self._wallet:
            logger.debug("Dropping orders for inactive wallet %s", wallet)
            return None
        self._loaded = True
        self._replace(orders)
        return self.orders

    async def _fetch_history(self, wallet_address: str) -> list[Order]:
        """Every order of the wallet, newest first, fetched page by page.

        The balance is a fold over the whole history, so a single truncated
        page is not enough.
        """
        orders = list(await self._api.list_orders(wallet_address, self._limit))
        page = orders
        while len(page) >= self._limit:
            cursor = page[-1].id
            page = await self._api.list_orders(wallet_address, self._limit, before=cursor)
            # Stop if the server ignores the cursor.
            if not page or page[0].id >= cursor:
                break
            orders.extend(page)
        return orders

    async def submit(self, draft: OrderDraft) -> Order | None:
        """Create an order, then reconcile the cache against the server."""
        self.error = None
        try:
            order = await self._api.create_order(draft)
        except OrdersApiError as exc:
            self._record_error(exc)
            return None
        # Phase one: optimistic local update.
        self._replace([order, *self._orders])
        # Phase two: the authoritative list overwrites phase one.
        await self.load(draft.wallet_address)
        return order

    # ------------------------------------------------------------------
    # Background refresh
    # ------------------------------------------------------------------

    def start(self, wallet_address: str) -> None:
        """Make ``wallet_address`` active and start polling it."""
        if wallet_address != self._wallet:
            self._cancel_poll()
            self._wallet = wallet_address
            self._orders = []
            self._loaded = False
            self.error = None
        if not self.is_polling:
            self._poll_task = asyncio.ensure_future(self._poll(wallet_address))
            logger.info("Polling orders for %s every %ss", wallet_address, self._poll_seconds)

    async def stop(self) -> None:
        """Stop polling and forget the active wallet."""
        task = self._poll_task
        self._cancel_poll()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        if self._wallet is not None:
            logger.info("Stopped polling orders for %s", self._wallet)
        self._wallet = None
        self._orders = []
        self._loaded = False

    def _cancel_poll(self) -> None:
        if self._poll_task is not None:
            self._poll_task.cancel()
            self._poll_task = None

    async def _poll(self, wallet_address: str) -> None:
        while True:
            await asyncio.sleep(self._poll_seconds)
            await self.load(wallet_address)
