# src/br_order/application/store.py
"""OrderStore: the single source of truth for order history.

An explicitly constructed handle that owns its engine, its repositories and its
ID counters. The FastAPI app receives one at construction time; tests build a
fresh one per fixture. Nothing here is a module-level singleton.
"""
import asyncio
import logging
from datetime import datetime
from types import TracebackType

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from config.settings import settings
from src.br_common.database import Base, make_engine
from src.br_common.datetime_utils import utc_now
from src.br_common.enums import KycStatus, OrderStatus
from src.br_common.errors import MalformedRequestError, OrderNotFoundError
from src.br_common.id_generator import SequentialIdGenerator
from src.br_order.domain.models import Account, Order, OrderDraft
from src.br_order.domain.repository import (
    AccountRepositoryProtocol,
    OrderRepositoryProtocol,
)
from src.br_order.domain.validation import validate_draft
from src.br_order.infrastructure import db_models  # noqa: F401  -- registers tables on Base
from src.br_order.infrastructure.persistence import AccountRepository, OrderRepository

logger = logging.getLogger(__name__)


class OrderStore:
    def __init__(
        self,
        database_url: str | None = None,
        *,
        engine: AsyncEngine | None = None,
        order_repo: OrderRepositoryProtocol | None = None,
        account_repo: AccountRepositoryProtocol | None = None,
        default_limit: int | None = None,
    ) -> None:
        self._engine = engine or make_engine(database_url)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._orders: OrderRepositoryProtocol = order_repo or OrderRepository()
        self._accounts: AccountRepositoryProtocol = account_repo or AccountRepository()
        self._order_ids = SequentialIdGenerator()
        self._account_ids = SequentialIdGenerator()
        self._default_limit = default_limit or settings.DEFAULT_ORDER_LIMIT
        self._opened = False
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def open(self) -> None:
        """Create the schema. Safe to call more than once."""
        if self._opened:
            return
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._opened = True

    async def close(self) -> None:
        await self._engine.dispose()
        self._opened = False

    async def __aenter__(self) -> "OrderStore":
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def append(self, draft: OrderDraft) -> Order:
        """Validate, upsert the owning account and store a new pending order.

        Validation runs first, so a rejected draft leaves accounts untouched.
        Store access is serialized: every session shares one connection, and the
        account upsert is a read followed by a write.
        """
        validate_draft(draft)
        async with self._lock, self._session_factory() as db:
            now = utc_now()
            async with db.begin():
                account = await self._get_or_create_account(draft.wallet_address, now, db)
                order = Order(
                    id=self._order_ids.next_id(),
                    user_id=account.id,
                    order_type=draft.order_type,
                    crypto_currency=draft.crypto_currency,
                    fiat_currency=draft.fiat_currency or "USD",
                    crypto_amount=draft.crypto_amount,
                    fiat_amount=draft.fiat_amount,
                    exchange_rate=draft.exchange_rate,
                    payment_method=draft.payment_method,
                    wallet_address=draft.wallet_address,
                    rates_status=draft.rates_status or "live",
                    status=OrderStatus.PENDING.value,
                    created_at=now,
                )
                await self._orders.save(order, db)
                await self._accounts.add_volume(account, draft.fiat_amount, now, db)
        logger.info(
            "Order %d appended: wallet=%s %s %s %s/%s",
            order.id,
            order.wallet_address,
            order.order_type,
            order.crypto_amount,
            order.crypto_currency,
            order.fiat_currency,
        )
        return order

    async def query(
        self,
        wallet_address: str | None = None,
        limit: int | None = None,
        before_id: int | None = None,
    ) -> list[Order]:
        """Orders newest-first, filtered by wallet when given, truncated to limit.

        ``before_id`` pages backwards: only orders with a smaller id are returned.
        Ids and creation times are assigned together under the store lock, so
        paging does not skip or repeat orders appended in between.
        """
        limit = self._default_limit if limit is None else limit
        if limit < 1:
            raise MalformedRequestError("limit must be a positive integer")
        if before_id is not None and before_id < 1:
            raise MalformedRequestError("before must be a positive integer")
        async with self._lock, self._session_factory() as db:
            return await self._orders.list_recent(wallet_address or None, limit, db, before_id)

    async def get_order(self, order_id: int) -> Order:
        async with self._lock, self._session_factory() as db:
            order = await self._orders.get_by_id(order_id, db)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def get_account(self, wallet_address: str) -> Account | None:
        async with self._lock, self._session_factory() as db:
            return await self._accounts.get_by_wallet(wallet_address, db)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _get_or_create_account(
        self, wallet_address: str, now: datetime, db: AsyncSession
    ) -> Account:
        account = await self._accounts.get_by_wallet(wallet_address, db)
        if account is not None:
            return account
        account = Account(
            id=self._account_ids.next_id(),
            wallet_address=wallet_address,
            kyc_status=KycStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        await self._accounts.create(account, db)
        logger.info("Account %d created for wallet %s", account.id, wallet_address)
        return account
