# src/br_order/infrastructure/persistence.py
"""Order and account repositories: raw SQL persistence implementation.

Transaction ownership: the CALLER (OrderStore) opens the transaction with
`async with db.begin()`; repositories only execute statements.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.br_common.datetime_utils import from_storage, to_storage
from src.br_order.domain.models import Account, Order

# ---------------------------------------------------------------------------
# SQL statements: accounts
# ---------------------------------------------------------------------------

_ACCOUNT_COLUMNS = "id, wallet_address, kyc_status, total_volume, created_at, updated_at"

_GET_ACCOUNT_BY_WALLET_SQL = text(f"""
    SELECT {_ACCOUNT_COLUMNS}
    FROM accounts WHERE wallet_address = :wallet_address
""")

_INSERT_ACCOUNT_SQL = text("""
    INSERT INTO accounts (id, wallet_address, kyc_status, total_volume, created_at, updated_at)
    VALUES (:id, :wallet_address, :kyc_status, :total_volume, :created_at, :updated_at)
""")

_UPDATE_ACCOUNT_VOLUME_SQL = text("""
    UPDATE accounts
    SET total_volume = :total_volume, updated_at = :updated_at
    WHERE id = :id
""")

# ---------------------------------------------------------------------------
# SQL statements: orders
# ---------------------------------------------------------------------------

_INSERT_ORDER_SQL = text("""
    INSERT INTO orders (id, user_id, order_type, crypto_currency, fiat_currency,
        crypto_amount, fiat_amount, exchange_rate, status, payment_method,
        transaction_hash, wallet_address, rates_status, created_at, completed_at)
    VALUES (:id, :user_id, :order_type, :crypto_currency, :fiat_currency,
        :crypto_amount, :fiat_amount, :exchange_rate, :status, :payment_method,
        :transaction_hash, :wallet_address, :rates_status, :created_at, :completed_at)
""")

_ORDER_COLUMNS = """
    id, user_id, order_type, crypto_currency, fiat_currency,
    crypto_amount, fiat_amount, exchange_rate, status, payment_method,
    transaction_hash, wallet_address, rates_status, created_at, completed_at
"""

_GET_ORDER_BY_ID_SQL = text(f"""
    SELECT {_ORDER_COLUMNS}
    FROM orders WHERE id = :id
""")

# Ties on created_at fall back to id so equal timestamps keep insertion order.
_LIST_ORDERS_SQL = text(f"""
    SELECT {_ORDER_COLUMNS}
    FROM orders
    WHERE (CAST(:wallet_address AS TEXT) IS NULL OR wallet_address = :wallet_address)
      AND (CAST(:before_id AS INTEGER) IS NULL OR id < :before_id)
    ORDER BY created_at DESC, id DESC
    LIMIT :limit
""")


# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_account(row: Any) -> Account:
    """Convert a DB result row to an Account domain object."""
    return Account(
        id=row.id,
        wallet_address=row.wallet_address,
        kyc_status=row.kyc_status,
        total_volume=Decimal(row.total_volume),
        created_at=from_storage(row.created_at),
        updated_at=from_storage(row.updated_at),
    )


def _row_to_order(row: Any) -> Order:
    """Convert a DB result row to an Order domain object."""
    return Order(
        id=row.id,
        user_id=row.user_id,
        order_type=row.order_type,
        crypto_currency=row.crypto_currency,
        fiat_currency=row.fiat_currency,
        crypto_amount=Decimal(row.crypto_amount),
        fiat_amount=Decimal(row.fiat_amount),
        exchange_rate=Decimal(row.exchange_rate),
        status=row.status,
        payment_method=row.payment_method,
        transaction_hash=row.transaction_hash,
        wallet_address=row.wallet_address,
        rates_status=row.rates_status,
        created_at=from_storage(row.created_at),
        completed_at=from_storage(row.completed_at),
    )


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class AccountRepository:
    """Concrete implementation of AccountRepositoryProtocol using raw SQL."""

    async def get_by_wallet(self, wallet_address: str, db: AsyncSession) -> Account | None:
        result = await db.execute(
            _GET_ACCOUNT_BY_WALLET_SQL, {"wallet_address": wallet_address}
        )
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def create(self, account: Account, db: AsyncSession) -> None:
        await db.execute(
            _INSERT_ACCOUNT_SQL,
            {
                "id": account.id,
                "wallet_address": account.wallet_address,
                "kyc_status": account.kyc_status,
                "total_volume": str(account.total_volume),
                "created_at": to_storage(account.created_at),
                "updated_at": to_storage(account.updated_at),
            },
        )

    async def add_volume(
        self, account: Account, amount: Decimal, now: datetime, db: AsyncSession
    ) -> Account:
        account.total_volume += amount
        account.updated_at = now
        await db.execute(
            _UPDATE_ACCOUNT_VOLUME_SQL,
            {
                "id": account.id,
                "total_volume": str(account.total_volume),
                "updated_at": to_storage(now),
            },
        )
        return account


class OrderRepository:
    """Concrete implementation of OrderRepositoryProtocol using raw SQL."""

    async def save(self, order: Order, db: AsyncSession) -> None:
        await db.execute(
            _INSERT_ORDER_SQL,
            {
                "id": order.id,
                "user_id": order.user_id,
                "order_type": order.order_type,
                "crypto_currency": order.crypto_currency,
                "fiat_currency": order.fiat_currency,
                "crypto_amount": str(order.crypto_amount),
                "fiat_amount": str(order.fiat_amount),
                "exchange_rate": str(order.exchange_rate),
                "status": order.status,
                "payment_method": order.payment_method,
                "transaction_hash": order.transaction_hash,
                "wallet_address": order.wallet_address,
                "rates_status": order.rates_status,
                "created_at": to_storage(order.created_at),
                "completed_at": (
                    to_storage(order.completed_at) if order.completed_at else None
                ),
            },
        )

    async def get_by_id(self, order_id: int, db: AsyncSession) -> Order | None:
        result = await db.execute(_GET_ORDER_BY_ID_SQL, {"id": order_id})
        row = result.fetchone()
        return _row_to_order(row) if row else None

    async def list_recent(
        self,
        wallet_address: str | None,
        limit: int,
        db: AsyncSession,
        before_id: int | None = None,
    ) -> list[Order]:
        result = await db.execute(
            _LIST_ORDERS_SQL,
            {"wallet_address": wallet_address, "limit": limit, "before_id": before_id},
        )
        return [_row_to_order(row) for row in result.fetchall()]
