# src/br_order/infrastructure/db_models.py
"""SQLAlchemy ORM models. They only feed create_all in OrderStore.open(); queries use raw SQL.

Amounts are stored as decimal TEXT and timestamps as fixed-width ISO-8601 TEXT so
the in-memory SQLite backend neither rounds amounts through REAL nor needs a
datetime adapter.
"""
from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.br_common.database import Base


class AccountORM(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    wallet_address: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    kyc_status: Mapped[str] = mapped_column(String(10), nullable=False, default="pending")
    total_volume: Mapped[str] = mapped_column(String(40), nullable=False, default="0")
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)


class OrderORM(Base):
    __tablename__ = "orders"
    __table_args__ = (Index("ix_orders_wallet_created", "wallet_address", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), nullable=False)
    order_type: Mapped[str] = mapped_column(String(4), nullable=False)
    crypto_currency: Mapped[str] = mapped_column(String(16), nullable=False)
    fiat_currency: Mapped[str] = mapped_column(String(8), nullable=False, default="USD")
    crypto_amount: Mapped[str] = mapped_column(String(40), nullable=False)
    fiat_amount: Mapped[str] = mapped_column(String(40), nullable=False)
    exchange_rate: Mapped[str] = mapped_column(String(40), nullable=False)
    status: Mapped[str] = mapped_column(String(12), nullable=False, default="pending")
    payment_method: Mapped[str | None] = mapped_column(String(64), nullable=True)
    transaction_hash: Mapped[str | None] = mapped_column(String(128), nullable=True)
    wallet_address: Mapped[str] = mapped_column(String(128), nullable=False)
    rates_status: Mapped[str] = mapped_column(String(10), nullable=False, default="live")
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    completed_at: Mapped[str | None] = mapped_column(String(40), nullable=True)
