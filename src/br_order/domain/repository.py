# src/br_order/domain/repository.py
"""Repository Protocols: interface contract for the persistence layer."""
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.br_order.domain.models import Account, Order


class AccountRepositoryProtocol(Protocol):
    async def get_by_wallet(self, wallet_address: str, db: AsyncSession) -> Account | None: ...

    async def create(self, account: Account, db: AsyncSession) -> None: ...

    async def add_volume(
        self, account: Account, amount: Decimal, now: datetime, db: AsyncSession
    ) -> Account: ...


class OrderRepositoryProtocol(Protocol):
    async def save(self, order: Order, db: AsyncSession) -> None: ...

    async def get_by_id(self, order_id: int, db: AsyncSession) -> Order | None: ...

    async def list_recent(
        self,
        wallet_address: str | None,
        limit: int,
        db: AsyncSession,
        before_id: int | None = None,
    ) -> list[Order]: ...
