from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from config.settings import settings


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models across modules."""

    pass


def make_engine(database_url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """Create an engine owned by a single OrderStore.

    In-memory SQLite lives only as long as its connection, so those URLs get a
    StaticPool: one shared connection per engine, one fresh database per store.
    """
    url = database_url or settings.DATABASE_URL
    echo = settings.DEBUG if echo is None else echo
    if url.startswith("sqlite") and (url.endswith("://") or ":memory:" in url):
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(url, echo=echo)
