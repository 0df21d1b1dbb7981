"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from src.br_order.application.store import OrderStore
from src.main import create_app


@pytest.fixture
async def store() -> OrderStore:
    """A fresh in-memory order store per test."""
    async with OrderStore() as order_store:
        yield order_store


@pytest.fixture
async def client(store: OrderStore) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints against ``store``."""
    transport = ASGITransport(app=create_app(store))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
