"""Integration-test fixtures.

ASGITransport does not send lifespan events, so the ``store`` fixture opens the
store itself before the app sees any request.
"""

import pytest
from httpx import AsyncClient

from src.br_client.api_client import OrdersApiClient
from src.br_client.order_sync import OrderSync


@pytest.fixture
def api(client: AsyncClient) -> OrdersApiClient:
    """The dashboard's REST client, wired to the in-process app."""
    return OrdersApiClient(client=client)


@pytest.fixture
async def sync(api: OrdersApiClient) -> OrderSync:
    order_sync = OrderSync(api, poll_seconds=3600)
    yield order_sync
    await order_sync.stop()
