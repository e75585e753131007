"""Shared fixtures for integration tests."""

import os

import pytest
import pytest_asyncio

from laakhay.salespad import SalesPadClient, SalesPadConfig

# Skip all integration tests unless RUN_SALESPAD_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_SALESPAD_NETWORK_TESTS") != "1",
    reason="Requires a SalesPad host. Set RUN_SALESPAD_NETWORK_TESTS=1 to run",
)


@pytest_asyncio.fixture
async def salespad():
    """Logged-in client for SALESPAD_HOST using SALESPAD_USERNAME/SALESPAD_PASSWORD."""
    host = os.environ.get("SALESPAD_HOST")
    if not host:
        pytest.skip("SALESPAD_HOST is not set")
    client = SalesPadClient(SalesPadConfig(host=host, page_size=25))
    await client.login(
        os.environ.get("SALESPAD_USERNAME", ""), os.environ.get("SALESPAD_PASSWORD", "")
    )
    try:
        yield client
    finally:
        await client.close()
