"""Unit tests for the SalesPadClient facade."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from laakhay.salespad import (
    ConfigurationError,
    Customer,
    CustomerResource,
    InventoryResource,
    Item,
    PriceLevel,
    SalesPadClient,
    SalesPadConfig,
    SalesPadSession,
)
from laakhay.salespad.config import CUSTOMER_PATH, INVENTORY_SEARCH_PATH
from laakhay.salespad.models import EMPTY_FIELD_MAP

CONFIG = SalesPadConfig(host="https://sp.example.com")


@pytest.fixture
def client(fake_session):
    session = fake_session(
        {
            CUSTOMER_PATH: [{"Customer_Num": "000016", "Customer_Name": "Acme"}],
            INVENTORY_SEARCH_PATH: [
                {"Item_Number": "W1", "Location": "MAIN", "Qty": 1},
                {"Item_Number": "W1", "Location": "WEST", "Qty": 2},
            ],
        }
    )
    return SalesPadClient(CONFIG, session=session)


class TestClientConstruction:
    """Default wiring."""

    def test_builds_session(self):
        client = SalesPadClient(CONFIG)
        assert isinstance(client.session, SalesPadSession)
        assert client.session.page_size == CONFIG.page_size

    def test_resources_cached(self, client):
        assert isinstance(client.customers, CustomerResource)
        assert client.customers is client.customers
        assert isinstance(client.inventory, InventoryResource)
        assert client.inventory.registry is client.cursors


class TestFieldMaps:
    """Per-client field mapping."""

    def test_default_map_empty(self, client):
        assert client.field_map(Customer) is EMPTY_FIELD_MAP

    @pytest.mark.asyncio
    async def test_map_applies_to_new_results(self, client):
        before = client.customers
        client.map(Customer, {"Customer_Name": "name"})

        assert client.customers is not before
        customer = await client.customers.get("000016")
        assert customer.name == "Acme"

    @pytest.mark.asyncio
    async def test_item_map_applies_to_inventory(self, client):
        client.map(Item, {"Item_Number": "sku"})
        item = await (await client.inventory.search()).first()
        assert item.sku == "W1"
        assert item.id == "W1"
        assert len(item.Locations) == 2

    def test_map_unsupported_type(self, client):
        with pytest.raises(ConfigurationError):
            client.map(PriceLevel, {"name": "title"})  # type: ignore[arg-type]

    def test_map_invalid_target(self, client):
        with pytest.raises(ConfigurationError):
            client.map(Customer, {"Customer_Name": 3})

    def test_clients_are_independent(self, fake_session):
        a = SalesPadClient(CONFIG, session=fake_session())
        b = SalesPadClient(CONFIG, session=fake_session())
        a.map(Customer, {"Customer_Name": "name"})
        assert b.field_map(Customer) is EMPTY_FIELD_MAP
        assert a.cursors is not b.cursors


class TestClientLifecycle:
    """Delegation to the session."""

    @pytest.mark.asyncio
    async def test_login_delegates(self, client):
        client.session.login = AsyncMock(return_value=True)
        assert await client.login("user", "secret") is True
        client.session.login.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_context_manager_closes_session(self, client):
        client.session.close = AsyncMock()
        async with client:
            pass
        client.session.close.assert_awaited_once()
