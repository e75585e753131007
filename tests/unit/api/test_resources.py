"""Unit tests for entity resources (search, lookup, create)."""

from __future__ import annotations

import pytest

from laakhay.salespad import pagination
from laakhay.salespad.api import (
    CustomerAddressResource,
    CustomerResource,
    ItemResource,
    SalesDocumentResource,
    SalesLineItemResource,
    extract_items,
    odata_literal,
)
from laakhay.salespad.config import (
    CUSTOMER_ADDRESS_PATH,
    CUSTOMER_PATH,
    ITEM_MASTER_PATH,
    SALES_DOCUMENT_PATH,
)
from laakhay.salespad.core.enums import DocumentType
from laakhay.salespad.core.exceptions import (
    AmbiguousResultError,
    ConfigurationError,
    NotFoundError,
    ProtocolError,
)
from laakhay.salespad.models import (
    Customer,
    CustomerAddress,
    Item,
    PriceLevel,
    SalesDocument,
    freeze_field_map,
)
from laakhay.salespad.pagination import EntityMaterializer, PagedSequence

CUSTOMERS = [
    {"Customer_Num": "000016  ", "Customer_Name": "Acme Corp   "},
    {"Customer_Num": "000017  ", "Customer_Name": "Globex      "},
    {"Customer_Num": "O'BRIEN ", "Customer_Name": "O'Brien Ltd "},
]


def acme(field_map=None) -> Customer:
    return EntityMaterializer(Customer, freeze_field_map(field_map)).materialize(CUSTOMERS[0])


class TestHelpers:
    """Query literal quoting and response envelope checks."""

    def test_odata_literal_escapes_quotes(self):
        assert odata_literal("O'Brien") == "'O''Brien'"
        assert odata_literal(16) == "'16'"

    def test_extract_items(self):
        assert extract_items({"Items": [1]}, "/api/X") == [1]

    @pytest.mark.parametrize("body", [{"Message": "x"}, {"Items": None}, "<html>", None])
    def test_extract_items_bad_shape(self, body):
        with pytest.raises(ProtocolError):
            extract_items(body, "/api/X")

    def test_extract_items_is_shared(self):
        assert extract_items is pagination.extract_items

    def test_extract_items_message_names_path(self):
        with pytest.raises(ProtocolError, match="/api/Customer"):
            extract_items({"Message": "x"}, "/api/Customer")


class TestSearch:
    """Collection queries return paged sequences."""

    @pytest.mark.asyncio
    async def test_search_returns_sequence(self, fake_session):
        session = fake_session({CUSTOMER_PATH: CUSTOMERS})
        resource = CustomerResource(session)

        results = await resource.search()

        assert isinstance(results, PagedSequence)
        assert [c.id for c in results.values()] == ["000016", "000017", "O'BRIEN"]
        assert session.calls[0]["params"] == {"$top": 3}

    @pytest.mark.asyncio
    async def test_search_passes_filter_through(self, fake_session):
        session = fake_session({CUSTOMER_PATH: CUSTOMERS})
        resource = CustomerResource(session)

        results = await resource.search("Customer_Name eq 'Globex'")

        assert session.calls[0]["params"]["$filter"] == "Customer_Name eq 'Globex'"
        assert len(results) == 1

    @pytest.mark.asyncio
    async def test_search_pages_lazily(self, fake_session):
        rows = [{"Item_Number": f"W{i}", "Item_Description": "Widget"} for i in range(5)]
        session = fake_session({ITEM_MASTER_PATH: rows}, page_size=2)
        results = await ItemResource(session).search()

        assert len(results) == 2
        items = await results.collect()
        assert [i.id for i in items] == ["W0", "W1", "W2", "W3", "W4"]

    @pytest.mark.asyncio
    async def test_search_with_field_map(self, fake_session):
        session = fake_session({CUSTOMER_PATH: CUSTOMERS})
        resource = CustomerResource(session, freeze_field_map({"Customer_Name": "name"}))

        first = await (await resource.search()).first()

        assert first.name == "Acme Corp"
        assert first.unmapped("Customer_Name") == "Acme Corp"

    @pytest.mark.asyncio
    async def test_search_bad_response(self, fake_session):
        session = fake_session()
        session.replies[CUSTOMER_PATH] = {"Message": "nope"}
        with pytest.raises(ProtocolError):
            await CustomerResource(session).search()


class TestGet:
    """Exact lookups by identifier."""

    @pytest.mark.asyncio
    async def test_get_one(self, fake_session):
        session = fake_session({CUSTOMER_PATH: CUSTOMERS})
        customer = await CustomerResource(session).get("000017")

        assert isinstance(customer, Customer)
        assert customer.Customer_Name == "Globex"
        assert session.calls[0]["params"]["$filter"] == "Customer_Num eq '000017'"

    @pytest.mark.asyncio
    async def test_get_quotes_identifier(self, fake_session):
        session = fake_session({CUSTOMER_PATH: CUSTOMERS})
        customer = await CustomerResource(session).get("O'BRIEN")

        assert customer.id == "O'BRIEN"
        assert session.calls[0]["params"]["$filter"] == "Customer_Num eq 'O''BRIEN'"

    @pytest.mark.asyncio
    async def test_get_none(self, fake_session):
        session = fake_session({CUSTOMER_PATH: CUSTOMERS})
        assert await CustomerResource(session).get("999999") is None

    @pytest.mark.asyncio
    async def test_get_ambiguous(self, fake_session):
        rows = [{"Customer_Num": "000016", "Customer_Name": "A"}] * 2
        session = fake_session({CUSTOMER_PATH: rows})

        with pytest.raises(AmbiguousResultError) as exc_info:
            await CustomerResource(session).get("000016")
        assert exc_info.value.count == 2

    @pytest.mark.asyncio
    async def test_get_or_raise(self, fake_session):
        session = fake_session({CUSTOMER_PATH: CUSTOMERS})
        resource = CustomerResource(session)

        assert (await resource.get_or_raise("000016")).id == "000016"
        with pytest.raises(NotFoundError):
            await resource.get_or_raise("999999")


class TestCustomers:
    """Customer creation and addresses."""

    @pytest.mark.asyncio
    async def test_create(self, fake_session):
        session = fake_session()
        session.post_reply = {"Customer_Num": "000099  ", "Customer_Name": "New Co  "}

        customer = await CustomerResource(session).create("New Co", Phone1="5550100")

        assert customer.id == "000099"
        assert customer.Customer_Name == "New Co"
        call = session.calls[-1]
        assert call["method"] == "POST"
        assert call["path"] == CUSTOMER_PATH
        assert call["json"] == {"Phone1": "5550100", "Customer_Name": "New Co"}

    @pytest.mark.asyncio
    async def test_create_requires_name(self, fake_session):
        with pytest.raises(ConfigurationError, match="name is required"):
            await CustomerResource(fake_session()).create("")

    @pytest.mark.asyncio
    async def test_create_reply_without_id(self, fake_session):
        session = fake_session()
        session.post_reply = {"Message": "created"}
        with pytest.raises(ProtocolError):
            await CustomerResource(session).create("New Co")

    @pytest.mark.asyncio
    async def test_addresses(self, fake_session):
        addresses = [
            {"Customer_Num": "000016", "Address_Code": "PRIMARY  ", "City": "Austin  "},
            {"Customer_Num": "000016", "Address_Code": "SHIP", "City": "Dallas"},
            {"Customer_Num": "000017", "Address_Code": "PRIMARY", "City": "Boston"},
        ]
        session = fake_session({CUSTOMER_ADDRESS_PATH: addresses})
        resource = CustomerResource(
            session, address_field_map=freeze_field_map({"City": "city"})
        )

        found = await resource.addresses(acme({"Customer_Num": "number"}))

        assert [a.id for a in found] == ["PRIMARY", "SHIP"]
        assert all(isinstance(a, CustomerAddress) for a in found)
        assert found[0].city == "Austin"
        assert session.calls[0]["params"]["$filter"] == "Customer_Num eq '000016'"


class TestCustomerAddresses:
    """Address creation goes through a Customer entity."""

    @pytest.mark.asyncio
    async def test_create(self, fake_session):
        session = fake_session()
        session.post_reply = {"Customer_Num": "000016", "Address_Code": "WAREHOUSE"}

        address = await CustomerAddressResource(session).create(
            acme(), "WAREHOUSE", City="Houston"
        )

        assert address.id == "WAREHOUSE"
        assert session.calls[-1]["json"] == {
            "City": "Houston",
            "Customer_Num": "000016",
            "Address_Code": "WAREHOUSE",
        }

    @pytest.mark.asyncio
    async def test_create_requires_customer(self, fake_session):
        item = EntityMaterializer(Item).materialize({"Item_Number": "W1"})
        with pytest.raises(ConfigurationError):
            await CustomerAddressResource(fake_session()).create(item, "WAREHOUSE")


class TestItems:
    """Items are read-only."""

    @pytest.mark.asyncio
    async def test_create_not_supported(self, fake_session):
        with pytest.raises(ConfigurationError):
            await ItemResource(fake_session()).create({"Item_Number": "W1"})


class TestSalesDocuments:
    """Sales document creation."""

    @pytest.mark.asyncio
    async def test_create_order(self, fake_session):
        session = fake_session()
        session.post_reply = {"Sales_Doc_Num": "ORD0001  ", "Sales_Doc_Type": "ORDER"}

        document = await SalesDocumentResource(session).create(
            acme({"Customer_Name": "name"}), "order", "RETAIL"
        )

        assert isinstance(document, SalesDocument)
        assert document.id == "ORD0001"
        assert session.calls[-1]["path"] == SALES_DOCUMENT_PATH
        assert session.calls[-1]["json"] == {
            "Customer_Name": "Acme Corp",
            "Sales_Doc_ID": "ORD",
            "Customer_Num": "000016",
            "Sales_Doc_Type": "ORDER",
            "Price_Level": "RETAIL",
        }

    @pytest.mark.asyncio
    async def test_required_fields_win(self, fake_session):
        session = fake_session()
        session.post_reply = {"Sales_Doc_Num": "QTE0001"}

        await SalesDocumentResource(session).create(
            acme(),
            DocumentType.QUOTE,
            PriceLevel(name="WHOLESALE"),
            Sales_Doc_ID="STDQUOTE",
            Customer_Num="000999",
            Price_Level="OTHER",
        )

        sent = session.calls[-1]["json"]
        assert sent["Sales_Doc_ID"] == "STDQUOTE"
        assert sent["Customer_Num"] == "000016"
        assert sent["Sales_Doc_Type"] == "QUOTE"
        assert sent["Price_Level"] == "WHOLESALE"

    @pytest.mark.asyncio
    async def test_invalid_document_type(self, fake_session):
        session = fake_session()
        with pytest.raises(ConfigurationError, match="not a valid type"):
            await SalesDocumentResource(session).create(acme(), "CREDIT", "RETAIL")
        assert session.calls == []


class TestSalesLineItems:
    """Line items use the generic search and create."""

    def test_identity(self, fake_session):
        resource = SalesLineItemResource(fake_session())
        assert resource.name == "SalesLineItem"
        assert resource.id_key == "Line_Num"
