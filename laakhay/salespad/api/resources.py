"""Per-entity collection resources (search, exact lookup, create).

Each resource binds an Entity type to a session and the client's current
field map for that type. Collection queries return PagedSequence objects;
exact lookups return one entity or None.
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import FILTER_PARAM, TOP_PARAM
from ..core.enums import DocumentType
from ..core.exceptions import (
    AmbiguousResultError,
    ConfigurationError,
    NotFoundError,
    ProtocolError,
)
from ..models import (
    EMPTY_FIELD_MAP,
    Customer,
    CustomerAddress,
    Entity,
    FieldMap,
    Item,
    PriceLevel,
    SalesDocument,
    SalesLineItem,
)
from ..pagination import EntityMaterializer, PagedSequence, extract_items
from ..session import SalesPadSession

logger = logging.getLogger(__name__)


def odata_literal(value: Any) -> str:
    """Quote a value for use inside an OData ``$filter`` expression."""
    return "'" + str(value).replace("'", "''") + "'"


class EntityResource:
    """Query and create records of one entity type."""

    entity_cls: type[Entity] = Entity

    def __init__(self, session: SalesPadSession, field_map: FieldMap = EMPTY_FIELD_MAP) -> None:
        self.session = session
        self.field_map = field_map
        self.materializer = EntityMaterializer(self.entity_cls, field_map)

    @property
    def name(self) -> str:
        return self.entity_cls.entity_type.name

    @property
    def endpoint(self) -> str:
        return self.entity_cls.entity_type.endpoint

    @property
    def id_key(self) -> str:
        return self.entity_cls.entity_type.id_key

    async def search(self, query: str = "") -> PagedSequence:
        """Retrieve a collection, optionally filtered by an OData query string.

        The query is passed through to ``$filter`` untouched.

        Raises:
            ConfigurationError: If this entity type has no endpoint
            ProtocolError: If the response carries no ``Items`` list
        """
        if not self.endpoint:
            raise ConfigurationError(f"{self.name}.search() is not implemented")
        parameters: dict[str, Any] = {TOP_PARAM: self.session.page_size}
        if query:
            parameters[FILTER_PARAM] = query
        body = await self.session.call(self.endpoint, "GET", parameters)
        rows = extract_items(body, self.endpoint)
        return PagedSequence(
            self.endpoint, parameters, self.materializer, rows, session=self.session
        )

    async def get(self, entity_id: Any) -> Entity | None:
        """Return the entity whose identifier equals ``entity_id``, or None.

        Raises:
            AmbiguousResultError: If more than one record matches
        """
        if not self.id_key:
            raise ConfigurationError(f"{self.name}.get() is not implemented")
        results = await self.search(f"{self.id_key} eq {odata_literal(entity_id)}")
        if len(results) < 1:
            return None
        if len(results) > 1:
            raise AmbiguousResultError(
                f"Multiple results were returned by {self.endpoint} for {self.name} {entity_id!r}",
                count=len(results),
            )
        return results[0]

    async def get_or_raise(self, entity_id: Any) -> Entity:
        """Like ``get()`` but raises NotFoundError when nothing matches."""
        entity = await self.get(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.name} {entity_id!r} was not found")
        return entity

    async def _create(self, values: dict[str, Any]) -> Entity:
        if not self.endpoint:
            raise ConfigurationError(f"{self.name}.create() is not implemented")
        body = await self.session.call(self.endpoint, "POST", json=values)
        # SalesPad typically echoes the newly created record
        if not isinstance(body, dict) or self.id_key not in body:
            raise ProtocolError(f"Unexpected response to POST from server for {self.endpoint}")
        entity = self.materializer.materialize(body)
        logger.info("Record created", extra={"entity": self.name, "id": entity.id})
        return entity

    async def create(self, values: dict[str, Any]) -> Entity:
        """Create a record from raw API field values."""
        return await self._create(dict(values))


class CustomerResource(EntityResource):
    entity_cls = Customer

    def __init__(
        self,
        session: SalesPadSession,
        field_map: FieldMap = EMPTY_FIELD_MAP,
        address_field_map: FieldMap = EMPTY_FIELD_MAP,
    ) -> None:
        super().__init__(session, field_map)
        self.address_materializer = EntityMaterializer(CustomerAddress, address_field_map)

    async def create(self, name: str, **properties: Any) -> Entity:  # type: ignore[override]
        """Create a customer; SalesPad assigns the customer number.

        Raises:
            ConfigurationError: If name is empty
        """
        if not name:
            raise ConfigurationError(
                "Customer.create(): customer name is required and cannot be empty"
            )
        return await self._create({**properties, "Customer_Name": name})

    async def addresses(self, customer: Entity) -> list[Entity]:
        """Fetch every address recorded for ``customer``."""
        customer_num = customer.unmapped(Customer.entity_type.id_key)
        path = CustomerAddress.entity_type.endpoint
        body = await self.session.call(
            path,
            "GET",
            {FILTER_PARAM: f"{Customer.entity_type.id_key} eq {odata_literal(customer_num)}"},
        )
        rows = extract_items(body, path)
        return [self.address_materializer.materialize(row) for row in rows]


class CustomerAddressResource(EntityResource):
    entity_cls = CustomerAddress

    async def create(  # type: ignore[override]
        self, customer: Entity, address_code: str, **properties: Any
    ) -> Entity:
        """Create an address for an existing customer record.

        Taking the Customer entity (rather than a bare number) guarantees
        the customer number came from the service.
        """
        if not isinstance(customer, Customer):
            raise ConfigurationError("CustomerAddress.create() requires a Customer entity")
        return await self._create(
            {
                **properties,
                "Customer_Num": customer.unmapped("Customer_Num"),
                "Address_Code": address_code,
            }
        )


class ItemResource(EntityResource):
    entity_cls = Item

    async def create(self, values: dict[str, Any]) -> Entity:
        raise ConfigurationError("Item.create() is not implemented")


class SalesDocumentResource(EntityResource):
    entity_cls = SalesDocument

    async def create(  # type: ignore[override]
        self,
        customer: Entity,
        doc_type: str | DocumentType,
        price_level: str | PriceLevel,
        **properties: Any,
    ) -> Entity:
        """Create a sales document (quote, order, ...) for a customer.

        ``price_level`` must name a level already defined in the database.
        Caller properties override the defaults but never the required fields.

        Raises:
            ConfigurationError: If doc_type is not a known document type
        """
        resolved = doc_type if isinstance(doc_type, DocumentType) else DocumentType.from_str(doc_type)
        if resolved is None:
            raise ConfigurationError(f"SalesDocument.create(): {doc_type} is not a valid type")
        level = price_level.name if isinstance(price_level, PriceLevel) else price_level
        values = {
            "Customer_Name": customer.unmapped("Customer_Name"),
            # Placeholder document id until the proper values are known
            "Sales_Doc_ID": "ORD",
            **properties,
            "Customer_Num": customer.unmapped("Customer_Num"),
            "Sales_Doc_Type": resolved.value,
            "Price_Level": level,
        }
        return await self._create(values)


class SalesLineItemResource(EntityResource):
    entity_cls = SalesLineItem
