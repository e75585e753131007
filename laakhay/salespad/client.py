"""High-level facade over a SalesPad API host.

Architecture:
    SalesPadClient owns one SalesPadSession, one CursorRegistry and the
    per-entity field maps, and hands them to the resources it exposes.
    Nothing is stored at module or class level, so several clients (even
    against different hosts) can be used side by side.

Example:
    >>> async with SalesPadClient(SalesPadConfig(host="https://sp.example.com")) as sp:
    ...     await sp.login("user", "secret")
    ...     customer = await sp.customers.get("000016")
    ...     async for item in await sp.inventory.search("Item_Class eq 'WIDGET'"):
    ...         print(item.id, len(item.Locations))
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .api import (
    CustomerAddressResource,
    CustomerResource,
    InventoryResource,
    ItemResource,
    PriceLevelCatalog,
    SalesDocumentResource,
    SalesLineItemResource,
)
from .config import SalesPadConfig
from .core.enums import SessionType
from .core.exceptions import ConfigurationError
from .models import (
    EMPTY_FIELD_MAP,
    Customer,
    CustomerAddress,
    Entity,
    FieldMap,
    Item,
    SalesDocument,
    SalesLineItem,
    freeze_field_map,
)
from .pagination import CursorRegistry
from .runtime.rest import HTTPClient
from .session import SalesPadSession

logger = logging.getLogger(__name__)

_MAPPABLE = (Customer, CustomerAddress, Item, SalesDocument, SalesLineItem)


class SalesPadClient:
    """Entry point for querying and updating a SalesPad database."""

    def __init__(
        self,
        config: SalesPadConfig,
        *,
        session: SalesPadSession | None = None,
        http: HTTPClient | None = None,
    ) -> None:
        """Initialize client.

        Args:
            config: Host and request settings
            session: Optional pre-built session (injected for testing)
            http: Optional HTTP client used when no session is given
        """
        self.config = config
        self.session = session or SalesPadSession(config, http=http)
        self.cursors = CursorRegistry()
        self._field_maps: dict[type[Entity], FieldMap] = {}
        self._resources: dict[str, Any] = {}
        self._price_levels = PriceLevelCatalog(self.session)

    async def login(
        self,
        username: str,
        password: str,
        session_type: SessionType = SessionType.TEMPORARY,
    ) -> bool:
        return await self.session.login(username, password, session_type)

    async def restart(self, session_id: str) -> bool:
        return await self.session.restart(session_id)

    def map(self, entity_cls: type[Entity], field_map: Mapping[str, Any] | None) -> None:
        """Rename fields of ``entity_cls`` entities built from now on.

        Each value is either the new property name, or a callable taking the
        raw value and returning a mapping of replacement properties.

        Raises:
            ConfigurationError: For an unknown entity type or bad map value
        """
        if entity_cls not in _MAPPABLE:
            raise ConfigurationError(f"Field maps are not supported for {entity_cls!r}")
        self._field_maps[entity_cls] = freeze_field_map(field_map)
        self._resources.clear()
        logger.debug("Field map updated", extra={"entity": entity_cls.entity_type.name})

    def field_map(self, entity_cls: type[Entity]) -> FieldMap:
        return self._field_maps.get(entity_cls, EMPTY_FIELD_MAP)

    def _resource(self, key: str, factory: Any) -> Any:
        resource = self._resources.get(key)
        if resource is None:
            resource = self._resources[key] = factory()
        return resource

    @property
    def customers(self) -> CustomerResource:
        return self._resource(
            "customers",
            lambda: CustomerResource(
                self.session, self.field_map(Customer), self.field_map(CustomerAddress)
            ),
        )

    @property
    def customer_addresses(self) -> CustomerAddressResource:
        return self._resource(
            "customer_addresses",
            lambda: CustomerAddressResource(self.session, self.field_map(CustomerAddress)),
        )

    @property
    def items(self) -> ItemResource:
        return self._resource("items", lambda: ItemResource(self.session, self.field_map(Item)))

    @property
    def inventory(self) -> InventoryResource:
        return self._resource(
            "inventory",
            lambda: InventoryResource(self.session, self.field_map(Item), registry=self.cursors),
        )

    @property
    def sales_documents(self) -> SalesDocumentResource:
        return self._resource(
            "sales_documents",
            lambda: SalesDocumentResource(self.session, self.field_map(SalesDocument)),
        )

    @property
    def sales_line_items(self) -> SalesLineItemResource:
        return self._resource(
            "sales_line_items",
            lambda: SalesLineItemResource(self.session, self.field_map(SalesLineItem)),
        )

    @property
    def price_levels(self) -> PriceLevelCatalog:
        return self._price_levels

    async def close(self) -> None:
        await self.session.close()

    async def __aenter__(self) -> SalesPadClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
