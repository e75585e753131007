"""Data models for SalesPad entities.

Architecture:
    Entity subclasses are thin: each one only declares an immutable
    EntityType (display name, collection endpoint, identifier field).
    Property handling lives in the shared Entity container.

    PriceLevel is a Pydantic v2 model; price levels are small, fixed
    reference data rather than paged collections.
"""

from .customer import Customer
from .customer_address import CustomerAddress
from .entity import EMPTY_FIELD_MAP, Entity, EntityType, FieldMap, freeze_field_map
from .item import Item
from .price_level import PriceLevel
from .sales_document import SalesDocument
from .sales_line_item import SalesLineItem

__all__ = [
    "Customer",
    "CustomerAddress",
    "EMPTY_FIELD_MAP",
    "Entity",
    "EntityType",
    "FieldMap",
    "Item",
    "PriceLevel",
    "SalesDocument",
    "SalesLineItem",
    "freeze_field_map",
]
