"""Entity resources exposed through SalesPadClient."""

from .inventory import InventoryResource
from .price_levels import PriceLevelCatalog
from .resources import (
    CustomerAddressResource,
    CustomerResource,
    EntityResource,
    ItemResource,
    SalesDocumentResource,
    SalesLineItemResource,
    extract_items,
    odata_literal,
)

__all__ = [
    "CustomerAddressResource",
    "CustomerResource",
    "EntityResource",
    "InventoryResource",
    "ItemResource",
    "PriceLevelCatalog",
    "SalesDocumentResource",
    "SalesLineItemResource",
    "extract_items",
    "odata_literal",
]
