"""Laakhay SalesPad - async client for the SalesPad (Cavallo) web API."""

from .api import (
    CustomerAddressResource,
    CustomerResource,
    EntityResource,
    InventoryResource,
    ItemResource,
    PriceLevelCatalog,
    SalesDocumentResource,
    SalesLineItemResource,
)
from .client import SalesPadClient
from .config import DEFAULT_PAGE_SIZE, SalesPadConfig
from .core import (
    AmbiguousResultError,
    AuthorizationError,
    ConfigurationError,
    DocumentType,
    NotFoundError,
    ProtocolError,
    SalesPadError,
    SeekError,
    SequenceIndexError,
    ServiceError,
    SessionType,
    TransportError,
)
from .models import (
    Customer,
    CustomerAddress,
    Entity,
    EntityType,
    Item,
    PriceLevel,
    SalesDocument,
    SalesLineItem,
)
from .pagination import (
    CursorRegistry,
    EntityMaterializer,
    Materializer,
    PagedSequence,
    RowSquasher,
    TransformMaterializer,
)
from .session import SalesPadSession

__version__ = "0.1.0"

__all__ = [
    # Client
    "SalesPadClient",
    "SalesPadConfig",
    "SalesPadSession",
    "DEFAULT_PAGE_SIZE",
    # Resources
    "CustomerResource",
    "CustomerAddressResource",
    "EntityResource",
    "InventoryResource",
    "ItemResource",
    "PriceLevelCatalog",
    "SalesDocumentResource",
    "SalesLineItemResource",
    # Pagination
    "CursorRegistry",
    "EntityMaterializer",
    "Materializer",
    "PagedSequence",
    "RowSquasher",
    "TransformMaterializer",
    # Models
    "Customer",
    "CustomerAddress",
    "Entity",
    "EntityType",
    "Item",
    "PriceLevel",
    "SalesDocument",
    "SalesLineItem",
    # Enums
    "DocumentType",
    "SessionType",
    # Exceptions
    "SalesPadError",
    "TransportError",
    "AuthorizationError",
    "ServiceError",
    "ProtocolError",
    "ConfigurationError",
    "NotFoundError",
    "AmbiguousResultError",
    "SequenceIndexError",
    "SeekError",
]
