"""Shared SalesPad constants and client configuration.

This module centralizes endpoint paths, wire parameter names and defaults
used by the session, the resources and the paginated sequence so those
modules can stay small and focused.
"""

from __future__ import annotations

from dataclasses import dataclass

from .core.enums import SessionType
from .core.exceptions import ConfigurationError

# Collection endpoints
CUSTOMER_PATH = "/api/Customer"
CUSTOMER_ADDRESS_PATH = "/api/CustomerAddr"
ITEM_MASTER_PATH = "/api/ItemMaster"
INVENTORY_SEARCH_PATH = "/api/InventorySearch"
SALES_DOCUMENT_PATH = "/api/SalesDocument"
SALES_LINE_ITEM_PATH = "/api/SalesLineItem"
PRICE_LEVEL_PATH = "/api/PriceLevel"

# Session endpoints
SESSION_PATHS = {
    SessionType.TEMPORARY: "/api/Session",
    SessionType.PERMANENT: "/api/Session/Permanent",
}
SESSION_PING_PATH = "/api/Session/Ping"

# OData-style query parameters and response envelope
TOP_PARAM = "$top"
SKIP_PARAM = "$skip"
FILTER_PARAM = "$filter"
ITEMS_KEY = "Items"

SESSION_HEADER = "Session-ID"
SESSION_ID_KEY = "SessionID"

DEFAULT_PAGE_SIZE = 100
DEFAULT_TIMEOUT = 20.0
DEFAULT_USER_AGENT = "laakhay-salespad; python aiohttp api client"

# Reply from /api/Session/Ping for a live session
PING_OK_REPLY = {
    "StatusCode": "OK",
    "ErrorCode": 0,
    "ErrorCodeMessage": "No Error",
    "Messages": ["Session is active"],
}
PING_BAD_GUID_MESSAGES = [
    "Guid should contain 32 digits with 4 dashes (xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx)."
]


@dataclass(frozen=True)
class SalesPadConfig:
    """Connection settings for one SalesPad API host.

    Attributes:
        host: Base URI of the SalesPad web API (trailing slash is ignored)
        page_size: Rows requested per page (``$top``)
        timeout: Total request timeout in seconds
        user_agent: User-Agent header sent with every request
    """

    host: str
    page_size: int = DEFAULT_PAGE_SIZE
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        """Validate and normalize configuration."""
        if not self.host or not self.host.strip():
            raise ConfigurationError("SalesPadConfig.host must be a non-empty URI")
        if self.page_size < 1:
            raise ConfigurationError(f"page_size must be >= 1, got {self.page_size}")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be > 0, got {self.timeout}")
        object.__setattr__(self, "host", self.host.strip().rstrip("/"))

    def url(self, path: str) -> str:
        """Join an endpoint path onto the configured host."""
        return f"{self.host}{path}"
