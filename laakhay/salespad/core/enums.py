"""Enumerations shared across the client."""

from enum import Enum


class SessionType(str, Enum):
    """Kinds of API session the service can issue.

    Temporary sessions expire after 15 minutes of inactivity and use a license
    seat. Permanent sessions never expire and need a "GP API" license; the
    application must store the session key and pass it to ``restart()``.
    """

    TEMPORARY = "temporary"
    PERMANENT = "permanent"


class DocumentType(str, Enum):
    """Sales document types accepted by ``/api/SalesDocument``."""

    QUOTE = "QUOTE"
    ORDER = "ORDER"
    INVOICE = "INVOICE"
    RETURN = "RETURN"
    BACKORDER = "BACKORDER"
    FULFILLMENT = "FULFILLMENT"

    @classmethod
    def from_str(cls, value: str) -> "DocumentType | None":
        """Resolve a document type from its wire value (case-insensitive)."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None
