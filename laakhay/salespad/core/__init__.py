"""Core components."""

from .enums import DocumentType, SessionType
from .exceptions import (
    AmbiguousResultError,
    AuthorizationError,
    ConfigurationError,
    NotFoundError,
    ProtocolError,
    SalesPadError,
    SeekError,
    SequenceIndexError,
    ServiceError,
    TransportError,
)

__all__ = [
    "DocumentType",
    "SessionType",
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
