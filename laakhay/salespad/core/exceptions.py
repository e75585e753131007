"""Custom exception hierarchy."""

from __future__ import annotations


class SalesPadError(Exception):
    """Base exception for all library errors."""

    pass


class TransportError(SalesPadError):
    """Connection failure or timeout while talking to the SalesPad host."""

    def __init__(self, message: str, host: str | None = None) -> None:
        super().__init__(message)
        self.host = host


class AuthorizationError(SalesPadError):
    """The service rejected the credentials or the session id (HTTP 401).

    Session renewal is left to the application; nothing in this library
    retries after an authorization failure.
    """

    def __init__(self, message: str, status_code: int | None = 401) -> None:
        super().__init__(message)
        self.status_code = status_code


class ServiceError(SalesPadError):
    """Non-success HTTP status returned by the service."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(SalesPadError):
    """Response body does not have the shape the client expects."""

    pass


class ConfigurationError(SalesPadError):
    """Programming error: bad materializer, page source, field map or config."""

    pass


class NotFoundError(SalesPadError):
    """A lookup or cursor id did not match anything."""

    pass


class AmbiguousResultError(SalesPadError):
    """More than one result was returned where exactly one was expected."""

    def __init__(self, message: str, count: int | None = None) -> None:
        super().__init__(message)
        self.count = count


class SequenceIndexError(SalesPadError, IndexError):
    """Index lies beyond the end of an exhausted paged sequence."""

    pass


class SeekError(SalesPadError, IndexError):
    """A paged sequence cannot be positioned at the requested index."""

    pass
