"""Runtime layer (transport)."""

from .rest import HTTPClient, HTTPResponse

__all__ = ["HTTPClient", "HTTPResponse"]
