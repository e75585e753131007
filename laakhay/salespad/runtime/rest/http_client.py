"""Async HTTP client wrapper for the SalesPad web API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import aiohttp

from ...config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ...core.exceptions import ProtocolError, TransportError


@dataclass(frozen=True)
class HTTPResponse:
    """Status, content type and decoded body of one HTTP exchange."""

    status: int
    content_type: str
    body: Any


def _stringify(params: dict[str, Any] | None) -> dict[str, str] | None:
    if params is None:
        return None
    return {key: str(value) for key, value in params.items() if value is not None}


class HTTPClient:
    """Async HTTP client wrapper.

    Unlike ``raise_for_status`` style clients, this one hands every status
    back to the caller: the session layer decides which statuses are errors.
    Only connectivity problems (``TransportError``) and undecodable JSON
    bodies (``ProtocolError``) are raised here.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.user_agent = user_agent
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout, headers={"User-Agent": self.user_agent}
            )
        return self._session

    def _resolve(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        json: Any = None,
    ) -> HTTPResponse:
        """Perform one request and decode its body.

        JSON bodies are parsed; anything else (HTML error pages included) is
        returned as text so the caller can inspect the content type.

        Raises:
            TransportError: On timeout or connection failure
            ProtocolError: If a JSON response body cannot be decoded
        """
        url = self._resolve(url)
        try:
            async with self.session.request(
                method, url, params=_stringify(params), headers=headers, json=json
            ) as response:
                content_type = response.content_type or ""
                if "json" in content_type:
                    try:
                        body = await response.json(content_type=None)
                    except ValueError as e:
                        raise ProtocolError(f"{method} {url} returned invalid JSON") from e
                else:
                    body = await response.text()
                return HTTPResponse(status=response.status, content_type=content_type, body=body)
        except asyncio.TimeoutError as e:
            raise TransportError(f"Timeout while trying to connect to {url}", host=self.base_url) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"{method} {url} failed: {e}", host=self.base_url) from e

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> HTTPResponse:
        """GET request."""
        return await self.request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> HTTPResponse:
        """POST request."""
        return await self.request("POST", url, headers=headers, json=json)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
