"""API session management for a SalesPad host.

Architecture:
    SalesPadSession owns the HTTP client and the active session key. Every
    request made by the library goes through ``call()``, which injects the
    ``Session-ID`` header and translates HTTP-level failures into the
    library's exception hierarchy.

Design Decisions:
    - Explicit instance instead of process-wide state: one session per
      client object, passed to every resource that needs it
    - No automatic retry: an AuthorizationError is surfaced to the caller,
      who decides whether to log in again
    - Last response retained for debugging (``last_response``)
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from .config import (
    PING_BAD_GUID_MESSAGES,
    PING_OK_REPLY,
    SESSION_HEADER,
    SESSION_ID_KEY,
    SESSION_PATHS,
    SESSION_PING_PATH,
    SalesPadConfig,
)
from .core.enums import SessionType
from .core.exceptions import (
    AuthorizationError,
    ConfigurationError,
    ProtocolError,
    ServiceError,
)
from .runtime.rest import HTTPClient, HTTPResponse

logger = logging.getLogger(__name__)

_SUPPORTED_METHODS = {"GET", "POST"}


class SalesPadSession:
    """One authenticated connection to a SalesPad API host."""

    def __init__(self, config: SalesPadConfig, http: HTTPClient | None = None) -> None:
        """Initialize session.

        Args:
            config: Host and request settings
            http: Optional HTTP client (injected for testing)
        """
        self.config = config
        self._http = http or HTTPClient(timeout=config.timeout, user_agent=config.user_agent)
        self._connected = False
        self._session_key = ""
        self._page_size = config.page_size
        self.last_response: HTTPResponse | None = None

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def session_key(self) -> str:
        return self._session_key

    @property
    def page_size(self) -> int:
        return self._page_size

    @page_size.setter
    def page_size(self, value: int) -> None:
        if value < 1:
            raise ConfigurationError(f"page_size must be >= 1, got {value}")
        self._page_size = value

    async def call(
        self,
        path: str,
        method: str = "GET",
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request to ``path`` and return the decoded body.

        Raises:
            ConfigurationError: If not connected or the method is unsupported
            TransportError: On timeout or connection failure
            ProtocolError: If the service answered with an HTML page
            AuthorizationError: On HTTP 401
            ServiceError: On any other status >= 400
        """
        if not self._connected:
            raise ConfigurationError("SalesPad API is not connected")
        method = method.upper()
        if method not in _SUPPORTED_METHODS:
            raise ConfigurationError(f"Unsupported API call method: {method}")

        headers = dict(headers or {})
        if self._session_key:
            headers[SESSION_HEADER] = self._session_key

        url = self.config.url(path)
        response = await self._http.request(
            method, url, params=params, headers=headers, json=json if method == "POST" else None
        )
        self.last_response = response

        if response.content_type.startswith("text/html"):
            raise ProtocolError(f"{url} returned html, probably an error page")
        if response.status == 401:
            raise AuthorizationError(
                f"You are not authorized to {method} {path} on {self.config.host}"
            )
        if response.status >= 400:
            raise ServiceError(
                f"{method} {path} failed with HTTP {response.status}",
                status_code=response.status,
            )
        return response.body

    async def login(
        self,
        username: str,
        password: str,
        session_type: SessionType = SessionType.TEMPORARY,
    ) -> bool:
        """Request a new API session using HTTP basic authentication.

        Temporary sessions are the default because they do not require the
        application to manage a session key. Returns True immediately if this
        session is already connected.

        Raises:
            ConfigurationError: If session_type is not a SessionType
            AuthorizationError: If the credentials are rejected
            ProtocolError: If the reply carries no SessionID
        """
        if self.connected:
            return True
        if session_type not in SESSION_PATHS:
            raise ConfigurationError(f"Invalid session type: {session_type!r}")

        self._connected = True
        token = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
        path = SESSION_PATHS[session_type]
        logger.debug("Requesting session", extra={"path": path, "session_type": session_type.value})
        try:
            reply = await self.call(path, "GET", headers={"Authorization": f"Basic {token}"})
        except AuthorizationError as e:
            self.reset()
            raise AuthorizationError("Incorrect username or password during login()") from e
        except Exception:
            self.reset()
            raise

        if isinstance(reply, dict) and SESSION_ID_KEY in reply:
            self._session_key = str(reply[SESSION_ID_KEY])
            logger.info("Session established", extra={"session_type": session_type.value})
            return True
        self.reset()
        raise ProtocolError("An unexpected response was returned from SalesPad during login")

    async def restart(self, session_id: str) -> bool:
        """Reconnect with a previously issued (usually permanent) session id.

        Raises:
            AuthorizationError: If the session id is malformed, invalid or expired
            ProtocolError: If the ping reply is not recognized
        """
        if self.connected:
            return True
        self._connected = True
        self._session_key = session_id
        try:
            reply = await self.call(SESSION_PING_PATH)
        except AuthorizationError as e:
            self.reset()
            raise AuthorizationError("Your Session ID is not valid or has expired") from e
        except Exception:
            self.reset()
            raise

        if isinstance(reply, dict):
            if reply == PING_OK_REPLY:
                logger.info("Session restarted")
                return True
            if reply.get("Messages") == PING_BAD_GUID_MESSAGES:
                self.reset()
                raise AuthorizationError("The Session ID you provided is not valid")
        self.reset()
        raise ProtocolError(
            "An unexpected response was returned from SalesPad during session restart"
        )

    def reset(self) -> None:
        """Forget the current connection; calls fail until login() or restart()."""
        self._connected = False
        self._session_key = ""
        self.last_response = None
        logger.debug("Session reset")

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        self.reset()
        await self._http.close()

    async def __aenter__(self) -> SalesPadSession:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
