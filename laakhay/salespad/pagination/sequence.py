"""Lazy sequence over a remote, offset-paginated collection.

Architecture:
    PagedSequence holds the materialized prefix of a remote collection and
    fetches further pages on demand. Pages come from a PageSource:

    - EndpointSource re-requests a REST endpoint with ``$skip`` set to the
      number of rows received so far (fetch-by-REST mode)
    - LoaderSource calls a page-loader with fixed parameters; the loader
      tracks its own offset, typically through a CursorRegistry (callback
      mode, used by InventorySearch)

    Each raw row is turned into an element by a Materializer.

Design Decisions:
    - No total count: the service offers none, so ``len()`` reports only
      what has been materialized and never triggers a fetch
    - One fetch at a time per sequence (asyncio.Lock); no prefetching
    - A failed fetch leaves the sequence untouched, so retrying is safe;
      page loaders get an ``on_discard`` call to roll their own offset back
    - An empty page closes the source; no further requests are made

Example:
    >>> items = await client.items.search("Item_Class eq 'WIDGET'")
    >>> async for item in items:
    ...     print(item.id)
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterator, Awaitable, Callable
from time import perf_counter
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ..config import ITEMS_KEY, SKIP_PARAM
from ..core.exceptions import ConfigurationError, ProtocolError, SeekError, SequenceIndexError
from .materializers import Materializer, as_materializer
from .telemetry import log_page_error, log_page_fetched, log_sequence_exhausted

if TYPE_CHECKING:
    from ..session import SalesPadSession

PageLoader = Callable[[dict[str, Any]], Awaitable[list[Any]] | list[Any]]
DiscardHook = Callable[[dict[str, Any]], None]


def extract_items(body: Any, path: str) -> list[Any]:
    """Return the ``Items`` list of a collection response.

    Raises:
        ProtocolError: If the body is not shaped like ``{"Items": [...]}``
    """
    if not isinstance(body, dict) or not isinstance(body.get(ITEMS_KEY), list):
        raise ProtocolError(f"Unexpected response from server for {path}")
    return body[ITEMS_KEY]


@runtime_checkable
class PageSource(Protocol):
    """Supplier of the next page of raw rows.

    A source may also define ``discard()``; the sequence calls it when a
    fetched page could not be materialized and was thrown away.
    """

    async def fetch(self, received_count: int) -> list[Any]: ...


class EndpointSource:
    """Re-requests a collection endpoint with an advancing ``$skip``."""

    def __init__(self, session: SalesPadSession, path: str, parameters: dict[str, Any]) -> None:
        self.session = session
        self.path = path
        self.parameters = dict(parameters)

    async def fetch(self, received_count: int) -> list[Any]:
        params = {**self.parameters, SKIP_PARAM: received_count}
        body = await self.session.call(self.path, "GET", params)
        return extract_items(body, self.path)

    def __str__(self) -> str:
        return self.path


class LoaderSource:
    """Delegates page loading to a callback that keeps its own offset.

    ``on_discard`` receives the same parameters as the loader when the page
    it returned is thrown away, so the loader can roll its offset back.
    """

    def __init__(
        self,
        loader: PageLoader,
        parameters: dict[str, Any],
        on_discard: DiscardHook | None = None,
    ) -> None:
        self.loader = loader
        self.parameters = dict(parameters)
        self.on_discard = on_discard

    async def fetch(self, received_count: int) -> list[Any]:
        rows = self.loader(dict(self.parameters))
        if inspect.isawaitable(rows):
            rows = await rows
        if not isinstance(rows, list):
            raise ProtocolError(f"Page loader {self} returned {type(rows).__name__}, not a list")
        return rows

    def discard(self) -> None:
        if self.on_discard is not None:
            self.on_discard(dict(self.parameters))

    def __str__(self) -> str:
        return getattr(self.loader, "__qualname__", repr(self.loader))


def resolve_source(
    source: Any,
    parameters: dict[str, Any],
    session: SalesPadSession | None = None,
    on_discard: DiscardHook | None = None,
) -> PageSource | None:
    """Build a PageSource from an endpoint path, a loader, or a source.

    ``None`` means the sequence is a fixed result set that never fetches.

    Raises:
        ConfigurationError: If source is none of the accepted kinds
    """
    if source is None:
        return None
    if isinstance(source, str):
        if not source.startswith("/api/"):
            raise ConfigurationError(f"Invalid endpoint: {source!r}")
        if session is None:
            raise ConfigurationError(f"Endpoint source {source} requires a session")
        return EndpointSource(session, source, parameters)
    if isinstance(source, PageSource):
        return source
    if callable(source):
        return LoaderSource(source, parameters, on_discard)
    raise ConfigurationError(f"Invalid endpoint: {source!r}")


class PagedSequence:
    """Forward-fetching, randomly accessible view of a paged collection.

    Attributes:
        received_count: Rows received from the source; the next skip offset
        position: Index of the element ``advance()`` returns next
    """

    def __init__(
        self,
        source: Any,
        parameters: dict[str, Any],
        materializer: Any,
        rows: list[Any],
        *,
        session: SalesPadSession | None = None,
        on_discard: DiscardHook | None = None,
    ) -> None:
        """Create a sequence seeded with the eagerly fetched first page.

        Args:
            source: Endpoint path, page loader, PageSource, or None
            parameters: Base request parameters (without ``$skip``)
            materializer: Entity class, callable or Materializer for each row
            rows: Raw rows of the first page
            session: Session used by endpoint sources
            on_discard: Called with the loader parameters when a loaded page
                fails to materialize (page loaders only)

        Raises:
            ConfigurationError: If source or materializer is malformed
        """
        self._materializer: Materializer = as_materializer(materializer)
        self._source = resolve_source(source, parameters, session, on_discard)
        self._source_name = str(self._source) if self._source is not None else "closed"
        self._elements: list[Any] = []
        self._received = 0
        self._position = 0
        self._lock = asyncio.Lock()
        self._elements.extend(self._materialize(rows))
        self._received = len(rows)

    def _materialize(self, rows: list[Any]) -> list[Any]:
        return [self._materializer.materialize(row) for row in rows]

    @property
    def received_count(self) -> int:
        return self._received

    @property
    def position(self) -> int:
        return self._position

    @property
    def exhausted(self) -> bool:
        """True once the source has returned an empty page (or never existed)."""
        return self._source is None

    def _log_error(self, skip: int, error: Exception) -> None:
        log_page_error(
            source=self._source_name,
            skip=skip,
            error_type=type(error).__name__,
            error_message=str(error),
        )

    async def _load_next_page(self) -> bool:
        """Fetch and materialize one page; returns False once exhausted."""
        async with self._lock:
            if self._source is None:
                return False
            skip = self._received
            start = perf_counter()
            try:
                rows = await self._source.fetch(skip)
            except Exception as e:
                self._log_error(skip, e)
                raise
            try:
                elements = self._materialize(rows)
            except Exception as e:
                # The source may already have moved past this page
                discard = getattr(self._source, "discard", None)
                if discard is not None:
                    discard()
                self._log_error(skip, e)
                raise
            log_page_fetched(
                source=self._source_name,
                skip=skip,
                rows=len(rows),
                latency_ms=(perf_counter() - start) * 1000.0,
            )
            if not rows:
                self._source = None
                log_sequence_exhausted(source=self._source_name, received=self._received)
                return False
            self._elements.extend(elements)
            self._received += len(rows)
            return True

    async def _ensure(self, index: int) -> bool:
        """Fetch pages until ``index`` is materialized or the source runs dry."""
        while index >= len(self._elements):
            if not await self._load_next_page():
                return False
        return True

    async def get(self, index: int) -> Any:
        """Return the element at ``index``, fetching pages as needed.

        Raises:
            SequenceIndexError: If the collection ends before ``index``
        """
        if index < 0:
            raise SequenceIndexError("Negative indexes are not supported on a paged sequence")
        if not await self._ensure(index):
            raise SequenceIndexError(f"Index {index} is out of range")
        return self._elements[index]

    async def first(self) -> Any:
        """Return the first element, or None for an empty collection."""
        try:
            return await self.get(0)
        except SequenceIndexError:
            return None

    async def advance(self) -> tuple[Any, bool]:
        """Return the element at ``position`` and step past it.

        Returns:
            ``(element, has_more)``; ``has_more`` is False when no further
            element can follow. Once nothing is left, ``(None, False)``.
        """
        if not await self._ensure(self._position):
            return None, False
        element = self._elements[self._position]
        self._position += 1
        has_more = self._position < len(self._elements) or not self.exhausted
        return element, has_more

    async def seek(self, index: int) -> None:
        """Move ``position`` to ``index``, fetching pages if required.

        Raises:
            SeekError: If ``index`` cannot be reached
        """
        if index < 0 or not await self._ensure(index):
            raise SeekError(f"Can't seek() to offset {index}")
        self._position = index

    def rewind(self) -> None:
        self._position = 0

    async def collect(self) -> list[Any]:
        """Fetch every remaining page and return all elements as a list."""
        while await self._load_next_page():
            pass
        return list(self._elements)

    async def __aiter__(self) -> AsyncIterator[Any]:
        index = 0
        while await self._ensure(index):
            yield self._elements[index]
            index += 1

    def values(self) -> list[Any]:
        """Materialized elements only; never fetches."""
        return list(self._elements)

    def push(self, *elements: Any) -> None:
        """Append already-built elements without touching the source."""
        self._elements.extend(elements)

    def pop(self) -> Any:
        """Remove and return the last materialized element."""
        try:
            return self._elements.pop()
        except IndexError:
            raise SequenceIndexError("pop from an empty paged sequence") from None

    def __len__(self) -> int:
        # IMPORTANT: only the materialized count; the API has no total count
        return len(self._elements)

    def __getitem__(self, index: int | slice) -> Any:
        try:
            return self._elements[index]
        except IndexError:
            raise SequenceIndexError(f"Index {index} has not been materialized") from None

    def __setitem__(self, index: int, value: Any) -> None:
        self._elements[index] = value

    def __delitem__(self, index: int | slice) -> None:
        del self._elements[index]

    def __repr__(self) -> str:
        state = "exhausted" if self.exhausted else "open"
        return f"PagedSequence(source={self._source_name!r}, materialized={len(self)}, {state})"
