"""Per-query pagination state for offset-only endpoints.

The SalesPad API paginates with ``$skip`` alone. The registry turns that
into opaque cursors so several independent queries against the same
endpoint can interleave without one query's offset leaking into another's.
"""

from __future__ import annotations

import secrets
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..config import SKIP_PARAM
from ..core.exceptions import NotFoundError
from .telemetry import log_cursor_closed, log_cursor_opened

_CURSOR_BYTES = 8


@dataclass
class CursorState:
    """State of one logical query.

    Attributes:
        cursor_id: Opaque identifier handed to the page loader
        base_parameters: Frozen request parameters, excluding ``$skip``
        received_count: Rows consumed so far; the next ``$skip``
    """

    cursor_id: str
    base_parameters: Mapping[str, Any] = field(default_factory=dict)
    received_count: int = 0


class CursorRegistry:
    """Table of live cursors.

    Registry operations are synchronous, so within one event loop they are
    atomic. Share an instance across threads only behind an external lock.
    """

    def __init__(self) -> None:
        self._cursors: dict[str, CursorState] = {}

    def open(self, base_parameters: Mapping[str, Any]) -> str:
        """Register a new query and return its cursor id."""
        params = {k: v for k, v in base_parameters.items() if k != SKIP_PARAM}
        cursor_id = secrets.token_hex(_CURSOR_BYTES)
        while cursor_id in self._cursors:
            cursor_id = secrets.token_hex(_CURSOR_BYTES)
        self._cursors[cursor_id] = CursorState(
            cursor_id=cursor_id, base_parameters=MappingProxyType(params)
        )
        log_cursor_opened(cursor_id=cursor_id)
        return cursor_id

    def _state(self, cursor_id: str) -> CursorState:
        try:
            return self._cursors[cursor_id]
        except KeyError:
            raise NotFoundError(f"Internal cursor not found: {cursor_id!r}") from None

    def advance(self, cursor_id: str, delta: int) -> int:
        """Add ``delta`` consumed rows to a cursor; returns the new count."""
        if delta < 0:
            raise ValueError(f"Cursor delta must be >= 0, got {delta}")
        state = self._state(cursor_id)
        state.received_count += delta
        return state.received_count

    def restore(self, cursor_id: str, received_count: int) -> None:
        """Roll a cursor back to an earlier ``received_count``.

        Used when a page was consumed by the cursor but never delivered.

        Raises:
            ValueError: If received_count is negative or ahead of the cursor
        """
        state = self._state(cursor_id)
        if not 0 <= received_count <= state.received_count:
            raise ValueError(
                f"Cannot restore cursor to {received_count}; it is at {state.received_count}"
            )
        state.received_count = received_count

    def parameters_for_next_page(self, cursor_id: str) -> dict[str, Any]:
        """Base parameters merged with ``$skip`` for the cursor's next page."""
        state = self._state(cursor_id)
        return {**state.base_parameters, SKIP_PARAM: state.received_count}

    def received(self, cursor_id: str) -> int:
        return self._state(cursor_id).received_count

    def close(self, cursor_id: str) -> None:
        """Reclaim a cursor; unknown ids are ignored."""
        state = self._cursors.pop(cursor_id, None)
        if state is not None:
            log_cursor_closed(cursor_id=cursor_id, received=state.received_count)

    def __contains__(self, cursor_id: object) -> bool:
        return cursor_id in self._cursors

    def __len__(self) -> int:
        return len(self._cursors)
