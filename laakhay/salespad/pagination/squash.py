"""Reassemble entities that the service flattens across several rows.

InventorySearch returns one row per item *and* location: with four
locations configured, 100 items arrive as 400 rows. The squasher groups
rows by a join key (``Item_Number``), keeps the fields that are equal
across every row of a group as the entity's own fields, and collects the
remaining per-row fields into a nested list (``Locations``).

Page boundary policy:
    A full page (``len(rows) >= page_size``) may end in the middle of an
    entity, so the run of rows at the end of the page that share the last
    row's join key is withheld and not counted toward the cursor's skip
    offset. The next request starts at that offset and the service sends
    the withheld entity's rows again, this time complete. Every row before
    that run is emitted, even when the same join key also appears earlier
    on the page. A short page is final: every group is emitted.

    Each call is independent; nothing is merged across calls. The shared /
    varying split is computed from the rows of the current page only.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..core.exceptions import ProtocolError
from .cursors import CursorRegistry
from .telemetry import log_group_not_contiguous, log_group_split_forced, log_rows_squashed

DEFAULT_JOIN_KEY = "Item_Number"
DEFAULT_NESTED_KEY = "Locations"

_MISSING = object()


@dataclass
class RowGroup:
    """Rows sharing one join key value.

    Attributes:
        join_key: Value of the join field for every member row
        member_rows: Raw rows in arrival order
        shared_fields: Fields whose value is identical in every member row
        varying_fields: Per-row fields not in shared_fields, one dict per row
    """

    join_key: Any
    member_rows: list[Mapping[str, Any]] = field(default_factory=list)
    shared_fields: dict[str, Any] = field(default_factory=dict)
    varying_fields: list[dict[str, Any]] = field(default_factory=list)

    def reduce(self) -> None:
        """Compute shared_fields and varying_fields from member_rows."""
        first, *rest = self.member_rows
        self.shared_fields = {
            key: value
            for key, value in first.items()
            if all(row.get(key, _MISSING) == value for row in rest)
        }
        self.varying_fields = [
            {key: value for key, value in row.items() if key not in self.shared_fields}
            for row in self.member_rows
        ]

    def to_record(self, nested_key: str) -> dict[str, Any]:
        return {**self.shared_fields, nested_key: list(self.varying_fields)}


def group_rows(rows: list[Any], join_key: str) -> list[RowGroup]:
    """Group rows by ``join_key`` in first-seen order.

    Raises:
        ProtocolError: If a row is not a record or lacks the join key
    """
    groups: dict[Any, RowGroup] = {}
    for row in rows:
        if not isinstance(row, Mapping) or join_key not in row:
            raise ProtocolError(f"Row is missing join key {join_key!r}: {row!r}")
        value = row[join_key]
        group = groups.get(value)
        if group is None:
            group = groups[value] = RowGroup(join_key=value)
        group.member_rows.append(row)
    return list(groups.values())


def trailing_run(rows: list[Mapping[str, Any]], join_key: str) -> int:
    """Number of rows at the end of ``rows`` sharing the last row's join key."""
    if not rows:
        return 0
    last = rows[-1][join_key]
    count = 0
    for row in reversed(rows):
        if row[join_key] != last:
            break
        count += 1
    return count


class RowSquasher:
    """Squashes pages of rows for cursors held in a CursorRegistry."""

    def __init__(
        self,
        registry: CursorRegistry,
        *,
        join_key: str = DEFAULT_JOIN_KEY,
        nested_key: str = DEFAULT_NESTED_KEY,
    ) -> None:
        self.registry = registry
        self.join_key = join_key
        self.nested_key = nested_key

    def squash(self, cursor_id: str, rows: list[Any], page_size: int) -> list[dict[str, Any]]:
        """Group one page of rows and advance the cursor by the rows consumed.

        Args:
            cursor_id: Cursor of the query this page belongs to
            rows: Raw rows exactly as returned by the service
            page_size: The ``$top`` the page was requested with

        Returns:
            One record per emitted group, with the nested per-row list

        Raises:
            NotFoundError: If cursor_id is unknown
            ProtocolError: If a row lacks the join key
        """
        # Fail on an unknown cursor before doing any work
        self.registry.received(cursor_id)
        groups = group_rows(rows, self.join_key)

        withheld: Any = None
        if groups and len(rows) >= page_size:
            tail = trailing_run(rows, self.join_key)
            if tail == len(rows):
                # Withholding would make no progress; accept the split
                log_group_split_forced(
                    cursor_id=cursor_id, join_key=str(groups[0].join_key), rows=len(rows)
                )
            else:
                # Only the trailing run is held back; every earlier row is consumed
                withheld = rows[-1][self.join_key]
                groups = group_rows(rows[: len(rows) - tail], self.join_key)
                if any(group.join_key == withheld for group in groups):
                    log_group_not_contiguous(
                        cursor_id=cursor_id, join_key=str(withheld), rows=len(rows)
                    )

        out: list[dict[str, Any]] = []
        consumed = 0
        for group in groups:
            group.reduce()
            consumed += len(group.member_rows)
            out.append(group.to_record(self.nested_key))

        self.registry.advance(cursor_id, consumed)
        log_rows_squashed(
            cursor_id=cursor_id,
            groups=len(out),
            rows_consumed=consumed,
            withheld=str(withheld) if withheld is not None else None,
        )
        return out
