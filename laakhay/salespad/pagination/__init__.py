"""Paginated traversal and cross-page aggregation.

This package turns SalesPad's offset-only pagination into lazy sequences
that fetch further pages on demand.

Architecture:
    The pagination layer consists of:
    - sequence.py: PagedSequence and its page sources (REST and loader modes)
    - materializers.py: Turning raw rows into entities or transformed values
    - cursors.py: Per-query offset tracking (CursorRegistry)
    - squash.py: Regrouping one-row-per-location results into entities
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .cursors import CursorRegistry, CursorState
from .materializers import (
    EntityMaterializer,
    Materializer,
    TransformMaterializer,
    as_materializer,
)
from .sequence import (
    DiscardHook,
    EndpointSource,
    LoaderSource,
    PageLoader,
    PagedSequence,
    PageSource,
    extract_items,
    resolve_source,
)
from .squash import RowGroup, RowSquasher, group_rows, trailing_run

__all__ = [
    "CursorRegistry",
    "CursorState",
    "DiscardHook",
    "EndpointSource",
    "EntityMaterializer",
    "LoaderSource",
    "Materializer",
    "PageLoader",
    "PageSource",
    "PagedSequence",
    "RowGroup",
    "RowSquasher",
    "TransformMaterializer",
    "as_materializer",
    "extract_items",
    "group_rows",
    "resolve_source",
    "trailing_run",
]
