"""Inventory search: items with per-location stock details.

InventorySearch was meant to replace ItemMaster, but it returns one row per
item *and* location. This resource squashes those rows back into one Item
per item number with a ``Locations`` list, and returns the same kind of
PagedSequence the item resource does.

Offset pagination is converted into internal cursors: each search opens a
cursor in the resource's CursorRegistry, and the sequence passes the cursor
id back to ``_load_next_page``. Several different inventory searches can
therefore be consumed side by side.
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import FILTER_PARAM, INVENTORY_SEARCH_PATH, TOP_PARAM
from ..core.exceptions import ConfigurationError
from ..models import EMPTY_FIELD_MAP, FieldMap, Item
from ..pagination import (
    CursorRegistry,
    EntityMaterializer,
    PagedSequence,
    RowSquasher,
    extract_items,
)
from ..session import SalesPadSession

logger = logging.getLogger(__name__)

CURSOR_PARAM = "cursor"


class InventoryResource:
    """Item search with stock levels, backed by ``/api/InventorySearch``."""

    def __init__(
        self,
        session: SalesPadSession,
        field_map: FieldMap = EMPTY_FIELD_MAP,
        registry: CursorRegistry | None = None,
    ) -> None:
        self.session = session
        # An empty registry is falsy; test for None explicitly
        self.registry = registry if registry is not None else CursorRegistry()
        self.squasher = RowSquasher(self.registry)
        self.materializer = EntityMaterializer(Item, field_map)
        # Cursor offset before the page most recently squashed, per cursor
        self._offsets: dict[str, int] = {}

    async def search(self, query: str = "") -> PagedSequence:
        """Run an InventorySearch query (OData string passed to ``$filter``).

        Returns:
            PagedSequence of Item entities, each with a ``Locations`` list
        """
        page_size = self.session.page_size
        parameters: dict[str, Any] = {TOP_PARAM: page_size}
        if query:
            parameters[FILTER_PARAM] = query
        body = await self.session.call(INVENTORY_SEARCH_PATH, "GET", parameters)
        rows = extract_items(body, INVENTORY_SEARCH_PATH)
        if not rows:
            return PagedSequence(None, parameters, self.materializer, [])

        cursor_id = self.registry.open(parameters)
        try:
            records = self.squasher.squash(cursor_id, rows, page_size)
            return PagedSequence(
                self._load_next_page,
                {CURSOR_PARAM: cursor_id},
                self.materializer,
                records,
                on_discard=self._discard_page,
            )
        except Exception:
            self.registry.close(cursor_id)
            raise

    async def _load_next_page(self, parameters: dict[str, Any]) -> list[dict[str, Any]]:
        """Page loader handed to PagedSequence; not for application use."""
        cursor_id = parameters.get(CURSOR_PARAM)
        if cursor_id is None:
            raise ConfigurationError(f"Did not receive a cursor key in {parameters!r}")
        request = self.registry.parameters_for_next_page(cursor_id)
        body = await self.session.call(INVENTORY_SEARCH_PATH, "GET", request)
        rows = extract_items(body, INVENTORY_SEARCH_PATH)
        if not rows:
            self._offsets.pop(cursor_id, None)
            self.registry.close(cursor_id)
            return []
        self._offsets[cursor_id] = self.registry.received(cursor_id)
        return self.squasher.squash(cursor_id, rows, int(request[TOP_PARAM]))

    def _discard_page(self, parameters: dict[str, Any]) -> None:
        """Roll the cursor back when the sequence drops the page just loaded."""
        cursor_id = parameters.get(CURSOR_PARAM)
        before = self._offsets.pop(cursor_id, None)
        if before is not None and cursor_id in self.registry:
            self.registry.restore(cursor_id, before)
            logger.debug(
                "cursor_restored", extra={"cursor_id": cursor_id, "received": before}
            )
