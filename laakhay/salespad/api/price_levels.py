"""Cached price level lookup.

Price levels are loaded once per client and are not expected to change
during an API session. Level ids are matched case-insensitively.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..config import PRICE_LEVEL_PATH
from ..core.exceptions import ProtocolError
from ..models import PriceLevel
from ..session import SalesPadSession
from ..pagination import extract_items


def _to_price_level(row: Any) -> PriceLevel:
    if not isinstance(row, Mapping) or "Price_Level" not in row:
        raise ProtocolError(f"Unexpected price level record: {row!r}")
    return PriceLevel(name=row["Price_Level"], description=row.get("Description") or "")


class PriceLevelCatalog:
    def __init__(self, session: SalesPadSession) -> None:
        self.session = session
        self._levels: dict[str, PriceLevel] | None = None

    async def _load(self) -> dict[str, PriceLevel]:
        if self._levels is None:
            body = await self.session.call(PRICE_LEVEL_PATH, "GET", {})
            rows = extract_items(body, PRICE_LEVEL_PATH)
            levels = [_to_price_level(row) for row in rows]
            self._levels = {level.name.lower(): level for level in levels}
        return self._levels

    async def get(self, level_id: str) -> PriceLevel | None:
        """Return the named price level, or None if it is not defined."""
        levels = await self._load()
        return levels.get(level_id.strip().lower())

    async def all(self) -> list[PriceLevel]:
        return list((await self._load()).values())

    def clear(self) -> None:
        """Drop the cache so the next lookup reloads from the service."""
        self._levels = None
