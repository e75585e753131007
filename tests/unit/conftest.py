"""Shared fixtures for unit tests."""

from __future__ import annotations

import re
from typing import Any

import pytest

_FILTER_RE = re.compile(r"^(\w+) eq '(.*)'$")


class FakeSession:
    """In-memory stand-in for SalesPadSession.

    Serves ``{"Items": [...]}`` pages from per-path row lists, honouring
    ``$top``, ``$skip`` and simple ``Field eq 'value'`` filters.
    """

    def __init__(self, collections: dict[str, list[Any]] | None = None, page_size: int = 3):
        self.collections = collections or {}
        self.page_size = page_size
        self.calls: list[dict[str, Any]] = []
        self.failures: list[Exception] = []
        self.post_reply: Any = None
        self.replies: dict[str, Any] = {}

    async def call(
        self,
        path: str,
        method: str = "GET",
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        json: Any = None,
    ) -> Any:
        params = dict(params or {})
        self.calls.append({"path": path, "method": method, "params": params, "json": json})
        if self.failures:
            raise self.failures.pop(0)
        if method == "POST":
            return self.post_reply
        if path in self.replies:
            return self.replies[path]

        rows = self.collections.get(path, [])
        query = params.get("$filter")
        if query:
            match = _FILTER_RE.match(query)
            assert match, f"unsupported filter {query!r}"
            field, value = match.group(1), match.group(2).replace("''", "'")
            rows = [row for row in rows if str(row.get(field, "")).strip() == value]
        skip = int(params.get("$skip", 0))
        top = int(params.get("$top", len(rows) or 1))
        return {"Items": rows[skip : skip + top]}

    def gets(self, path: str | None = None) -> list[dict[str, Any]]:
        return [
            c for c in self.calls if c["method"] == "GET" and (path is None or c["path"] == path)
        ]


@pytest.fixture
def fake_session():
    """Factory for FakeSession instances."""

    def _make(collections: dict[str, list[Any]] | None = None, page_size: int = 3) -> FakeSession:
        return FakeSession(collections, page_size=page_size)

    return _make
