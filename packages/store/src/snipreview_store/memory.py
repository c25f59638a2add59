"""In-memory store — used by tests and by `store: memory` in .snipreview.yml.

Nothing survives the process, which makes it the store to reach for when a
review should be shown but not kept.
"""

from __future__ import annotations

from snipreview_store.base import BaseStore


class MemoryStore(BaseStore):
    """Keeps the raw key-value pairs in a dict."""

    def __init__(self, initial: dict[str, str] | None = None):
        super().__init__()
        self._data: dict[str, str] = dict(initial or {})

    def _get(self, key: str) -> str | None:
        return self._data.get(key)

    def _put(self, key: str, value: str) -> None:
        self._data[key] = value
