"""Bounded LRU cache for ranked search results."""
from __future__ import annotations

from collections import OrderedDict
from typing import Any, Dict, Hashable, Optional

from ..utils import get_logger

LOGGER = get_logger("search.cache")


class QueryResultCache:
    """Simple LRU cache for storing ranked results.

    Values are expected to be immutable (tuples), so they are handed out as
    stored rather than copied.
    """

    def __init__(self, max_entries: int = 128) -> None:
        self.max_entries = max(1, int(max_entries or 1))
        self._store: "OrderedDict[Hashable, Any]" = OrderedDict()
        self._stats: Dict[str, int] = {"hits": 0, "misses": 0}

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._store

    def get(self, key: Hashable) -> Optional[Any]:
        try:
            value = self._store.pop(key)
        except KeyError:
            self._record(hit=False)
            return None
        self._store[key] = value
        self._record(hit=True)
        return value

    def set(self, key: Hashable, value: Any) -> None:
        self._store[key] = value
        self._store.move_to_end(key)
        while len(self._store) > self.max_entries:
            self._store.popitem(last=False)

    def clear(self) -> None:
        self._store.clear()

    def stats(self) -> Dict[str, int]:
        return {"size": len(self._store), **self._stats}

    def _record(self, hit: bool) -> None:
        self._stats["hits" if hit else "misses"] += 1
        total = self._stats["hits"] + self._stats["misses"]
        if total % 100 == 0:
            LOGGER.debug(
                "cache stats: hit_rate=%.2f (total=%d, size=%d)",
                self._stats["hits"] / total,
                total,
                len(self._store),
            )


__all__ = ["QueryResultCache"]
