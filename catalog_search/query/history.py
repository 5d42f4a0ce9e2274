"""Bounded recency list of past queries with durable storage."""
from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from ..config.settings import HISTORY_STORAGE_KEY
from ..errors import StorageError
from ..utils import get_logger

LOGGER = get_logger("query.history")


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    """Process-local storage; history does not survive the session."""

    def __init__(self) -> None:
        self._values: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileStorage:
    """String values under string keys, kept in one JSON object file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StorageError(f"cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageError:
            data = {}
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"cannot write {self.path}: {exc}") from exc


class SearchHistory:
    """Most-recent-first list of executed queries, without duplicates.

    Storage failures never reach the caller: a broken read yields an empty
    history and a broken write is logged and skipped.
    """

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        *,
        capacity: int = 10,
        key: str = HISTORY_STORAGE_KEY,
    ) -> None:
        self.storage = storage if storage is not None else MemoryStorage()
        self.capacity = max(1, int(capacity))
        self.key = key
        self._items: List[str] = []
        self._counts: Counter = Counter()
        self.load()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def items(self) -> List[str]:
        return list(self._items)

    def load(self) -> List[str]:
        try:
            self._items = self._read()
        except StorageError as exc:
            LOGGER.warning("Failed to load search history: %s", exc)
            self._items = []
        return self.items()

    def _read(self) -> List[str]:
        try:
            raw = self.storage.get(self.key)
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError(str(exc)) from exc
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"corrupt history entry: {exc}") from exc
        if not isinstance(data, list):
            raise StorageError("history entry is not a JSON array")
        items: List[str] = []
        for item in data:
            if isinstance(item, str) and item and item not in items:
                items.append(item)
        return items[: self.capacity]

    def push(self, query: str) -> None:
        query = (query or "").strip()
        if not query:
            return
        self._items = [item for item in self._items if item != query]
        self._items.insert(0, query)
        del self._items[self.capacity :]
        self._counts[query] += 1
        self._save()

    def clear(self) -> None:
        self._items = []
        self._counts.clear()
        self._save()

    def matches(self, term: str, limit: int) -> List[str]:
        needle = (term or "").casefold()
        if not needle or limit <= 0:
            return []
        return [item for item in self._items if needle in item.casefold()][:limit]

    def most_searched(self, limit: int = 5) -> List[Dict[str, object]]:
        """Queries executed most often this session, for diagnostics."""
        return [{"term": term, "count": count} for term, count in self._counts.most_common(limit)]

    def _save(self) -> None:
        try:
            self.storage.set(self.key, json.dumps(self._items, ensure_ascii=False))
        except Exception as exc:  # storage backends may raise anything
            LOGGER.warning("Failed to save search history: %s", exc)


__all__ = ["KeyValueStorage", "MemoryStorage", "JsonFileStorage", "SearchHistory"]
