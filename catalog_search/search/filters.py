"""Facet filtering and sort orders applied after search."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..catalog.models import Record, Status
from ..catalog.stats import unique_values
from ..catalog.store import RecordStore
from ..config.settings import FALLBACK_LANGUAGE

ALL = "all"

SORT_RELEVANCE = "relevance"
SORT_NAME = "name"
SORT_CATEGORY = "category"
SORT_STATUS = "status"
SORT_VERSION = "version"
SORT_KEYS: Tuple[str, ...] = (SORT_RELEVANCE, SORT_NAME, SORT_CATEGORY, SORT_STATUS, SORT_VERSION)

_STATUS_RANK: Dict[str, int] = {Status.NEW.value: 0, Status.BETA.value: 1, Status.STABLE.value: 2}
_UNKNOWN_STATUS_RANK = 3


@dataclass(frozen=True)
class FilterState:
    category: str = ALL
    status: str = ALL
    version: str = ALL
    difficulty: str = ALL
    tags: FrozenSet[str] = field(default_factory=frozenset)
    sort: str = SORT_RELEVANCE

    def __post_init__(self) -> None:
        object.__setattr__(self, "category", self.category or ALL)
        object.__setattr__(self, "status", self.status or ALL)
        object.__setattr__(self, "version", self.version or ALL)
        object.__setattr__(self, "difficulty", self.difficulty or ALL)
        object.__setattr__(self, "tags", frozenset(tag for tag in self.tags or () if tag))
        object.__setattr__(self, "sort", (self.sort or SORT_RELEVANCE).strip().lower())

    def is_active(self) -> bool:
        facets = (self.category, self.status, self.version, self.difficulty)
        return any(value != ALL for value in facets) or bool(self.tags)

    def is_default(self) -> bool:
        return not self.is_active() and self.sort == SORT_RELEVANCE

    def matches(self, record: Record) -> bool:
        if not self.is_active():
            return True
        if self.category != ALL and record.category != self.category:
            return False
        if self.status != ALL and _status_value(record) != self.status:
            return False
        if self.version != ALL and (record.version or "") != self.version:
            return False
        if self.difficulty != ALL and (record.difficulty or "") != self.difficulty:
            return False
        if self.tags and not self.tags.intersection(record.tags):
            return False
        return True

    def update(self, **changes: Any) -> "FilterState":
        if "tags" in changes and changes["tags"] is not None:
            changes["tags"] = frozenset(changes["tags"])
        return replace(self, **changes)


def _status_value(record: Record) -> str:
    status = record.status
    return status.value if isinstance(status, Status) else str(status)


class FilterEngine:
    """Narrow a record sequence by facets, then order it.

    Filtering always runs before sorting, and both run over the sequence they
    are given (the search result), never over the whole store.
    """

    def __init__(self, store: Optional[RecordStore] = None, *, fallback_language: str = FALLBACK_LANGUAGE) -> None:
        self.store = store
        self.fallback_language = fallback_language
        self._sorters: Dict[str, Callable[[Sequence[Record], str], List[Record]]] = {
            SORT_NAME: self._sort_by_name,
            SORT_CATEGORY: self._sort_by_category,
            SORT_STATUS: self._sort_by_status,
            SORT_VERSION: self._sort_by_version,
        }

    def apply_filters(self, records: Iterable[Record], filters: FilterState) -> List[Record]:
        return [record for record in records if filters.matches(record)]

    def apply_sort(self, records: Iterable[Record], sort_key: str, language: str = FALLBACK_LANGUAGE) -> List[Record]:
        """Stable sort by ``sort_key``; unknown keys and ``relevance`` keep the input order."""
        items = list(records)
        sorter = self._sorters.get((sort_key or "").strip().lower())
        if sorter is None:
            return items
        return sorter(items, language)

    def narrow(self, records: Iterable[Record], filters: FilterState, language: str = FALLBACK_LANGUAGE) -> List[Record]:
        return self.apply_sort(self.apply_filters(records, filters), filters.sort, language)

    def facet_values(self, field_name: str) -> List[str]:
        if self.store is None:
            return []
        return unique_values(self.store, field_name)

    def _name(self, record: Record, language: str) -> str:
        return record.title_for(language, self.fallback_language).casefold()

    def _sort_by_name(self, records: Sequence[Record], language: str) -> List[Record]:
        return sorted(records, key=lambda record: self._name(record, language))

    def _sort_by_category(self, records: Sequence[Record], language: str) -> List[Record]:
        return sorted(records, key=lambda record: (record.category or "", self._name(record, language)))

    def _sort_by_status(self, records: Sequence[Record], language: str) -> List[Record]:
        return sorted(
            records,
            key=lambda record: (
                _STATUS_RANK.get(_status_value(record), _UNKNOWN_STATUS_RANK),
                self._name(record, language),
            ),
        )

    def _sort_by_version(self, records: Sequence[Record], language: str) -> List[Record]:
        return sorted(records, key=lambda record: record.version or "", reverse=True)


__all__ = [
    "ALL",
    "SORT_KEYS",
    "SORT_RELEVANCE",
    "SORT_NAME",
    "SORT_CATEGORY",
    "SORT_STATUS",
    "SORT_VERSION",
    "FilterState",
    "FilterEngine",
]
