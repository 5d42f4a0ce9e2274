"""In-memory record store loaded once per session."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from ..config.settings import FALLBACK_LANGUAGE
from ..errors import CatalogLoadError, NotReadyError
from ..utils import get_logger
from .models import CatalogPayload, Category, Record, localized
from .repository import CatalogRepository, parse_payload

LOGGER = get_logger("catalog.store")

_MISSING_PRIORITY = 999
_NEVER = datetime.min.replace(tzinfo=timezone.utc)


class RecordStore:
    """Holds the immutable catalog and answers lookups by id or category.

    The store is empty and not ready until :meth:`load` succeeds. A failed
    load leaves it not ready; there is no partially loaded state.
    """

    def __init__(self) -> None:
        self._records: List[Record] = []
        self._categories: List[Category] = []
        self._by_id: Dict[str, Record] = {}
        self._positions: Dict[str, int] = {}
        self._categories_by_id: Dict[str, Category] = {}
        self._ready = False

    @classmethod
    def from_payload(cls, data: object) -> "RecordStore":
        store = cls()
        payload = data if isinstance(data, CatalogPayload) else parse_payload(data)
        store._install(payload)
        return store

    async def load(self, repository: CatalogRepository) -> None:
        if self._ready:
            return
        try:
            payload = await repository.fetch()
        except CatalogLoadError:
            LOGGER.error("Catalog load failed; search stays disabled")
            raise
        except Exception as exc:
            LOGGER.error("Catalog load failed: %s", exc)
            raise CatalogLoadError(str(exc)) from exc
        self._install(payload)

    def _install(self, payload: CatalogPayload) -> None:
        self._records = list(payload.records)
        self._categories = sorted(payload.categories, key=lambda category: category.order)
        self._by_id = {record.id: record for record in self._records}
        self._positions = {record.id: index for index, record in enumerate(self._records)}
        self._categories_by_id = {category.id: category for category in self._categories}
        self._ready = True

    @property
    def ready(self) -> bool:
        return self._ready

    def _require_ready(self) -> None:
        if not self._ready:
            raise NotReadyError()

    def __len__(self) -> int:
        return len(self._records)

    def records(self) -> List[Record]:
        self._require_ready()
        return list(self._records)

    def categories(self) -> List[Category]:
        """Categories in presentation order."""
        self._require_ready()
        return list(self._categories)

    def get(self, record_id: str) -> Optional[Record]:
        self._require_ready()
        return self._by_id.get(record_id)

    def category(self, category_id: str) -> Optional[Category]:
        self._require_ready()
        return self._categories_by_id.get(category_id)

    def by_category(self, category_id: str) -> List[Record]:
        self._require_ready()
        return [record for record in self._records if record.category == category_id]

    def position(self, record_id: str) -> int:
        """Index of the record in catalog order (used as the ranking tiebreak)."""
        self._require_ready()
        return self._positions[record_id]

    def navigation(self, category_id: Optional[str] = None) -> List[Record]:
        """Records of one category (or all) in navigation order: priority, then catalog order.

        A missing or zero priority sorts last.
        """
        records: Sequence[Record] = self.by_category(category_id) if category_id else self.records()
        return sorted(records, key=lambda record: record.priority or _MISSING_PRIORITY)

    def navigation_structure(self, language: str, fallback: str = FALLBACK_LANGUAGE) -> List[Dict[str, Any]]:
        """Sidebar data: non-empty categories with their records' titles and reading info."""
        structure: List[Dict[str, Any]] = []
        for category in self.categories():
            records = self.navigation(category.id)
            if not records:
                continue
            structure.append(
                {
                    "category": {
                        "id": category.id,
                        "name": category.name_for(language, fallback),
                        "icon": category.icon,
                        "description": localized(category.description, language, fallback),
                    },
                    "records": [
                        {
                            "id": record.id,
                            "title": record.title_for(language, fallback),
                            "difficulty": record.difficulty,
                            "reading_time": record.reading_time,
                        }
                        for record in records
                    ],
                }
            )
        return structure

    def recent(self, limit: int = 5) -> List[Record]:
        """Most recently updated records first; undated records go last."""
        ordered = sorted(self.records(), key=lambda record: record.last_updated or _NEVER, reverse=True)
        return ordered[: max(0, limit)]

    def adjacent(self, record_id: str) -> Dict[str, Optional[Record]]:
        """Previous and next record inside the record's category, in navigation order."""
        record = self.get(record_id)
        if record is None:
            return {"prev": None, "next": None}
        siblings = self.navigation(record.category)
        index = next(i for i, item in enumerate(siblings) if item.id == record_id)
        return {
            "prev": siblings[index - 1] if index > 0 else None,
            "next": siblings[index + 1] if index < len(siblings) - 1 else None,
        }


__all__ = ["RecordStore"]
