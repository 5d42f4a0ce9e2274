"""Suggestion generation for the live search box."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from ..catalog.models import Record
from ..catalog.store import RecordStore
from ..config.settings import SearchSettings
from .history import SearchHistory

_SUBTITLE_CHARS = 60


class SuggestionKind(str, Enum):
    RECENT = "recent"
    RECORD = "record"
    CATEGORY = "category"
    RESULT = "result"


@dataclass(frozen=True)
class Suggestion:
    """One entry of the suggestion dropdown and the action it triggers.

    ``RECENT`` re-runs ``query``; ``RECORD`` and ``RESULT`` jump to
    ``record_id``; ``CATEGORY`` switches the category filter to
    ``category_id``.
    """

    kind: SuggestionKind
    text: str
    icon: str = ""
    subtitle: str = ""
    query: Optional[str] = None
    record_id: Optional[str] = None
    category_id: Optional[str] = None


class SuggestionBuilder:
    def __init__(
        self,
        store: RecordStore,
        history: SearchHistory,
        settings: Optional[SearchSettings] = None,
    ) -> None:
        self.store = store
        self.history = history
        self.settings = settings or SearchSettings()

    def build(self, query: str, language: str) -> List[Suggestion]:
        """History, title and category matches for ``query``, capped per source and overall."""
        s = self.settings
        term = (query or "").strip().casefold()
        if len(term) < s.min_suggest_chars or not self.store.ready:
            return []
        fallback = s.fallback_language

        suggestions: List[Suggestion] = [
            Suggestion(SuggestionKind.RECENT, text=item, icon="🕒", query=item)
            for item in self.history.matches(term, s.max_recent_suggestions)
        ]

        titles = []
        for record in self.store.records():
            title = record.title_for(language, fallback)
            if term in title.casefold():
                titles.append(Suggestion(SuggestionKind.RECORD, text=title, icon="📄", record_id=record.id))
                if len(titles) >= s.max_record_suggestions:
                    break
        suggestions.extend(titles)

        categories = []
        for category in self.store.categories():
            name = category.name_for(language, fallback)
            if term in name.casefold():
                categories.append(
                    Suggestion(
                        SuggestionKind.CATEGORY,
                        text=f"Browse {name}",
                        icon=category.icon or "📁",
                        category_id=category.id,
                    )
                )
                if len(categories) >= s.max_category_suggestions:
                    break
        suggestions.extend(categories)

        return suggestions[: s.max_suggestions]

    def for_results(self, results: Sequence[Record], language: str) -> List[Suggestion]:
        """Dropdown entries listing the top results of a resolved search."""
        fallback = self.settings.fallback_language
        items = []
        for record in list(results)[: self.settings.max_suggestions]:
            description = record.description_for(language, fallback)
            subtitle = description[:_SUBTITLE_CHARS] + "..." if len(description) > _SUBTITLE_CHARS else description
            items.append(
                Suggestion(
                    SuggestionKind.RESULT,
                    text=record.title_for(language, fallback),
                    icon="🔍",
                    subtitle=subtitle,
                    record_id=record.id,
                )
            )
        return items


def completion_terms(store: RecordStore, query: str, limit: int = 5, *, exclude_exact: bool = True) -> List[str]:
    """Autocomplete terms: titles in any language and tags containing ``query``.

    Shorter terms come first; the query itself is left out.
    """
    term = (query or "").strip().casefold()
    if len(term) < 2:
        return []
    seen: List[str] = []
    for record in store.records():
        for title in record.title.values():
            if title and term in title.casefold() and title not in seen:
                seen.append(title)
    for record in store.records():
        for tag in record.tags:
            if term in tag.casefold() and tag not in seen:
                seen.append(tag)
    if exclude_exact:
        seen = [item for item in seen if item.casefold() != term]
    return sorted(seen, key=len)[:limit]


__all__ = ["SuggestionKind", "Suggestion", "SuggestionBuilder", "completion_terms"]
