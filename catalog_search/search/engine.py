"""Search engine: scores the whole store, ranks and caches per (query, language)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..catalog.models import Record
from ..catalog.store import RecordStore
from ..config.settings import SearchSettings
from ..errors import NotReadyError, ScoringError
from ..utils import get_logger
from .cache import QueryResultCache
from .scoring import Scorer, normalize

LOGGER = get_logger("search.engine")

CacheKey = Tuple[str, str]


@dataclass(frozen=True)
class SearchResult:
    """A record paired with its relevance for one query. Never stored on the record."""

    record: Record
    score: float

    @property
    def id(self) -> str:
        return self.record.id


class SearchEngine:
    def __init__(
        self,
        store: RecordStore,
        scorer: Optional[Scorer] = None,
        *,
        settings: Optional[SearchSettings] = None,
    ) -> None:
        self.settings = settings or SearchSettings()
        self.store = store
        self.scorer = scorer or Scorer(
            store,
            self.settings.weights,
            fallback_language=self.settings.fallback_language,
        )
        self.language = self.settings.language
        self._cache = QueryResultCache(self.settings.cache_entries)

    def set_language(self, language: str) -> None:
        """Switch the active language; cached rankings depend on localized text."""
        if language == self.language:
            return
        LOGGER.info("Language changed %s -> %s; clearing %d cached queries", self.language, language, len(self._cache))
        self.language = language
        self._cache.clear()

    def search(self, query: str, language: Optional[str] = None) -> List[Record]:
        """Ranked records for ``query``; blank queries return the whole store in order."""
        if not self.store.ready:
            raise NotReadyError()
        if not normalize(query):
            return self.store.records()
        return [result.record for result in self.rank(query, language)]

    def rank(self, query: str, language: Optional[str] = None) -> List[SearchResult]:
        if not self.store.ready:
            raise NotReadyError()
        language = language or self.language
        term = normalize(query)
        if not term:
            return [SearchResult(record, 0.0) for record in self.store.records()]

        cache_key: CacheKey = (term, language)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return list(cached)

        ranked = self._rank_uncached(term, language)
        self._cache.set(cache_key, ranked)
        return list(ranked)

    def _rank_uncached(self, term: str, language: str) -> Tuple[SearchResult, ...]:
        records = self.store.records()
        if not records:
            return ()
        scores = np.fromiter(
            (self._safe_score(record, term, language) for record in records),
            dtype=np.float64,
            count=len(records),
        )
        matched = np.flatnonzero(scores > 0.0)
        if matched.size == 0:
            return ()
        # lexsort: last key is primary -> score descending, then catalog position.
        order = matched[np.lexsort((matched, -scores[matched]))]
        return tuple(SearchResult(records[int(i)], float(scores[int(i)])) for i in order)

    def _safe_score(self, record: Record, term: str, language: str) -> float:
        try:
            return max(0.0, float(self.scorer.score(record, term, language)))
        except ScoringError as exc:
            LOGGER.warning("Skipping record during search: %s", exc)
            return 0.0

    def cache_stats(self):
        return self._cache.stats()

    def clear_cache(self) -> None:
        self._cache.clear()


__all__ = ["SearchEngine", "SearchResult", "CacheKey"]
