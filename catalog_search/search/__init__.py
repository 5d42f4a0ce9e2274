"""Scoring, ranking, caching and facet filtering."""

from .cache import QueryResultCache
from .engine import CacheKey, SearchEngine, SearchResult
from .filters import ALL, SORT_KEYS, FilterEngine, FilterState
from .scoring import Scorer, fuzzy_similarity, is_subsequence, normalize

__all__ = [
    "QueryResultCache",
    "CacheKey",
    "SearchEngine",
    "SearchResult",
    "ALL",
    "SORT_KEYS",
    "FilterEngine",
    "FilterState",
    "Scorer",
    "fuzzy_similarity",
    "is_subsequence",
    "normalize",
]
