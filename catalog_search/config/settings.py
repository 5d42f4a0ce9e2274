"""Tunable constants for ranking, suggestions, debounce and history."""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

from .paths import HISTORY_PATH

FALLBACK_LANGUAGE = "en"
HISTORY_STORAGE_KEY = "catalog-search-history"


@dataclass(frozen=True)
class ScoringWeights:
    """Additive per-field weights used by the scorer.

    The values reproduce the heuristic of the showcase site as-is. They are
    configuration, not something the engine adjusts on its own.
    """

    title: float = 100.0
    title_exact: float = 50.0
    description: float = 80.0
    tag: float = 60.0
    tag_exact: float = 20.0
    body: float = 40.0
    details: float = 20.0
    category: float = 30.0

    fuzzy_title: float = 30.0
    fuzzy_description: float = 20.0
    fuzzy_tag: float = 25.0
    fuzzy_threshold: float = 10.0

    fuzzy_contains_base: float = 0.8
    fuzzy_contains_span: float = 0.3
    fuzzy_subsequence_scale: float = 0.6


@dataclass(frozen=True)
class SearchSettings:
    debounce_ms: int = 300
    min_suggest_chars: int = 2
    max_recent_suggestions: int = 3
    max_record_suggestions: int = 5
    max_category_suggestions: int = 2
    max_suggestions: int = 8
    history_capacity: int = 10
    cache_entries: int = 128
    language: str = FALLBACK_LANGUAGE
    fallback_language: str = FALLBACK_LANGUAGE
    history_path: Path = HISTORY_PATH
    weights: ScoringWeights = field(default_factory=ScoringWeights)

    @property
    def debounce_seconds(self) -> float:
        return max(0, self.debounce_ms) / 1000.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SearchSettings":
        """Build settings, overriding defaults from ``CATALOG_SEARCH_*`` variables."""
        env = os.environ if environ is None else environ
        settings = cls()
        overrides = {}
        for attr, var in (
            ("debounce_ms", "CATALOG_SEARCH_DEBOUNCE_MS"),
            ("history_capacity", "CATALOG_SEARCH_HISTORY_SIZE"),
            ("cache_entries", "CATALOG_SEARCH_CACHE_SIZE"),
            ("max_suggestions", "CATALOG_SEARCH_MAX_SUGGESTIONS"),
        ):
            raw = env.get(var)
            if raw is None or not raw.strip():
                continue
            try:
                overrides[attr] = max(0, int(raw))
            except ValueError as exc:
                raise ValueError(f"{var} must be an integer, got {raw!r}") from exc
        language = (env.get("CATALOG_SEARCH_LANGUAGE") or "").strip()
        if language:
            overrides["language"] = language
        history_path = (env.get("CATALOG_SEARCH_HISTORY_PATH") or "").strip()
        if history_path:
            overrides["history_path"] = Path(history_path).expanduser()
        threshold = (env.get("CATALOG_SEARCH_FUZZY_THRESHOLD") or "").strip()
        if threshold:
            try:
                overrides["weights"] = replace(settings.weights, fuzzy_threshold=float(threshold))
            except ValueError as exc:
                raise ValueError(
                    f"CATALOG_SEARCH_FUZZY_THRESHOLD must be a number, got {threshold!r}"
                ) from exc
        return replace(settings, **overrides) if overrides else settings


__all__ = [
    "FALLBACK_LANGUAGE",
    "HISTORY_STORAGE_KEY",
    "ScoringWeights",
    "SearchSettings",
]
