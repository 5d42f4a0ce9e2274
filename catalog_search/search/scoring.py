"""Relevance scoring of one record against one search term."""
from __future__ import annotations

from typing import Iterable, Optional

from ..catalog.models import Record, localized
from ..catalog.store import RecordStore
from ..config.settings import FALLBACK_LANGUAGE, ScoringWeights
from ..errors import ScoringError


def normalize(text: Optional[str]) -> str:
    return (text or "").strip().casefold()


def is_subsequence(needle: str, haystack: str) -> bool:
    """True when every character of ``needle`` occurs in order within ``haystack``."""
    if not needle:
        return True
    position = 0
    for char in haystack:
        if char == needle[position]:
            position += 1
            if position == len(needle):
                return True
    return False


def fuzzy_similarity(needle: str, haystack: str, weights: ScoringWeights) -> float:
    """Similarity in [0, 1]; both arguments must already be normalized.

    Exact match is 1. A substring scores between ``contains_base -
    contains_span`` and ``contains_base`` depending on how much of the field
    it covers. A scattered in-order match scores ``subsequence_scale *
    len(needle) / len(haystack)``, which stays below any substring score.
    """
    if not needle or not haystack:
        return 0.0
    if haystack == needle:
        return 1.0
    if needle in haystack:
        slack = (len(haystack) - len(needle)) / len(haystack)
        return weights.fuzzy_contains_base - slack * weights.fuzzy_contains_span
    if is_subsequence(needle, haystack):
        score = weights.fuzzy_subsequence_scale * len(needle) / len(haystack)
        floor = weights.fuzzy_contains_base - weights.fuzzy_contains_span
        return min(score, floor)
    return 0.0


class Scorer:
    """Compute the additive relevance score of a record.

    Weights come from :class:`ScoringWeights`. A record earns credit from
    every field that matches; ``0`` means the record is not a match.
    """

    def __init__(
        self,
        store: RecordStore,
        weights: Optional[ScoringWeights] = None,
        *,
        fallback_language: str = FALLBACK_LANGUAGE,
    ) -> None:
        self.store = store
        self.weights = weights or ScoringWeights()
        self.fallback_language = fallback_language

    def score(self, record: Record, term: str, language: str) -> float:
        needle = normalize(term)
        if not needle:
            return 0.0
        try:
            return self._score(record, needle, language)
        except (AttributeError, TypeError, ValueError) as exc:
            raise ScoringError(getattr(record, "id", None), str(exc)) from exc

    def _text(self, mapping, language: str) -> str:
        return normalize(localized(mapping, language, self.fallback_language))

    def _score(self, record: Record, needle: str, language: str) -> float:
        w = self.weights
        title = self._text(record.title, language)
        description = self._text(record.description, language)
        details = self._text(record.details, language)
        tags = [normalize(tag) for tag in record.tags]

        score = 0.0
        if needle in title:
            score += w.title
            if title == needle:
                score += w.title_exact
        if needle in description:
            score += w.description
        for tag in tags:
            if needle in tag:
                score += w.tag
                if tag == needle:
                    score += w.tag_exact
        for snippet in self._body(record, language):
            if needle in snippet:
                score += w.body
        if needle in details:
            score += w.details
        category_name = self._category_name(record.category, language)
        if category_name and needle in category_name:
            score += w.category

        score += self._fuzzy(needle, title, description, tags)
        return score

    def _body(self, record: Record, language: str) -> Iterable[str]:
        for example in record.examples:
            yield normalize(example)
        for section in record.sections:
            yield self._text(section, language)

    def _category_name(self, category_id: str, language: str) -> str:
        category = self.store.category(category_id)
        if category is None:
            return ""
        return self._text(category.name, language)

    def _fuzzy(self, needle: str, title: str, description: str, tags: Iterable[str]) -> float:
        w = self.weights
        total = fuzzy_similarity(needle, title, w) * w.fuzzy_title
        total += fuzzy_similarity(needle, description, w) * w.fuzzy_description
        total += max((fuzzy_similarity(needle, tag, w) for tag in tags), default=0.0) * w.fuzzy_tag
        return total if total > w.fuzzy_threshold else 0.0


__all__ = ["Scorer", "fuzzy_similarity", "is_subsequence", "normalize"]
