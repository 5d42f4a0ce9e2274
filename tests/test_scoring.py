from __future__ import annotations

import pytest

from catalog_search.catalog import RecordStore
from catalog_search.config import ScoringWeights
from catalog_search.errors import ScoringError
from catalog_search.search import Scorer, fuzzy_similarity, is_subsequence

WEIGHTS = ScoringWeights()


def _store(*records, categories=None) -> RecordStore:
    return RecordStore.from_payload(
        {
            "categories": categories or [{"id": "core", "name": "Core Features"}],
            "records": list(records),
        }
    )


def _record(record_id: str, title: str, **extra):
    data = {"id": record_id, "category": "core", "title": {"en": title}}
    data.update(extra)
    return data


def test_is_subsequence() -> None:
    assert is_subsequence("scd", "slash commands")
    assert is_subsequence("", "anything")
    assert not is_subsequence("dcs", "slash commands")


def test_fuzzy_similarity_tiers() -> None:
    assert fuzzy_similarity("slash", "slash", WEIGHTS) == 1.0
    assert fuzzy_similarity("sla", "slash", WEIGHTS) == pytest.approx(0.8 - (2 / 5) * 0.3)
    assert fuzzy_similarity("scd", "slash commands", WEIGHTS) == pytest.approx(0.6 * 3 / 14)
    assert fuzzy_similarity("xyz", "slash", WEIGHTS) == 0.0
    assert fuzzy_similarity("", "slash", WEIGHTS) == 0.0


@pytest.mark.parametrize(
    "substring, subsequence, field",
    [
        ("ab", "ac", "ab" + "x" * 200 + "c"),
        ("abcdefghij", "abcdefghik", "abcdefghijk"),
        ("com", "cmd", "background commands"),
    ],
)
def test_substring_always_beats_subsequence_in_same_field(substring, subsequence, field) -> None:
    assert substring in field and subsequence not in field
    assert fuzzy_similarity(substring, field, WEIGHTS) > fuzzy_similarity(subsequence, field, WEIGHTS)


def test_title_and_exact_title_weights_are_additive() -> None:
    store = _store(_record("exact", "Hooks"), _record("partial", "Hooks System"))
    scorer = Scorer(store)
    exact = scorer.score(store.get("exact"), "hooks", "en")
    partial = scorer.score(store.get("partial"), "hooks", "en")
    assert exact == pytest.approx(100 + 50 + 1.0 * 30)
    assert partial == pytest.approx(100 + (0.8 - (7 / 12) * 0.3) * 30)
    assert exact > partial


def test_every_matching_field_contributes() -> None:
    record = _record(
        "r",
        "Alpha",
        description={"en": "beta gamma"},
        tags=["gamma", "gamma-ray"],
        examples=["run gamma"],
        details={"en": "gamma details"},
    )
    store = _store(record, categories=[{"id": "core", "name": "Gamma Category"}])
    score = Scorer(store, ScoringWeights(fuzzy_threshold=1000.0)).score(store.get("r"), "gamma", "en")
    expected = 80 + (60 + 20) + 60 + 40 + 20 + 30
    assert score == pytest.approx(expected)


def test_query_is_case_insensitive_and_trimmed() -> None:
    store = _store(_record("r", "Slash Commands"))
    scorer = Scorer(store)
    assert scorer.score(store.get("r"), "  SLASH ", "en") == scorer.score(store.get("r"), "slash", "en")


def test_missing_language_falls_back_to_english() -> None:
    store = _store(_record("r", "Slash Commands", description={"en": "typing a slash"}))
    scorer = Scorer(store)
    assert scorer.score(store.get("r"), "slash", "zh") == scorer.score(store.get("r"), "slash", "en")


def test_localized_text_is_used_when_present() -> None:
    store = _store({"id": "r", "category": "core", "title": {"en": "Slash Commands", "zh": "斜杠命令"}})
    scorer = Scorer(store)
    assert scorer.score(store.get("r"), "斜杠", "zh") > 0
    assert scorer.score(store.get("r"), "斜杠", "en") == 0


def test_weak_fuzzy_credit_below_threshold_is_discarded() -> None:
    store = _store(_record("git", "Git Integration"))
    record = store.get("git")
    assert Scorer(store).score(record, "gtn", "en") == 0.0
    assert Scorer(store, ScoringWeights(fuzzy_threshold=0.0)).score(record, "gtn", "en") == pytest.approx(
        0.6 * 3 / 15 * 30
    )


def test_malformed_record_raises_scoring_error(store) -> None:
    broken = store.get("hooks").model_copy(update={"tags": None})
    with pytest.raises(ScoringError) as excinfo:
        Scorer(store).score(broken, "hooks", "en")
    assert excinfo.value.record_id == "hooks"
