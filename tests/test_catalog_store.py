from __future__ import annotations

import asyncio
import json

import pytest

from catalog_search.catalog import (
    CatalogPayload,
    JsonCatalogRepository,
    Record,
    RecordStore,
    StaticCatalogRepository,
    Status,
)
from catalog_search.errors import CatalogLoadError, NotReadyError


class FailingRepository:
    async def fetch(self):
        raise ConnectionError("network down")


@pytest.mark.smoke
def test_async_load(catalog_data) -> None:
    store = RecordStore()
    assert not store.ready
    asyncio.run(store.load(StaticCatalogRepository(catalog_data)))
    assert store.ready
    assert len(store) == 5
    assert [c.id for c in store.categories()] == ["core", "interactive", "agents", "deployment"]


def test_unloaded_store_refuses_access() -> None:
    store = RecordStore()
    with pytest.raises(NotReadyError):
        store.records()
    with pytest.raises(NotReadyError):
        store.get("hooks")


def test_failed_load_leaves_store_not_ready() -> None:
    store = RecordStore()
    with pytest.raises(CatalogLoadError, match="network down"):
        asyncio.run(store.load(FailingRepository()))
    assert not store.ready


def test_invalid_payload_is_a_load_error(catalog_data) -> None:
    catalog_data["features"][0]["category"] = "missing"
    store = RecordStore()
    with pytest.raises(CatalogLoadError):
        asyncio.run(store.load(StaticCatalogRepository(catalog_data)))
    assert not store.ready


@pytest.mark.parametrize(
    "mutate",
    [
        lambda data: data["features"].append(dict(data["features"][0])),
        lambda data: data["categories"].append({"id": "core", "name": "Again"}),
        lambda data: data["features"][0].update(title={"zh": "只有中文"}),
        lambda data: data["features"][0].update(status="retired"),
    ],
)
def test_payload_validation(catalog_data, mutate) -> None:
    mutate(catalog_data)
    with pytest.raises(CatalogLoadError):
        RecordStore.from_payload(catalog_data)


def test_second_load_is_a_noop(catalog_data) -> None:
    store = RecordStore.from_payload(catalog_data)
    asyncio.run(store.load(FailingRepository()))
    assert store.ready


def test_lookups(store) -> None:
    assert store.get("hooks").title_for("en") == "Hooks System"
    assert store.get("nope") is None
    assert store.category("core").name_for("zh") == "核心功能"
    assert store.category("deployment").name_for("zh") == "Deployment"
    assert [r.id for r in store.by_category("interactive")] == ["slash-commands", "background-commands"]
    assert store.position("git-integration") == 3


def test_navigation_and_adjacent(store) -> None:
    assert [r.id for r in store.navigation("interactive")] == ["background-commands", "slash-commands"]
    neighbours = store.adjacent("background-commands")
    assert neighbours["prev"] is None
    assert neighbours["next"].id == "slash-commands"
    assert store.adjacent("missing") == {"prev": None, "next": None}


def test_record_normalization() -> None:
    record = Record.model_validate(
        {
            "id": 7,
            "category": "core",
            "title": "Plain Title",
            "tags": ["a", "b", "a", " ", "c"],
        }
    )
    assert record.id == "7"
    assert record.title == {"en": "Plain Title"}
    assert record.tags == ("a", "b", "c")
    assert record.status is Status.STABLE
    assert record.description_for("zh") == ""


def test_document_shape_is_flattened() -> None:
    payload = CatalogPayload.model_validate(
        {
            "categories": [{"id": "guides", "name": {"en": "Guides"}}],
            "documents": [
                {
                    "id": "quickstart",
                    "category": "guides",
                    "title": {"en": "Quickstart"},
                    "content": {
                        "overview": {"en": "Install and run"},
                        "sections": [{"title": {"en": "Setup"}, "content": {"en": "pip install things"}}],
                    },
                    "metadata": {"tags": ["setup", "setup", "intro"]},
                }
            ],
        }
    )
    record = payload.records[0]
    assert record.details == {"en": "Install and run"}
    assert record.sections == ({"en": "pip install things"},)
    assert record.tags == ("setup", "intro")


def test_json_repository_with_separate_categories(tmp_path, catalog_data) -> None:
    features = tmp_path / "features.json"
    categories = tmp_path / "categories.json"
    features.write_text(json.dumps({"features": catalog_data["features"]}), encoding="utf-8")
    categories.write_text(json.dumps({"categories": catalog_data["categories"]}), encoding="utf-8")

    store = RecordStore()
    asyncio.run(store.load(JsonCatalogRepository(features, categories)))
    assert len(store) == 5
    assert store.category("agents").name_for("en") == "Agents"


def test_json_repository_missing_file(tmp_path) -> None:
    store = RecordStore()
    with pytest.raises(CatalogLoadError):
        asyncio.run(store.load(JsonCatalogRepository(tmp_path / "absent.json")))
    assert not store.ready


def test_json_repository_bad_json(tmp_path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text("{broken", encoding="utf-8")
    with pytest.raises(CatalogLoadError):
        asyncio.run(JsonCatalogRepository(path).fetch())


@pytest.fixture
def docs_store() -> RecordStore:
    return RecordStore.from_payload(
        {
            "categories": [{"id": "guides", "name": {"en": "Guides", "zh": "指南"}, "icon": "📘"}],
            "documents": [
                {
                    "id": "setup",
                    "category": "guides",
                    "title": {"en": "Setup"},
                    "priority": 0,
                    "metadata": {"difficulty": "beginner", "readingTime": 4},
                    "source": {"lastUpdated": "2024-03-01"},
                },
                {
                    "id": "tuning",
                    "category": "guides",
                    "title": {"en": "Tuning", "zh": "调优"},
                    "priority": 1,
                    "metadata": {"difficulty": "advanced", "readingTime": 12},
                    "source": {"lastUpdated": "2024-05-02T08:30:00Z"},
                },
                {"id": "faq", "category": "guides", "title": {"en": "FAQ"}, "priority": 2},
            ],
        }
    )


def test_document_metadata_is_kept(docs_store) -> None:
    record = docs_store.get("tuning")
    assert record.difficulty == "advanced"
    assert record.reading_time == 12
    assert record.last_updated.year == 2024
    assert docs_store.get("setup").last_updated.tzinfo is not None
    assert docs_store.get("faq").difficulty is None


def test_zero_priority_sorts_with_missing(docs_store) -> None:
    assert [r.id for r in docs_store.navigation("guides")] == ["tuning", "faq", "setup"]


def test_recent_orders_by_update_date(docs_store) -> None:
    assert [r.id for r in docs_store.recent()] == ["tuning", "setup", "faq"]
    assert [r.id for r in docs_store.recent(1)] == ["tuning"]
    assert docs_store.recent(0) == []


def test_navigation_structure(docs_store, store) -> None:
    structure = docs_store.navigation_structure("zh")
    assert structure[0]["category"] == {"id": "guides", "name": "指南", "icon": "📘", "description": ""}
    assert structure[0]["records"][0] == {
        "id": "tuning",
        "title": "调优",
        "difficulty": "advanced",
        "reading_time": 12,
    }
    assert [group["category"]["id"] for group in store.navigation_structure("en")] == [
        "core",
        "interactive",
        "agents",
    ]
