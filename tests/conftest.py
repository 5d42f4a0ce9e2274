"""Pytest configuration helpers."""
from __future__ import annotations

import copy
import sys
from pathlib import Path
from typing import Any, Dict, Generator

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
root_str = str(PROJECT_ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from catalog_search.catalog import RecordStore
from catalog_search.config import SearchSettings
from catalog_search.query import MemoryStorage, QueryController, SearchHistory
from catalog_search.search import FilterEngine, SearchEngine
from catalog_search.views import DirectiveChannel, ViewSynchronizer

SAMPLE_CATALOG: Dict[str, Any] = {
    "categories": [
        {"id": "interactive", "name": {"en": "Interactive", "zh": "交互"}, "order": 2, "icon": "⌨️"},
        {"id": "core", "name": {"en": "Core Features", "zh": "核心功能"}, "order": 1},
        {"id": "agents", "name": {"en": "Agents", "zh": "代理"}, "order": 3},
        {"id": "deployment", "name": {"en": "Deployment"}, "order": 4},
    ],
    "features": [
        {
            "id": "slash-commands",
            "category": "interactive",
            "status": "stable",
            "title": {"en": "Slash Commands", "zh": "斜杠命令"},
            "description": {"en": "Run built-in commands by typing a slash"},
            "tags": ["commands", "cli"],
            "examples": ["/help", "/clear"],
            "version": "1.0",
            "priority": 2,
        },
        {
            "id": "background-commands",
            "category": "interactive",
            "status": "beta",
            "title": {"en": "Background Commands"},
            "description": {"en": "Run long tasks without blocking"},
            "tags": ["commands", "async"],
            "version": "1.2",
            "priority": 1,
        },
        {
            "id": "sub-agents",
            "category": "agents",
            "status": "new",
            "title": {"en": "Sub-agents", "zh": "子代理"},
            "description": {"en": "Delegate work to specialised helpers"},
            "tags": ["agents"],
            "version": "2.0",
        },
        {
            "id": "git-integration",
            "category": "core",
            "status": "stable",
            "title": {"en": "Git Integration"},
            "description": {"en": "Commit, branch and review from the terminal"},
            "details": {"en": "Works with any git remote"},
            "tags": ["git", "vcs"],
            "version": "1.0",
        },
        {
            "id": "hooks",
            "category": "core",
            "status": "new",
            "title": {"en": "Hooks System"},
            "description": {"en": "Run shell commands on lifecycle events"},
            "tags": ["automation"],
            "version": "2.1",
        },
    ],
}


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    for name in (
        "CATALOG_SEARCH_DEBOUNCE_MS",
        "CATALOG_SEARCH_HISTORY_SIZE",
        "CATALOG_SEARCH_CACHE_SIZE",
        "CATALOG_SEARCH_MAX_SUGGESTIONS",
        "CATALOG_SEARCH_LANGUAGE",
        "CATALOG_SEARCH_HISTORY_PATH",
        "CATALOG_SEARCH_FUZZY_THRESHOLD",
        "CATALOG_SEARCH_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def catalog_data() -> Dict[str, Any]:
    return copy.deepcopy(SAMPLE_CATALOG)


@pytest.fixture
def store(catalog_data) -> RecordStore:
    return RecordStore.from_payload(catalog_data)


@pytest.fixture
def settings() -> SearchSettings:
    return SearchSettings()


@pytest.fixture
def engine(store, settings) -> SearchEngine:
    return SearchEngine(store, settings=settings)


@pytest.fixture
def filter_engine(store) -> FilterEngine:
    return FilterEngine(store)


@pytest.fixture
def channel() -> DirectiveChannel:
    return DirectiveChannel()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def controller(store, engine, filter_engine, channel, settings, clock) -> QueryController:
    synchronizer = ViewSynchronizer(store, channel)
    history = SearchHistory(MemoryStorage(), capacity=settings.history_capacity)
    return QueryController(engine, filter_engine, synchronizer, history=history, settings=settings, clock=clock)
