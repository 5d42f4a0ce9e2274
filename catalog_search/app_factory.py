"""Wire the engine components together for one browsing session."""
from __future__ import annotations

from typing import Optional

from .catalog.store import RecordStore
from .config.settings import SearchSettings
from .query.controller import QueryController
from .query.debounce import Clock
from .query.history import JsonFileStorage, KeyValueStorage, SearchHistory
from .search.engine import SearchEngine
from .search.filters import FilterEngine
from .views.directives import DirectiveChannel
from .views.synchronizer import ViewSynchronizer


def create_controller(
    store: RecordStore,
    *,
    settings: Optional[SearchSettings] = None,
    storage: Optional[KeyValueStorage] = None,
    channel: Optional[DirectiveChannel] = None,
    clock: Optional[Clock] = None,
) -> QueryController:
    """Build engine, filters, history and synchronizer around ``store``.

    History goes to ``settings.history_path`` unless another storage is given.
    """
    settings = settings or SearchSettings.from_env()
    if storage is None:
        storage = JsonFileStorage(settings.history_path)
    engine = SearchEngine(store, settings=settings)
    filters = FilterEngine(store, fallback_language=settings.fallback_language)
    synchronizer = ViewSynchronizer(store, channel)
    history = SearchHistory(storage, capacity=settings.history_capacity)
    return QueryController(engine, filters, synchronizer, history=history, settings=settings, clock=clock)


__all__ = ["create_controller"]
