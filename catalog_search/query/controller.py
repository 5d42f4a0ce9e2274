"""Live search box state machine: debounce, suggestions, keyboard, history."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from ..catalog.models import Record
from ..config.settings import SearchSettings
from ..search.engine import SearchEngine
from ..search.filters import FilterEngine, FilterState
from ..utils import get_logger
from ..views.directives import Directive, Select, ShowResults
from ..views.synchronizer import ViewSynchronizer
from .debounce import Clock, DebounceSlot
from .history import SearchHistory
from .suggestions import Suggestion, SuggestionBuilder, SuggestionKind

LOGGER = get_logger("query.controller")

KEY_DOWN = "ArrowDown"
KEY_UP = "ArrowUp"
KEY_ENTER = "Enter"
KEY_ESCAPE = "Escape"


class QueryPhase(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVED = "resolved"


class QueryController:
    """Owns the text box: what was typed, what is scheduled, what is suggested.

    Keystrokes go through :meth:`input`. Each one replaces the pending
    debounced search; the host loop calls :meth:`run_pending` to fire it once
    the input has been quiet for the configured delay. Results flow through
    the filter engine and out to the view synchronizer.
    """

    def __init__(
        self,
        engine: SearchEngine,
        filters: FilterEngine,
        synchronizer: ViewSynchronizer,
        *,
        history: Optional[SearchHistory] = None,
        settings: Optional[SearchSettings] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.settings = settings or engine.settings
        self.engine = engine
        self.filters = filters
        self.synchronizer = synchronizer
        self.history = history if history is not None else SearchHistory(capacity=self.settings.history_capacity)
        self.suggester = SuggestionBuilder(engine.store, self.history, self.settings)
        self.debounce = DebounceSlot(self.settings.debounce_seconds, clock=clock)

        self.text = ""
        self.phase = QueryPhase.IDLE
        self.filter_state = FilterState()
        self.suggestions: List[Suggestion] = []
        self.highlighted = -1
        self.results: List[Record] = []
        self.last_query = ""

    @property
    def language(self) -> str:
        return self.engine.language

    @property
    def suggestions_visible(self) -> bool:
        return bool(self.suggestions)

    # ------------------------------------------------------------------
    # Text input
    # ------------------------------------------------------------------
    def input(self, text: str, *, now: Optional[float] = None) -> None:
        self.text = text or ""
        query = self.text.strip()
        if not query:
            self.debounce.cancel()
            self.phase = QueryPhase.IDLE
            self._close_suggestions()
            self._show_all()
            return

        self.debounce.schedule(lambda: self._execute(query, direct=False), now=now)
        self.phase = QueryPhase.PENDING

        if len(query) >= self.settings.min_suggest_chars:
            self._publish_suggestions(self.suggester.build(query, self.language))
        elif self.suggestions:
            self._close_suggestions()

    def run_pending(self, *, now: Optional[float] = None) -> bool:
        return self.debounce.run_pending(now=now)

    def flush(self) -> bool:
        return self.debounce.flush()

    def submit(self) -> Optional[Directive]:
        """Search the current text right away, superseding any pending search."""
        self.debounce.cancel()
        query = self.text.strip()
        if not query:
            self.phase = QueryPhase.IDLE
            return self._show_all()
        return self._execute(query, direct=True)

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------
    def handle_key(self, key: str) -> Optional[Directive]:
        if key == KEY_DOWN:
            self.navigate(1)
        elif key == KEY_UP:
            self.navigate(-1)
        elif key == KEY_ENTER:
            if 0 <= self.highlighted < len(self.suggestions):
                return self.activate(self.highlighted)
            return self.submit()
        elif key == KEY_ESCAPE:
            return self.escape()
        return None

    def navigate(self, step: int) -> int:
        """Move the highlight by ``step``, wrapping at both ends."""
        count = len(self.suggestions)
        if count == 0:
            self.highlighted = -1
            return -1
        if self.highlighted < 0:
            self.highlighted = 0 if step > 0 else count - 1
        else:
            self.highlighted = (self.highlighted + step) % count
        self.synchronizer.show_suggestions(self.suggestions, self.highlighted)
        return self.highlighted

    def activate(self, index: Optional[int] = None) -> Optional[Directive]:
        position = self.highlighted if index is None else index
        if not 0 <= position < len(self.suggestions):
            return None
        suggestion = self.suggestions[position]
        self._close_suggestions()

        if suggestion.kind is SuggestionKind.RECENT and suggestion.query:
            self.debounce.cancel()
            self.text = suggestion.query
            return self._execute(suggestion.query, direct=True)

        self._reset_text()
        if suggestion.kind is SuggestionKind.CATEGORY and suggestion.category_id:
            return self.set_filters(category=suggestion.category_id)
        if suggestion.record_id:
            return self.synchronizer.select(suggestion.record_id)
        return None

    def escape(self) -> Directive:
        """Clear the text and close suggestions; facet selections stay."""
        self._reset_text()
        self._close_suggestions()
        return self._show_all()

    def clear(self) -> Directive:
        """Reset text, pending search, suggestions and every facet selection."""
        self.filter_state = FilterState()
        return self.escape()

    # ------------------------------------------------------------------
    # Facets and language
    # ------------------------------------------------------------------
    def set_filters(self, **changes: Any) -> Directive:
        self.filter_state = self.filter_state.update(**changes)
        return self._reproject()

    def reset_filters(self) -> Directive:
        self.filter_state = FilterState()
        return self._reproject()

    def set_language(self, language: str) -> Directive:
        self.engine.set_language(language)
        query = self.text.strip()
        if self.suggestions and len(query) >= self.settings.min_suggest_chars:
            self._publish_suggestions(self.suggester.build(query, self.language))
        return self._reproject()

    def stats(self) -> Dict[str, Any]:
        return {
            "cache_size": self.engine.cache_stats()["size"],
            "history_size": len(self.history),
            "most_searched": self.history.most_searched(),
        }

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _execute(self, query: str, *, direct: bool) -> Directive:
        ranked = self.engine.search(query, self.language)
        narrowed = self.filters.narrow(ranked, self.filter_state, self.language)
        self.history.push(query)
        self.results = narrowed
        self.last_query = query
        self.phase = QueryPhase.RESOLVED
        LOGGER.debug("Resolved %r: %d ranked, %d after filters", query, len(ranked), len(narrowed))

        directive = self.synchronizer.project(narrowed, query=query, direct=direct)
        if isinstance(directive, ShowResults):
            self._publish_suggestions(self.suggester.for_results(narrowed, self.language))
        elif isinstance(directive, Select) or self.suggestions:
            self._close_suggestions()
        return directive

    def _reproject(self) -> Directive:
        query = self.text.strip()
        if self.phase is QueryPhase.PENDING and query:
            # run the typed query now rather than narrowing a stale result
            self.debounce.cancel()
            return self._execute(query, direct=False)
        if self.phase is QueryPhase.RESOLVED and self.last_query:
            ranked = self.engine.search(self.last_query, self.language)
            self.results = self.filters.narrow(ranked, self.filter_state, self.language)
            return self.synchronizer.project(self.results, query=self.last_query)
        return self._show_all()

    def _show_all(self) -> Directive:
        records = self.engine.search("", self.language)
        self.results = self.filters.narrow(records, self.filter_state, self.language)
        return self.synchronizer.project(self.results, query="")

    def _reset_text(self) -> None:
        self.debounce.cancel()
        self.text = ""
        self.last_query = ""
        self.phase = QueryPhase.IDLE

    def _publish_suggestions(self, suggestions: List[Suggestion]) -> None:
        self.suggestions = list(suggestions)
        self.highlighted = -1
        if self.suggestions:
            self.synchronizer.show_suggestions(self.suggestions)
        else:
            self.synchronizer.close_suggestions()

    def _close_suggestions(self) -> None:
        had_suggestions = bool(self.suggestions)
        self.suggestions = []
        self.highlighted = -1
        if had_suggestions:
            self.synchronizer.close_suggestions()


__all__ = ["QueryController", "QueryPhase", "KEY_DOWN", "KEY_UP", "KEY_ENTER", "KEY_ESCAPE"]
