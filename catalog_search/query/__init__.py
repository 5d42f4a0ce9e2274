"""Live query handling: debounce, history, suggestions and the controller."""

from .debounce import DebounceSlot, PendingTask
from .history import JsonFileStorage, KeyValueStorage, MemoryStorage, SearchHistory
from .suggestions import Suggestion, SuggestionBuilder, SuggestionKind, completion_terms
from .controller import KEY_DOWN, KEY_ENTER, KEY_ESCAPE, KEY_UP, QueryController, QueryPhase

__all__ = [
    "DebounceSlot",
    "PendingTask",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "SearchHistory",
    "Suggestion",
    "SuggestionBuilder",
    "SuggestionKind",
    "completion_terms",
    "QueryController",
    "QueryPhase",
    "KEY_DOWN",
    "KEY_ENTER",
    "KEY_ESCAPE",
    "KEY_UP",
]
