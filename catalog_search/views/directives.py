"""Directives the synchronizer sends to presentation code, and their channel."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Deque, FrozenSet, List, Tuple, Union

from ..utils import get_logger

if TYPE_CHECKING:
    from ..query.suggestions import Suggestion

LOGGER = get_logger("views.directives")


@dataclass(frozen=True)
class Select:
    """Open the detail view of one record."""

    record_id: str


@dataclass(frozen=True)
class ShowResults:
    """Re-render the grid from ``record_ids`` and apply tree visibility."""

    record_ids: Tuple[str, ...]
    query: str = ""
    hidden_records: FrozenSet[str] = field(default_factory=frozenset)
    hidden_categories: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ShowEmpty:
    """No record matched ``query``."""

    query: str


@dataclass(frozen=True)
class ShowSuggestions:
    """Replace the suggestion dropdown; an empty tuple closes it."""

    suggestions: Tuple[Suggestion, ...] = ()
    highlighted: int = -1

    @property
    def visible(self) -> bool:
        return bool(self.suggestions)


Directive = Union[Select, ShowResults, ShowEmpty, ShowSuggestions]
Listener = Callable[[Directive], None]


class DirectiveChannel:
    """Fan directives out to listeners and buffer them for polling consumers."""

    def __init__(self, buffer_size: int = 256) -> None:
        self._listeners: List[Listener] = []
        self._buffer: Deque[Directive] = deque(maxlen=max(1, int(buffer_size)))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, directive: Directive) -> None:
        self._buffer.append(directive)
        for listener in list(self._listeners):
            try:
                listener(directive)
            except Exception as exc:
                LOGGER.error("Listener failed on %s: %s", type(directive).__name__, exc)

    def drain(self) -> List[Directive]:
        items = list(self._buffer)
        self._buffer.clear()
        return items


__all__ = [
    "Select",
    "ShowResults",
    "ShowEmpty",
    "ShowSuggestions",
    "Directive",
    "DirectiveChannel",
    "Listener",
]
