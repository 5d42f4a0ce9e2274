"""Project the current result set onto the grid, tree and suggestion surfaces."""
from __future__ import annotations

from typing import Optional, Sequence

from ..catalog.models import Record
from ..catalog.store import RecordStore
from ..utils import get_logger
from .directives import Directive, DirectiveChannel, Select, ShowEmpty, ShowResults, ShowSuggestions
from .tree import NavigationTree

LOGGER = get_logger("views.synchronizer")


class ViewSynchronizer:
    """Turn result sequences into directives; never re-fetches or re-scores.

    The grid is always re-rendered from the ordered ids, while the tree only
    receives hide sets so its expand/collapse state survives.
    """

    def __init__(self, store: RecordStore, channel: Optional[DirectiveChannel] = None) -> None:
        self.store = store
        self.channel = channel if channel is not None else DirectiveChannel()
        self._tree: Optional[NavigationTree] = None
        self.last: Optional[Directive] = None

    @property
    def tree(self) -> NavigationTree:
        if self._tree is None:
            self._tree = NavigationTree.from_store(self.store)
        return self._tree

    def project(self, results: Sequence[Record], *, query: str = "", direct: bool = False) -> Directive:
        directive: Directive
        if direct and len(results) == 1:
            directive = Select(results[0].id)
        elif not results:
            directive = ShowEmpty(query)
        else:
            ids = tuple(record.id for record in results)
            visibility = self.tree.visibility(set(ids))
            directive = ShowResults(
                record_ids=ids,
                query=query,
                hidden_records=visibility.hidden_records,
                hidden_categories=visibility.hidden_categories,
            )
        LOGGER.debug("Projecting %d results for %r as %s", len(results), query, type(directive).__name__)
        return self._emit(directive)

    def select(self, record_id: str) -> Directive:
        return self._emit(Select(record_id))

    def show_suggestions(self, suggestions: Sequence, highlighted: int = -1) -> Directive:
        return self._emit(ShowSuggestions(tuple(suggestions), highlighted))

    def close_suggestions(self) -> Directive:
        return self._emit(ShowSuggestions())

    def _emit(self, directive: Directive) -> Directive:
        self.last = directive
        self.channel.publish(directive)
        return directive


__all__ = ["ViewSynchronizer"]
