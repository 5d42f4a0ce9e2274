"""Navigation tree model: categories holding their records."""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, List, Tuple

from ..catalog.store import RecordStore


@dataclass(frozen=True)
class TreeGroup:
    category_id: str
    record_ids: Tuple[str, ...]


@dataclass(frozen=True)
class TreeVisibility:
    hidden_records: FrozenSet[str]
    hidden_categories: FrozenSet[str]


class NavigationTree:
    """Categories in presentation order, each with its records in navigation order.

    Categories without records are left out of the tree entirely.
    """

    def __init__(self, groups: List[TreeGroup]) -> None:
        self.groups = list(groups)

    @classmethod
    def from_store(cls, store: RecordStore) -> "NavigationTree":
        groups = []
        for category in store.categories():
            records = store.navigation(category.id)
            if records:
                groups.append(TreeGroup(category.id, tuple(record.id for record in records)))
        return cls(groups)

    def record_ids(self) -> List[str]:
        return [record_id for group in self.groups for record_id in group.record_ids]

    def visibility(self, visible_ids: AbstractSet[str]) -> TreeVisibility:
        """Hide every record outside ``visible_ids`` and every group left with no visible record."""
        hidden_records = set()
        hidden_categories = set()
        for group in self.groups:
            group_hidden = [record_id for record_id in group.record_ids if record_id not in visible_ids]
            hidden_records.update(group_hidden)
            if len(group_hidden) == len(group.record_ids):
                hidden_categories.add(group.category_id)
        return TreeVisibility(frozenset(hidden_records), frozenset(hidden_categories))


__all__ = ["NavigationTree", "TreeGroup", "TreeVisibility"]
