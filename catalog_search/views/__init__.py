"""Directives for presentation surfaces and the synchronizer that emits them."""

from .directives import Directive, DirectiveChannel, Listener, Select, ShowEmpty, ShowResults, ShowSuggestions
from .synchronizer import ViewSynchronizer
from .tree import NavigationTree, TreeGroup, TreeVisibility

__all__ = [
    "Directive",
    "DirectiveChannel",
    "Listener",
    "Select",
    "ShowEmpty",
    "ShowResults",
    "ShowSuggestions",
    "ViewSynchronizer",
    "NavigationTree",
    "TreeGroup",
    "TreeVisibility",
]
