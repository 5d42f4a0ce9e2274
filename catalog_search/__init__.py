"""Search and facet filtering engine for static catalog showcase sites."""

from .app_factory import create_controller
from .catalog import JsonCatalogRepository, RecordStore, StaticCatalogRepository
from .config import SearchSettings
from .errors import CatalogLoadError, CatalogSearchError, NotReadyError, ScoringError, StorageError
from .query import QueryController
from .search import FilterEngine, FilterState, SearchEngine
from .views import DirectiveChannel, ViewSynchronizer

__version__ = "0.1.0"

__all__ = [
    "create_controller",
    "JsonCatalogRepository",
    "RecordStore",
    "StaticCatalogRepository",
    "SearchSettings",
    "CatalogLoadError",
    "CatalogSearchError",
    "NotReadyError",
    "ScoringError",
    "StorageError",
    "QueryController",
    "FilterEngine",
    "FilterState",
    "SearchEngine",
    "DirectiveChannel",
    "ViewSynchronizer",
]
