"""Record store, catalog models and repositories."""

from .models import CatalogPayload, Category, LocalizedText, Record, Status, localized
from .repository import CatalogRepository, JsonCatalogRepository, StaticCatalogRepository, parse_payload
from .stats import catalog_frame, export_catalog, statistics, unique_values
from .store import RecordStore

__all__ = [
    "CatalogPayload",
    "Category",
    "LocalizedText",
    "Record",
    "Status",
    "localized",
    "CatalogRepository",
    "JsonCatalogRepository",
    "StaticCatalogRepository",
    "parse_payload",
    "RecordStore",
    "catalog_frame",
    "export_catalog",
    "statistics",
    "unique_values",
]
