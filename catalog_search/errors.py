"""Exception hierarchy for the catalog search engine."""
from __future__ import annotations

from typing import Optional


class CatalogSearchError(Exception):
    """Base class for every error raised by this package."""


class CatalogLoadError(CatalogSearchError):
    """The catalog repository failed to deliver a complete, valid catalog."""


class NotReadyError(CatalogSearchError):
    """The record store has not been loaded (or its load failed)."""

    def __init__(self, message: str = "catalog is not loaded") -> None:
        super().__init__(message)


class StorageError(CatalogSearchError):
    """Reading or writing durable history storage failed."""


class ScoringError(CatalogSearchError):
    """A single record could not be scored because its fields are malformed."""

    def __init__(self, record_id: Optional[str], reason: str) -> None:
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"cannot score record {record_id!r}: {reason}")


__all__ = [
    "CatalogSearchError",
    "CatalogLoadError",
    "NotReadyError",
    "StorageError",
    "ScoringError",
]
