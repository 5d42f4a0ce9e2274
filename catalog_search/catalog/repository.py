"""Catalog repositories: the asynchronous source of records and categories."""
from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from pydantic import ValidationError

from ..errors import CatalogLoadError
from ..utils import get_logger
from .models import CatalogPayload

LOGGER = get_logger("catalog.repository")


class CatalogRepository(Protocol):
    async def fetch(self) -> CatalogPayload:
        """Return the whole catalog or raise ``CatalogLoadError``."""


def parse_payload(data: Any, *, source: str = "<memory>") -> CatalogPayload:
    try:
        return CatalogPayload.model_validate(data)
    except ValidationError as exc:
        raise CatalogLoadError(f"invalid catalog from {source}: {exc}") from exc


class StaticCatalogRepository:
    """Serve an already decoded catalog mapping."""

    def __init__(self, data: Dict[str, Any]) -> None:
        self._data = data

    async def fetch(self) -> CatalogPayload:
        return parse_payload(self._data)


class JsonCatalogRepository:
    """Read a catalog from JSON files.

    ``path`` holds the records (under ``records``, ``features`` or
    ``documents``) and may also hold ``categories``. Feature catalogs ship
    their categories in a separate file, given as ``categories_path``.
    """

    def __init__(self, path: Path, categories_path: Optional[Path] = None) -> None:
        self.path = Path(path)
        self.categories_path = Path(categories_path) if categories_path else None

    async def fetch(self) -> CatalogPayload:
        data = await asyncio.to_thread(self._read_json, self.path)
        if self.categories_path is not None:
            extra = await asyncio.to_thread(self._read_json, self.categories_path)
            data = dict(data)
            data["categories"] = extra.get("categories", []) if isinstance(extra, dict) else extra
        payload = parse_payload(data, source=str(self.path))
        LOGGER.info(
            "Loaded %d records in %d categories from %s",
            len(payload.records),
            len(payload.categories),
            self.path.name,
        )
        return payload

    @staticmethod
    def _read_json(path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise CatalogLoadError(f"failed to read catalog file {path}: {exc}") from exc


__all__ = [
    "CatalogRepository",
    "StaticCatalogRepository",
    "JsonCatalogRepository",
    "parse_payload",
]
