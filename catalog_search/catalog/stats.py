"""Catalog statistics, facet values and export."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List

import pandas as pd

from ..config.settings import FALLBACK_LANGUAGE
from .store import RecordStore

_UNKNOWN = "unknown"
_SCALAR_FIELDS = ("category", "status", "version", "difficulty")
_FRAME_COLUMNS = ["id", "category", "status", "version", "difficulty", "reading_time", "tags"]


def catalog_frame(store: RecordStore) -> pd.DataFrame:
    """One row per record with the facet columns and every localized title."""
    rows: List[Dict[str, Any]] = []
    for record in store.records():
        row: Dict[str, Any] = {
            "id": record.id,
            "category": record.category,
            "status": record.status.value,
            "version": record.version,
            "difficulty": record.difficulty,
            "reading_time": record.reading_time,
            "tags": list(record.tags),
        }
        for language, title in record.title.items():
            row[f"title_{language}"] = title
        rows.append(row)
    frame = pd.DataFrame(rows, columns=None if rows else _FRAME_COLUMNS)
    return frame


def _counts(series: pd.Series) -> Dict[str, int]:
    return {str(key): int(value) for key, value in series.value_counts(sort=False).items()}


def statistics(store: RecordStore) -> Dict[str, Any]:
    frame = catalog_frame(store)
    stats: Dict[str, Any] = {
        "total_records": int(len(frame)),
        "total_categories": len(store.categories()),
        "status_counts": {},
        "version_counts": {},
        "tag_counts": {},
        "total_tags": 0,
        "difficulty_counts": {},
        "average_reading_time": 0,
    }
    if frame.empty:
        return stats
    stats["status_counts"] = _counts(frame["status"].fillna(_UNKNOWN))
    stats["version_counts"] = _counts(frame["version"].fillna(_UNKNOWN))
    tags = frame["tags"].explode().dropna()
    stats["tag_counts"] = _counts(tags) if not tags.empty else {}
    stats["total_tags"] = len(stats["tag_counts"])
    stats["difficulty_counts"] = _counts(frame["difficulty"].fillna(_UNKNOWN))
    # records without a reading time count as zero minutes, rounded half up
    mean_minutes = float(frame["reading_time"].fillna(0).astype(float).mean())
    stats["average_reading_time"] = int(mean_minutes + 0.5)
    return stats


def unique_values(store: RecordStore, field: str) -> List[str]:
    """Sorted distinct values of ``field`` across the catalog; tag lists are flattened."""
    if field not in _SCALAR_FIELDS and field != "tags":
        raise ValueError(f"unsupported facet field: {field!r}")
    frame = catalog_frame(store)
    if frame.empty:
        return []
    column = frame[field].explode() if field == "tags" else frame[field]
    return sorted(str(value) for value in column.dropna().unique() if value != "")


def export_catalog(store: RecordStore, fmt: str = "json") -> str:
    fmt = (fmt or "").strip().lower()
    if fmt == "json":
        payload = {
            "records": [record.model_dump(mode="json") for record in store.records()],
            "categories": [category.model_dump(mode="json") for category in store.categories()],
            "stats": statistics(store),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        return json.dumps(payload, ensure_ascii=False, indent=2)
    if fmt == "csv":
        return _to_csv(store)
    raise ValueError(f"Unsupported export format: {fmt}")


def _to_csv(store: RecordStore) -> str:
    records = store.records()
    if not records:
        return ""
    languages = sorted({lang for record in records for lang in record.title})
    languages.sort(key=lambda lang: lang != FALLBACK_LANGUAGE)
    rows = []
    for record in records:
        row: Dict[str, Any] = {"ID": record.id}
        for language in languages:
            row[f"Title ({language.upper()})"] = record.title.get(language, "")
        row["Category"] = record.category
        row["Status"] = record.status.value
        row["Version"] = record.version or ""
        row["Tags"] = ", ".join(record.tags)
        rows.append(row)
    return pd.DataFrame(rows).to_csv(index=False, lineterminator="\n")


__all__ = ["catalog_frame", "statistics", "unique_values", "export_catalog"]
