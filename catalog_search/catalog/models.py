"""Catalog records and categories (validated with pydantic)."""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..config.settings import FALLBACK_LANGUAGE

LocalizedText = Dict[str, str]


class Status(str, Enum):
    STABLE = "stable"
    BETA = "beta"
    NEW = "new"


def localized(text: Optional[Mapping[str, str]], language: str, fallback: str = FALLBACK_LANGUAGE) -> str:
    """Pick ``language`` from a localized mapping, falling back, else ``""``."""
    if not text:
        return ""
    value = text.get(language) or text.get(fallback)
    return value or ""


def _coerce_localized(value: Any) -> Any:
    if value is None:
        return {}
    if isinstance(value, str):
        return {FALLBACK_LANGUAGE: value}
    return value


def _dedup_preserve_order(items: Any) -> Tuple[str, ...]:
    out: List[str] = []
    seen = set()
    for item in items or ():
        text = str(item).strip()
        if not text or text in seen:
            continue
        out.append(text)
        seen.add(text)
    return tuple(out)


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: LocalizedText
    order: int = 0
    icon: Optional[str] = None
    description: LocalizedText = Field(default_factory=dict)

    @field_validator("name", "description", mode="before")
    @classmethod
    def _localize(cls, value: Any) -> Any:
        return _coerce_localized(value)

    def name_for(self, language: str, fallback: str = FALLBACK_LANGUAGE) -> str:
        return localized(self.name, language, fallback) or self.id


class Record(BaseModel):
    """One catalog entry (a feature card or a documentation page)."""

    model_config = ConfigDict(frozen=True)

    id: str
    category: str
    status: Status = Status.STABLE
    title: LocalizedText
    description: LocalizedText = Field(default_factory=dict)
    details: LocalizedText = Field(default_factory=dict)
    tags: Tuple[str, ...] = ()
    examples: Tuple[str, ...] = ()
    sections: Tuple[LocalizedText, ...] = ()
    version: Optional[str] = None
    priority: Optional[int] = None
    difficulty: Optional[str] = None
    reading_time: Optional[int] = None
    last_updated: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_document(cls, data: Any) -> Any:
        # Documentation pages nest their body under ``content``, tags and
        # reading info under ``metadata`` and the update date under ``source``.
        if not isinstance(data, dict):
            return data
        if not {"content", "metadata", "source"} & data.keys():
            return data
        flat = {k: v for k, v in data.items() if k not in {"content", "metadata", "source"}}
        content = data.get("content") or {}
        metadata = data.get("metadata") or {}
        source = data.get("source") or {}
        if isinstance(content, dict):
            flat.setdefault("details", content.get("overview"))
            flat.setdefault(
                "sections",
                [section.get("content") for section in content.get("sections") or [] if isinstance(section, dict)],
            )
        if isinstance(metadata, dict):
            flat.setdefault("tags", metadata.get("tags") or [])
            flat.setdefault("difficulty", metadata.get("difficulty"))
            flat.setdefault("reading_time", metadata.get("readingTime"))
        if isinstance(source, dict):
            flat.setdefault("last_updated", source.get("lastUpdated"))
        return flat

    @field_validator("id", "category", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("title", "description", "details", mode="before")
    @classmethod
    def _localize(cls, value: Any) -> Any:
        return _coerce_localized(value)

    @field_validator("sections", mode="before")
    @classmethod
    def _localize_sections(cls, value: Any) -> Any:
        return tuple(_coerce_localized(item) for item in value or () if item)

    @field_validator("title")
    @classmethod
    def _require_fallback_title(cls, value: LocalizedText) -> LocalizedText:
        if not value.get(FALLBACK_LANGUAGE):
            raise ValueError(f"title needs a '{FALLBACK_LANGUAGE}' entry")
        return value

    @field_validator("last_updated")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _clean_tags(cls, value: Any) -> Tuple[str, ...]:
        return _dedup_preserve_order(value)

    def title_for(self, language: str, fallback: str = FALLBACK_LANGUAGE) -> str:
        return localized(self.title, language, fallback)

    def description_for(self, language: str, fallback: str = FALLBACK_LANGUAGE) -> str:
        return localized(self.description, language, fallback)


class CatalogPayload(BaseModel):
    """Everything a repository delivers in one successful fetch."""

    records: List[Record] = Field(default_factory=list)
    categories: List[Category] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_keys(cls, data: Any) -> Any:
        if isinstance(data, dict) and "records" not in data:
            for key in ("features", "documents"):
                if key in data:
                    data = dict(data)
                    data["records"] = data.pop(key)
                    break
        return data

    @model_validator(mode="after")
    def _check_references(self) -> "CatalogPayload":
        category_ids = {category.id for category in self.categories}
        if len(category_ids) != len(self.categories):
            raise ValueError("duplicate category ids")
        seen = set()
        for record in self.records:
            if record.id in seen:
                raise ValueError(f"duplicate record id {record.id!r}")
            seen.add(record.id)
            if record.category not in category_ids:
                raise ValueError(f"record {record.id!r} references unknown category {record.category!r}")
        return self


__all__ = [
    "LocalizedText",
    "Status",
    "Category",
    "Record",
    "CatalogPayload",
    "localized",
]
