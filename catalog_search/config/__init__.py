"""Configuration: default paths and search settings."""

from .paths import CATALOG_PATH, DATA_DIR, HISTORY_PATH, PROJECT_ROOT
from .settings import FALLBACK_LANGUAGE, HISTORY_STORAGE_KEY, ScoringWeights, SearchSettings

__all__ = [
    "PROJECT_ROOT",
    "DATA_DIR",
    "CATALOG_PATH",
    "HISTORY_PATH",
    "FALLBACK_LANGUAGE",
    "HISTORY_STORAGE_KEY",
    "ScoringWeights",
    "SearchSettings",
]
