"""Centralised default path definitions for runtime artifacts."""
from __future__ import annotations

from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = PROJECT_ROOT / "data"
CATALOG_PATH = DATA_DIR / "features.json"
HISTORY_PATH = DATA_DIR / "search_history.json"

__all__ = [
    "PROJECT_ROOT",
    "DATA_DIR",
    "CATALOG_PATH",
    "HISTORY_PATH",
]
