from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from ..config import DEFAULT_ENGINE_CONFIG
from .models import CatalogEntry, SuggestedDays

logger = logging.getLogger(__name__)

_LIST_COLUMNS = ("tags", "best_periods", "languages")
_DEFAULTS: dict[str, object] = {
    "region": "",
    "group": "",
    "tagline": "",
    "currency": "",
    "emergency_number": "",
    "rating": 0.0,
    "popularity": 0,
    "price_level": 3,
    "suggested_days_min": 1,
    "suggested_days_max": 1,
}


class CatalogSnapshot:
    """Read-only view of the catalog at one point in time."""

    def __init__(self, entries: Iterable[CatalogEntry], version: int = 0) -> None:
        self._entries: tuple[CatalogEntry, ...] = tuple(entries)
        self._by_id: dict[str, CatalogEntry] = {e.id: e for e in self._entries}
        self.version = version

    def get_all(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    def get_by_id(self, entry_id: str) -> CatalogEntry | None:
        return self._by_id.get(entry_id)

    def __len__(self) -> int:
        return len(self._entries)


_snapshot: CatalogSnapshot | None = None
_version: int = 0
_lock = threading.Lock()


def _split(value: object) -> tuple[str, ...]:
    if not isinstance(value, str):
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _row_to_entry(row: pd.Series) -> CatalogEntry:
    utc_offset = row.get("utc_offset")
    return CatalogEntry(
        id=str(row["id"]),
        name=str(row["name"]),
        region=str(row.get("region", "")),
        group=str(row.get("group", "")),
        tagline=str(row.get("tagline", "")),
        tags=row["tags"],
        rating=float(row.get("rating", 0.0)),
        popularity=int(row.get("popularity", 0)),
        price_level=int(row.get("price_level", 3)),
        best_periods=row["best_periods"],
        suggested_days=SuggestedDays(
            min=int(row.get("suggested_days_min", 1)),
            max=int(row.get("suggested_days_max", 1)),
        ),
        utc_offset=float(utc_offset) if pd.notna(utc_offset) else None,
        languages=row["languages"],
        currency=str(row.get("currency", "")),
        emergency_number=str(row.get("emergency_number", "")),
    )


def load_entries(path: Path) -> list[CatalogEntry]:
    """Read the processed destinations CSV into catalog entries."""
    df = pd.read_csv(path, dtype={"id": str, "emergency_number": str})
    df = df.dropna(subset=["id", "name"]).drop_duplicates(subset="id", keep="first")

    # Blank cells come back as NaN
    for col, default in _DEFAULTS.items():
        if col in df.columns:
            df[col] = df[col].fillna(default)
    for col in _LIST_COLUMNS:
        if col not in df.columns:
            df[col] = ""
        df[col] = df[col].apply(_split)

    return [_row_to_entry(row) for _, row in df.iterrows()]


def _load(path: Path, version: int = 0) -> CatalogSnapshot:
    try:
        entries = load_entries(path)
    except FileNotFoundError:
        logger.warning("Catalog file %s not found, starting with an empty catalog", path)
        entries = []
    logger.info("Loaded %d catalog entries from %s", len(entries), path)
    return CatalogSnapshot(entries, version=version)


def get_catalog() -> CatalogSnapshot:
    """Return the current catalog snapshot, loading it on first call."""
    global _snapshot, _version
    if _snapshot is None:
        with _lock:
            if _snapshot is None:
                _version += 1
                _snapshot = _load(DEFAULT_ENGINE_CONFIG.catalog_path, _version)
    return _snapshot


def replace_catalog(entries: Iterable[CatalogEntry]) -> CatalogSnapshot:
    """Swap in a whole new catalog. Readers see either the old or the new one."""
    global _snapshot, _version
    with _lock:
        _version += 1
        snapshot = CatalogSnapshot(entries, version=_version)
        _snapshot = snapshot
    return snapshot


def reload_catalog(path: Path | None = None) -> CatalogSnapshot:
    return replace_catalog(load_entries(path or DEFAULT_ENGINE_CONFIG.catalog_path))


def reset_catalog() -> None:
    """Drop the snapshot so the next get_catalog() reloads from disk."""
    global _snapshot
    with _lock:
        _snapshot = None
