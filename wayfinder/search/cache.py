from __future__ import annotations

import hashlib
import json
import logging
import threading
import time
from typing import Any

from ..config import DEFAULT_ENGINE_CONFIG

logger = logging.getLogger(__name__)

MAX_CACHE_SIZE = 1024

_cache: dict[str, dict[str, Any]] = {}
_lock = threading.Lock()
_hits: int = 0
_misses: int = 0


def _make_key(kind: str, request_dict: dict, catalog_version: int) -> str:
    normalized = json.dumps(
        {"kind": kind, "version": catalog_version, **request_dict},
        sort_keys=True,
        default=str,
    )
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def _is_fresh(entry: dict[str, Any], now: float) -> bool:
    return now - entry["created_at"] < DEFAULT_ENGINE_CONFIG.cache_ttl


def cache_get(kind: str, request_dict: dict, catalog_version: int) -> Any | None:
    global _hits, _misses
    key = _make_key(kind, request_dict, catalog_version)
    with _lock:
        entry = _cache.get(key)
        if entry and _is_fresh(entry, time.time()):
            _hits += 1
            logger.debug("Cache hit for %s %s", kind, request_dict)
            return entry["value"]
        if entry:
            _cache.pop(key, None)
        _misses += 1
    return None


def cache_set(kind: str, request_dict: dict, catalog_version: int, value: Any) -> None:
    key = _make_key(kind, request_dict, catalog_version)
    now = time.time()
    with _lock:
        # Entries from an older catalog can never be read again
        stale = [
            k for k, e in _cache.items()
            if e["version"] < catalog_version or not _is_fresh(e, now)
        ]
        for k in stale:
            del _cache[k]

        _cache.pop(key, None)
        while len(_cache) >= MAX_CACHE_SIZE:
            # dicts keep insertion order, so this drops the oldest entry
            del _cache[next(iter(_cache))]
        _cache[key] = {"value": value, "created_at": now, "version": catalog_version}

    if stale:
        logger.debug("Evicted %d stale cache entries", len(stale))


def get_cache_stats() -> dict:
    total = _hits + _misses
    return {
        "size": len(_cache),
        "hits": _hits,
        "misses": _misses,
        "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
    }


def clear_cache() -> None:
    global _hits, _misses
    with _lock:
        _cache.clear()
        _hits = 0
        _misses = 0
