from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_DEFAULT_CATALOG = Path(__file__).resolve().parent / "data" / "processed" / "destinations.csv"


@dataclass(frozen=True)
class EngineConfig:
    catalog_path: Path = Path(os.getenv("WAYFINDER_CATALOG_PATH", str(_DEFAULT_CATALOG)))
    min_query_length: int = int(os.getenv("WAYFINDER_MIN_QUERY_LENGTH", "2"))
    cache_ttl: int = int(os.getenv("WAYFINDER_CACHE_TTL", "300"))
    jitter_max: float = float(os.getenv("WAYFINDER_JITTER_MAX", "5.0"))
    reference_utc_offset: float = float(os.getenv("WAYFINDER_REFERENCE_UTC_OFFSET", "1.0"))
    home_currency: str = os.getenv("WAYFINDER_HOME_CURRENCY", "EUR")


DEFAULT_ENGINE_CONFIG = EngineConfig()
