from __future__ import annotations

from datetime import datetime, timezone

import pytest

from wayfinder.catalog.models import CatalogEntry

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


class FixedRandom:
    """Random source that always returns the same jitter."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value
        self.calls: list[tuple[float, float]] = []

    def uniform(self, low: float, high: float) -> float:
        self.calls.append((low, high))
        return self.value


def make_entry(entry_id: str, **overrides) -> CatalogEntry:
    fields = {
        "id": entry_id,
        "name": entry_id.title(),
        "region": "Nowhere",
        "group": "Europe",
        "tags": (),
        "rating": 4.0,
        "popularity": 50,
        "price_level": 3,
    }
    fields.update(overrides)
    return CatalogEntry(**fields)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def catalog() -> list[CatalogEntry]:
    return [
        make_entry("tokyo", name="Tokyo", region="Japan", group="Asia",
                   tags=("cultural", "foodie", "nightlife"), rating=4.8, popularity=95, price_level=4),
        make_entry("kyoto", name="Kyoto", region="Japan", group="Asia",
                   tags=("cultural", "history", "spiritual"), rating=4.7, popularity=78, price_level=3),
        make_entry("paris", name="Paris", region="France", group="Europe",
                   tags=("romantic", "cultural", "art"), rating=4.7, popularity=96, price_level=4),
        make_entry("barcelona", name="Barcelona", region="Spain", group="Europe",
                   tags=("beach", "nightlife", "foodie"), rating=4.6, popularity=90, price_level=3),
        make_entry("bali", name="Bali", region="Indonesia", group="Asia",
                   tags=("beach", "relaxation", "nature"), rating=4.6, popularity=85, price_level=2),
        make_entry("lisbon", name="Lisbon", region="Portugal", group="Europe",
                   tags=("cultural", "foodie", "budget"), rating=4.6, popularity=82, price_level=2),
    ]


@pytest.fixture
def fixed_rng() -> FixedRandom:
    return FixedRandom()


@pytest.fixture
def entry_factory():
    return make_entry
