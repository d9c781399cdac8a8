from __future__ import annotations

import pytest
from pydantic import ValidationError

from wayfinder.catalog import data_store
from wayfinder.catalog.data_store import (
    CatalogSnapshot,
    get_catalog,
    load_entries,
    reload_catalog,
    replace_catalog,
    reset_catalog,
)
from wayfinder.catalog.discovery import (
    budget_friendly,
    by_group,
    by_tag,
    emerging_destinations,
    hidden_gem_info,
    trending,
)
from wayfinder.config import DEFAULT_ENGINE_CONFIG

CSV_HEADER = (
    "id,name,region,group,tags,rating,popularity,price_level,best_periods,"
    "suggested_days_min,suggested_days_max,utc_offset,languages,currency,emergency_number\n"
)


@pytest.fixture(autouse=True)
def _fresh_catalog():
    reset_catalog()
    yield
    reset_catalog()


def test_load_entries_parses_lists(tmp_path):
    path = tmp_path / "destinations.csv"
    path.write_text(
        CSV_HEADER
        + 'rome,Rome,Italy,Europe,"history, cultural,,history",4.7,93,3,"April,May",3,5,1,Italian,EUR,112\n'
        + "rome,Rome again,Italy,Europe,,4.0,10,3,,,,,,,\n"
        + "oslo,Oslo,Norway,Europe,,,,,,,,,,,\n"
    )
    entries = load_entries(path)
    assert [e.id for e in entries] == ["rome", "oslo"]

    rome, oslo = entries
    assert rome.tags == ("history", "cultural")
    assert rome.best_periods == ("April", "May")
    assert rome.suggested_days.max == 5
    assert rome.utc_offset == 1.0
    assert rome.emergency_number == "112"

    assert oslo.tags == ()
    assert oslo.price_level == 3
    assert oslo.utc_offset is None


def test_bundled_catalog_loads():
    entries = load_entries(DEFAULT_ENGINE_CONFIG.catalog_path)
    ids = [e.id for e in entries]
    assert len(ids) == len(set(ids)) > 0
    assert all(1 <= e.price_level <= 5 for e in entries)
    assert all(0 <= e.popularity <= 100 for e in entries)


def test_missing_file_yields_empty_snapshot(tmp_path):
    snapshot = data_store._load(tmp_path / "missing.csv")
    assert len(snapshot) == 0
    assert snapshot.get_all() == ()


def test_replace_catalog_swaps_whole_snapshot(catalog):
    before = get_catalog()
    after = replace_catalog(catalog)
    assert get_catalog() is after
    assert after.version > before.version
    assert after.get_by_id("tokyo").name == "Tokyo"
    assert after.get_by_id("atlantis") is None
    assert before is not after


def test_entries_are_immutable(catalog):
    with pytest.raises(ValidationError):
        catalog[0].rating = 1.0


def test_entry_validation(entry_factory):
    with pytest.raises(ValidationError):
        entry_factory("x", price_level=6)
    with pytest.raises(ValidationError):
        entry_factory("x", rating=5.5)
    assert entry_factory("x", tags=("a", "a", " b ")).tags == ("a", "b")


def test_snapshot_lookup(catalog):
    snapshot = CatalogSnapshot(catalog, version=7)
    assert snapshot.version == 7
    assert snapshot.get_by_id("bali").group == "Asia"


class TestDiscovery:
    def test_trending(self, catalog):
        assert [e.id for e in trending(catalog, limit=2)] == ["paris", "tokyo"]

    def test_budget_friendly(self, catalog):
        assert [e.id for e in budget_friendly(catalog)] == ["bali", "lisbon"]

    def test_filters(self, catalog):
        assert {e.id for e in by_group(catalog, "Asia")} == {"tokyo", "kyoto", "bali"}
        assert {e.id for e in by_tag(catalog, "beach")} == {"barcelona", "bali"}

    def test_hidden_gem_score_is_capped(self, entry_factory):
        cusco = entry_factory(
            "cusco", rating=4.6, popularity=48, price_level=2,
            tags=("adventure", "history", "trekking", "cultural"),
        )
        info = hidden_gem_info(cusco)
        assert [r.type for r in info.reasons] == [
            "low-popularity", "budget-friendly", "authentic", "unique-experience", "emerging",
        ]
        assert info.score == 100
        assert info.is_hidden_gem
        assert "4.6/5" in info.description

    def test_popular_destination_is_not_a_gem(self, catalog):
        info = hidden_gem_info(catalog[0])
        assert not info.is_hidden_gem

    def test_emerging_destinations(self, catalog, entry_factory):
        gem = entry_factory("gem", rating=4.6, popularity=40, price_level=1, tags=("history",))
        assert [e.id for e in emerging_destinations(catalog + [gem])][0] == "gem"


def test_reload_catalog_from_path(tmp_path):
    path = tmp_path / "destinations.csv"
    path.write_text(CSV_HEADER + "oslo,Oslo,Norway,Europe,nature,4.4,40,5,,2,3,1,Norwegian,NOK,112\n")
    snapshot = reload_catalog(path)
    assert get_catalog() is snapshot
    assert [e.id for e in snapshot.get_all()] == ["oslo"]
