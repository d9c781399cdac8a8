from __future__ import annotations

import pytest

from wayfinder.search.full_text import score_entry, search, search_scored


def test_short_query_returns_nothing(catalog):
    assert search(catalog, "t") == []
    assert search(catalog, " ") == []


def test_exact_name(catalog):
    assert [e.id for e in search(catalog, "tokyo")] == ["tokyo"]


def test_score_averages_contributing_fields(entry_factory):
    entry = entry_factory("x", name="Beach", region="Beachland", group="Europe", tags=("beach",))
    expected = (1.0 * 1.0 + 0.9 * 0.7 + 1.0 * 0.4) / 3
    assert score_entry(entry, "beach") == pytest.approx(expected)


def test_tag_contribution_is_mean_of_matching_tags(entry_factory):
    entry = entry_factory("x", name="Nowhere", region="Nowhere", group="Nowhere",
                          tags=("beach", "beaches", "museum"))
    # only the matching tags count towards the mean
    assert score_entry(entry, "beach") == pytest.approx((1.0 + 0.9) / 2 * 0.4)


def test_single_strong_field_outranks_diluted_multi_field_match(entry_factory):
    multi = entry_factory("multi", name="Beach", region="Beachland", group="Europe", tags=("beach",))
    single = entry_factory("single", name="Beach", region="Nowhere", group="Asia")
    assert [e.id for e in search([multi, single], "beach")] == ["single", "multi"]


def test_min_score_filters(catalog):
    assert [e.id for e in search(catalog, "to", min_score=0.3)] == ["tokyo", "kyoto"]
    assert [e.id for e in search(catalog, "to", min_score=0.0)] == ["tokyo", "kyoto", "bali"]


def test_scores_are_exposed(catalog):
    scored = dict((e.id, s) for e, s in search_scored(catalog, "to", min_score=0.0))
    assert scored["tokyo"] == pytest.approx(0.9)
    assert scored["kyoto"] == pytest.approx((0.7 + 0.7 * 0.4) / 2)
    assert scored["bali"] == pytest.approx(0.6 * 0.4)


def test_limit(catalog):
    assert len(search(catalog, "to", limit=1, min_score=0.0)) == 1


def test_entry_with_no_matching_field_is_skipped(entry_factory):
    entry = entry_factory("x", name="Nowhere", region="Nowhere", group="Nowhere")
    assert search([entry], "zz", min_score=0.0) == []


def test_empty_catalog():
    assert search([], "tokyo") == []
