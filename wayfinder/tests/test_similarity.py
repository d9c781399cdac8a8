from __future__ import annotations

import itertools

from wayfinder.personalization.similarity import get_similar_entries, similarity


def test_similarity_is_symmetric(catalog):
    for a, b in itertools.combinations(catalog, 2):
        assert similarity(a, b) == similarity(b, a)


def test_similarity_components(catalog):
    tokyo, kyoto = catalog[0], catalog[1]
    # same group, one price step apart, one shared tag
    assert similarity(tokyo, kyoto) == 20 - 5 + 15


def test_similar_entries_ranked(catalog):
    assert [e.id for e in get_similar_entries("tokyo", catalog, limit=10)] == [
        "kyoto", "barcelona", "lisbon", "paris", "bali",
    ]


def test_similar_entries_limit_and_exclusion(catalog):
    result = get_similar_entries("tokyo", catalog, limit=2)
    assert [e.id for e in result] == ["kyoto", "barcelona"]
    assert all(e.id != "tokyo" for e in get_similar_entries("tokyo", catalog))


def test_unknown_target(catalog):
    assert get_similar_entries("atlantis", catalog) == []


def test_empty_catalog():
    assert get_similar_entries("tokyo", []) == []
