from __future__ import annotations

from wayfinder.analytics.aggregator import compute_analytics
from wayfinder.analytics.store import MAX_EVENTS, clear_events, get_events, record_event


def setup_function():
    clear_events()


def test_events_filtered_by_type():
    record_event("search", {"query": "rome"})
    record_event("compare", {"entry_a": "rome", "entry_b": "paris"})
    assert len(get_events()) == 2
    assert [e["query"] for e in get_events("search")] == ["rome"]


def test_event_log_is_bounded():
    for i in range(MAX_EVENTS + 10):
        record_event("search", {"query": str(i)})
    events = get_events()
    assert len(events) == MAX_EVENTS
    assert events[0]["query"] == "10"


def test_compute_analytics():
    events = [
        {"type": "search", "query": "Rome", "results_returned": 3, "response_time_ms": 2.0, "cache_hit": False},
        {"type": "suggest", "query": "rome", "results_returned": 0, "response_time_ms": 4.0, "cache_hit": True},
        {"type": "recommendations", "entry_ids": ["bali", "tokyo"]},
        {"type": "compare", "entry_a": "bali", "entry_b": "paris"},
    ]
    result = compute_analytics(events)
    assert result["total_queries"] == 2
    assert result["avg_response_time_ms"] == 3.0
    assert result["top_queries"] == [{"query": "rome", "count": 2}]
    assert result["zero_result_rate"] == 50.0
    assert result["top_entries"][0] == {"id": "bali", "count": 2}
    assert result["cache_stats"]["hit_rate"] == 50.0
    assert result["event_counts"]["compare"] == 1


def test_compute_analytics_empty():
    result = compute_analytics([])
    assert result["total_queries"] == 0
    assert result["zero_result_rate"] == 0.0
