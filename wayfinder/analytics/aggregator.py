from __future__ import annotations

from collections import Counter
from typing import Any

QUERY_EVENTS = ("suggest", "search")


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    queries = [e for e in events if e["type"] in QUERY_EVENTS]
    total = len(queries)

    # Average response time
    times = [q["response_time_ms"] for q in queries if "response_time_ms" in q]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Top queries, case-folded
    query_counter: Counter[str] = Counter()
    for q in queries:
        query_counter[str(q.get("query", "")).lower()] += 1
    top_queries = [{"query": n, "count": c} for n, c in query_counter.most_common(10)]

    zero_results = sum(1 for q in queries if q.get("results_returned", 0) == 0)

    # Destinations most often recommended or compared
    entry_counter: Counter[str] = Counter()
    for e in events:
        if e["type"] == "recommendations":
            entry_counter.update(e.get("entry_ids", []))
        elif e["type"] == "compare":
            entry_counter.update([e.get("entry_a"), e.get("entry_b")])
    entry_counter.pop(None, None)
    top_entries = [{"id": n, "count": c} for n, c in entry_counter.most_common(10)]

    cache_hits = sum(1 for q in queries if q.get("cache_hit"))

    return {
        "total_queries": total,
        "event_counts": dict(Counter(e["type"] for e in events)),
        "avg_response_time_ms": avg_time,
        "top_queries": top_queries,
        "zero_result_rate": round(zero_results / total * 100, 1) if total else 0.0,
        "top_entries": top_entries,
        "cache_stats": {
            "hits": cache_hits,
            "misses": total - cache_hits,
            "hit_rate": round(cache_hits / total * 100, 1) if total else 0.0,
        },
    }
