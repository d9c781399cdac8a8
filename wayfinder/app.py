from __future__ import annotations

import logging
import time

from fastapi import FastAPI, HTTPException, Query

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .catalog.data_store import get_catalog
from .catalog.discovery import (
    budget_friendly,
    by_group,
    by_tag,
    emerging_destinations,
    hidden_gem_info,
    trending,
)
from .catalog.models import EntryOut
from .comparison.engine import compare_entries
from .comparison.models import ComparisonResult
from .personalization.models import (
    InteractionRequest,
    PreferencesRequest,
    RecommendationItem,
    RecommendationResponse,
    SectionRequest,
    UserPreference,
    UserType,
    VisitRequest,
)
from .personalization.profile import implicit_interests, section_visibility
from .personalization.providers import (
    get_history,
    get_profile,
    register_user,
    track_interaction,
    track_section,
    track_visit,
    update_preferences,
)
from .personalization.recommender import recommendation_reason, score_recommendations
from .personalization.similarity import get_similar_entries
from .search.autocomplete import get_suggestions
from .search.cache import cache_get, cache_set, get_cache_stats
from .search.full_text import search_scored
from .search.models import (
    SearchHit,
    SearchResponse,
    SuggestionOut,
    SuggestResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Destination Ranking API", version="1.0.0")


def _elapsed_ms(start_time: float) -> float:
    return round((time.time() - start_time) * 1000, 1)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    entries = get_catalog().get_all()
    tags: set[str] = set()
    for entry in entries:
        tags.update(entry.tags)
    return {
        "total": len(entries),
        "groups": sorted({e.group for e in entries if e.group}),
        "regions": sorted({e.region for e in entries if e.region}),
        "tags": sorted(tags),
    }


# ── Search endpoints ─────────────────────────────────────────────────────


@app.get("/suggest", response_model=SuggestResponse)
def suggest(
    q: str = Query(default=""),
    limit: int = Query(default=5, ge=1, le=20),
) -> SuggestResponse:
    start_time = time.time()
    catalog = get_catalog()
    request_dict = {"q": q.strip().lower(), "limit": limit}

    cached = cache_get("suggest", request_dict, catalog.version)
    if cached is None:
        suggestions = get_suggestions(catalog.get_all(), q, limit)
        cached = SuggestResponse(
            query=q,
            suggestions=[
                SuggestionOut(
                    entry=EntryOut.from_entry(s.entry),
                    match_type=s.match_type,
                    match_score=round(s.match_score, 4),
                    highlight=s.highlight,
                )
                for s in suggestions
            ],
        )
        cache_set("suggest", request_dict, catalog.version, cached)
        cache_hit = False
    else:
        cache_hit = True

    record_event("suggest", {
        "query": q,
        "results_returned": len(cached.suggestions),
        "response_time_ms": _elapsed_ms(start_time),
        "cache_hit": cache_hit,
    })
    # Cached under the normalised query, so echo the one this caller sent
    return cached.model_copy(update={"query": q})


@app.get("/search", response_model=SearchResponse)
def search(
    q: str = Query(default=""),
    limit: int = Query(default=50, ge=1, le=200),
    min_score: float = Query(default=0.2, ge=0.0, le=1.0),
) -> SearchResponse:
    start_time = time.time()
    catalog = get_catalog()
    request_dict = {"q": q.strip().lower(), "limit": limit, "min_score": min_score}

    cached = cache_get("search", request_dict, catalog.version)
    if cached is None:
        hits = search_scored(catalog.get_all(), q, limit, min_score)
        cached = SearchResponse(
            query=q,
            results=[
                SearchHit(entry=EntryOut.from_entry(entry), score=round(score, 4))
                for entry, score in hits
            ],
            total=len(hits),
        )
        cache_set("search", request_dict, catalog.version, cached)
        cache_hit = False
    else:
        cache_hit = True

    record_event("search", {
        "query": q,
        "results_returned": cached.total,
        "response_time_ms": _elapsed_ms(start_time),
        "cache_hit": cache_hit,
    })
    # Cached under the normalised query, so echo the one this caller sent
    return cached.model_copy(update={"query": q})


# ── Destination endpoints ────────────────────────────────────────────────


@app.get("/destinations", response_model=list[EntryOut])
def destinations(group: str | None = None, tag: str | None = None) -> list[EntryOut]:
    entries = list(get_catalog().get_all())
    if group:
        entries = by_group(entries, group)
    if tag:
        entries = by_tag(entries, tag)
    return [EntryOut.from_entry(e) for e in entries]


@app.get("/destinations/{entry_id}", response_model=EntryOut)
def destination(entry_id: str) -> EntryOut:
    entry = get_catalog().get_by_id(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Unknown destination")
    return EntryOut.from_entry(entry)


@app.get("/destinations/{entry_id}/similar", response_model=list[EntryOut])
def similar(entry_id: str, limit: int = Query(default=4, ge=1, le=20)) -> list[EntryOut]:
    catalog = get_catalog()
    if catalog.get_by_id(entry_id) is None:
        raise HTTPException(status_code=404, detail="Unknown destination")
    return [EntryOut.from_entry(e) for e in get_similar_entries(entry_id, catalog.get_all(), limit)]


@app.get("/compare", response_model=ComparisonResult)
def compare(a: str, b: str) -> ComparisonResult:
    result = compare_entries(a, b, get_catalog())
    if result is None:
        raise HTTPException(status_code=404, detail="Unknown destination")
    record_event("compare", {"entry_a": a, "entry_b": b})
    return result


@app.get("/discover/trending", response_model=list[EntryOut])
def discover_trending(limit: int = Query(default=6, ge=1, le=50)) -> list[EntryOut]:
    return [EntryOut.from_entry(e) for e in trending(get_catalog().get_all(), limit)]


@app.get("/discover/budget", response_model=list[EntryOut])
def discover_budget(limit: int = Query(default=4, ge=1, le=50)) -> list[EntryOut]:
    return [EntryOut.from_entry(e) for e in budget_friendly(get_catalog().get_all(), limit)]


@app.get("/discover/hidden-gems")
def discover_hidden_gems(limit: int = Query(default=4, ge=1, le=50)) -> list[dict]:
    gems = emerging_destinations(get_catalog().get_all(), limit)
    return [
        {"entry": EntryOut.from_entry(e).model_dump(), "info": hidden_gem_info(e).model_dump()}
        for e in gems
    ]


# ── User endpoints ───────────────────────────────────────────────────────


@app.post("/users/{user_id}/visits")
def visit(user_id: str, body: VisitRequest) -> dict:
    if get_catalog().get_by_id(body.entry_id) is None:
        raise HTTPException(status_code=404, detail="Unknown destination")
    if body.registered:
        register_user(user_id)
    record = track_visit(user_id, body.entry_id)
    return {"status": "recorded", "record": record.model_dump(mode="json")}


@app.post("/users/{user_id}/sections")
def section(user_id: str, body: SectionRequest) -> dict:
    record = track_section(user_id, body.entry_id, body.section)
    if record is None:
        raise HTTPException(status_code=404, detail="Destination not in history")
    return {"status": "recorded", "record": record.model_dump(mode="json")}


@app.post("/users/{user_id}/interactions")
def interaction(user_id: str, body: InteractionRequest) -> dict:
    record = track_interaction(user_id, body.entry_id, body.kind, body.target)
    if record is None:
        raise HTTPException(status_code=404, detail="Destination not in history")
    return {"status": "recorded", "record": record.model_dump(mode="json")}


@app.put("/users/{user_id}/preferences")
def preferences(user_id: str, body: PreferencesRequest) -> dict:
    profile = update_preferences(user_id, UserPreference(
        travel_styles=tuple(body.travel_styles),
        budget_level=body.budget_level,
        interests=tuple(body.interests),
    ))
    return profile.model_dump(mode="json")


@app.get("/users/{user_id}/recommendations", response_model=RecommendationResponse)
def recommendations(
    user_id: str,
    limit: int = Query(default=6, ge=1, le=50),
) -> RecommendationResponse:
    profile = get_profile(user_id)
    history = get_history(user_id)
    interests = implicit_interests(history)

    scored = score_recommendations(get_catalog().get_all(), profile, history)[:limit]
    items = [
        RecommendationItem(
            entry=EntryOut.from_entry(entry),
            score=round(score, 4),
            reason=recommendation_reason(entry, profile, interests),
        )
        for entry, score in scored
    ]

    record_event("recommendations", {
        "user_id": user_id,
        "entry_ids": [item.entry.id for item in items],
    })

    return RecommendationResponse(
        user_id=user_id,
        implicit_interests=interests,
        recommendations=items,
        visibility=section_visibility(history, profile.user_type == UserType.registered),
    )


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
