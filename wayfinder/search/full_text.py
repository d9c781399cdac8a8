from __future__ import annotations

import logging
from collections.abc import Sequence

from ..catalog.models import CatalogEntry
from ..config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .matcher import match_score

logger = logging.getLogger(__name__)

NAME_WEIGHT = 1.0
REGION_WEIGHT = 0.7
GROUP_WEIGHT = 0.5
TAG_WEIGHT = 0.4


def score_entry(entry: CatalogEntry, query: str) -> float:
    """
    Average the weighted scores of every field that matched the query.

    Tags count as one field: the mean of all matching tag scores. Fields
    scoring zero do not count towards the average.
    """
    contributions: list[float] = []

    for text, weight in (
        (entry.name, NAME_WEIGHT),
        (entry.region, REGION_WEIGHT),
        (entry.group, GROUP_WEIGHT),
    ):
        raw = match_score(text, query)
        if raw > 0:
            contributions.append(raw * weight)

    tag_scores = [s for s in (match_score(tag, query) for tag in entry.tags) if s > 0]
    if tag_scores:
        contributions.append(sum(tag_scores) / len(tag_scores) * TAG_WEIGHT)

    if not contributions:
        return 0.0
    return sum(contributions) / len(contributions)


def search_scored(
    entries: Sequence[CatalogEntry],
    query: str,
    limit: int = 50,
    min_score: float = 0.2,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[tuple[CatalogEntry, float]]:
    query = (query or "").strip()
    if len(query) < config.min_query_length or limit <= 0:
        return []

    results: list[tuple[CatalogEntry, float]] = []
    for entry in entries:
        score = score_entry(entry, query)
        if score > 0 and score >= min_score:
            results.append((entry, score))

    results.sort(key=lambda pair: pair[1], reverse=True)
    logger.debug("Search %r: %d results above %.2f", query, len(results), min_score)
    return results[:limit]


def search(
    entries: Sequence[CatalogEntry],
    query: str,
    limit: int = 50,
    min_score: float = 0.2,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[CatalogEntry]:
    """Full-catalog search, best match first."""
    return [entry for entry, _ in search_scored(entries, query, limit, min_score, config)]
