from __future__ import annotations

from collections.abc import Sequence

from ..catalog.models import CatalogEntry

SAME_GROUP_BONUS = 20
PRICE_GAP_PENALTY = 5
SHARED_TAG_BONUS = 15


def similarity(a: CatalogEntry, b: CatalogEntry) -> float:
    """Symmetric similarity: same continent, close price level, shared tags."""
    score = 0.0
    if a.group == b.group:
        score += SAME_GROUP_BONUS
    score -= PRICE_GAP_PENALTY * abs(a.price_level - b.price_level)
    score += SHARED_TAG_BONUS * len(a.tag_set & b.tag_set)
    return score


def get_similar_entries(
    target_id: str,
    entries: Sequence[CatalogEntry],
    limit: int = 4,
) -> list[CatalogEntry]:
    """Destinations most similar to ``target_id``; empty if it is unknown."""
    target = next((e for e in entries if e.id == target_id), None)
    if target is None or limit <= 0:
        return []

    others = [e for e in entries if e.id != target_id]
    others.sort(key=lambda e: similarity(target, e), reverse=True)
    return others[:limit]
