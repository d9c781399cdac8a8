from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

import numpy as np

from ..catalog.models import CatalogEntry
from ..config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .models import InteractionRecord, UserPreference, UserProfile
from .profile import implicit_interests

logger = logging.getLogger(__name__)

IMPLICIT_INTEREST_BONUS = 20
TRAVEL_STYLE_BONUS = 15
BUDGET_DISTANCE_PENALTY = 10
EXPLICIT_INTEREST_BONUS = 10

# Interest tags that earn the "For you" badge
REASON_TAGS: frozenset[str] = frozenset({
    "cultural", "foodie", "adventure", "relaxation", "nightlife",
    "nature", "romantic", "budget", "luxury", "history",
})


class RandomSource(Protocol):
    def uniform(self, low: float, high: float) -> float: ...


_default_rng: RandomSource = np.random.default_rng()


def base_score(
    entry: CatalogEntry,
    interests: Sequence[str],
    preferences: UserPreference | None = None,
) -> float:
    """Deterministic part of the recommendation score."""
    tags = entry.tag_set
    score = float(entry.popularity)
    score += IMPLICIT_INTEREST_BONUS * len(tags & set(interests))

    if preferences is not None:
        score += TRAVEL_STYLE_BONUS * len(tags & set(preferences.travel_styles))
        score -= BUDGET_DISTANCE_PENALTY * abs(entry.price_level - preferences.budget_level)
        score += EXPLICIT_INTEREST_BONUS * len(tags & set(preferences.interests))

    return score


def score_recommendations(
    entries: Sequence[CatalogEntry],
    profile: UserProfile,
    history: Sequence[InteractionRecord],
    rng: RandomSource | None = None,
    now: datetime | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[tuple[CatalogEntry, float]]:
    """Score every destination the user has not visited yet, best first."""
    rng = rng or _default_rng
    visited = {record.entry_id for record in history}
    interests = implicit_interests(history, now)
    preferences = profile.explicit_preferences

    scored: list[tuple[CatalogEntry, float]] = []
    for entry in entries:
        if entry.id in visited:
            continue
        jitter = float(rng.uniform(0.0, config.jitter_max))
        scored.append((entry, base_score(entry, interests, preferences) + jitter))

    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def get_recommendations(
    entries: Sequence[CatalogEntry],
    profile: UserProfile,
    history: Sequence[InteractionRecord],
    limit: int = 6,
    rng: RandomSource | None = None,
    now: datetime | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[CatalogEntry]:
    """
    Rank unseen destinations for a user.

    Results vary slightly between calls because of the random jitter; pass
    a fixed ``rng`` to make the ordering reproducible.
    """
    if limit <= 0:
        return []
    scored = score_recommendations(entries, profile, history, rng, now, config)
    logger.debug(
        "Recommendations for %s: %d candidates, %d excluded as visited",
        profile.user_id, len(scored), len(entries) - len(scored),
    )
    return [entry for entry, _ in scored[:limit]]


def recommendation_reason(
    entry: CatalogEntry,
    profile: UserProfile,
    interests: Sequence[str],
) -> str:
    """Short badge explaining why a destination is shown."""
    explicit = profile.explicit_preferences.interests if profile.explicit_preferences else ()
    matching = [t for t in entry.tags if t in interests or t in explicit]
    if any(t in REASON_TAGS for t in matching):
        return "For you"
    if entry.popularity > 80:
        return "Top trend"
    if entry.price_level <= 2:
        return "Best value"
    return "To discover"
