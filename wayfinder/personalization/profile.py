from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime, timezone

from .models import STRONG_SIGNALS, InteractionRecord, SectionVisibility, utcnow

DECAY_PER_DAY = 0.05
MIN_RECENCY_WEIGHT = 0.1
STRONG_SIGNAL_MULTIPLIER = 2.0
MAX_IMPLICIT_INTERESTS = 5

_SECONDS_PER_DAY = 60 * 60 * 24


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def days_since(moment: datetime, now: datetime) -> int:
    """Whole days elapsed between ``moment`` and ``now``; never negative."""
    elapsed = (_as_utc(now) - _as_utc(moment)).total_seconds()
    return max(0, math.floor(elapsed / _SECONDS_PER_DAY))


def recency_weight(moment: datetime, now: datetime) -> float:
    """Linear decay of 5% per day, floored at 0.1."""
    return max(MIN_RECENCY_WEIGHT, 1.0 - days_since(moment, now) * DECAY_PER_DAY)


def interest_weights(
    history: Sequence[InteractionRecord],
    now: datetime | None = None,
) -> dict[str, float]:
    """
    Accumulate recency-weighted interest per tag.

    Every explored section adds the record's recency weight to its tag; a
    "save" or "expand-section" interaction adds twice that weight to its
    target. The recency of a record is measured from its visit time.
    Insertion order of the returned mapping is first-seen order.
    """
    now = now or utcnow()
    weights: dict[str, float] = {}

    for record in history:
        weight = recency_weight(record.visited_at, now)

        for section in record.sections_explored:
            weights[section] = weights.get(section, 0.0) + weight

        for interaction in record.interactions:
            if interaction.kind in STRONG_SIGNALS:
                weights[interaction.target] = (
                    weights.get(interaction.target, 0.0) + weight * STRONG_SIGNAL_MULTIPLIER
                )

    return weights


def implicit_interests(
    history: Sequence[InteractionRecord],
    now: datetime | None = None,
    limit: int = MAX_IMPLICIT_INTERESTS,
) -> list[str]:
    """Top interests by accumulated weight; ties keep first-seen order."""
    weights = interest_weights(history, now)
    ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    return [tag for tag, _ in ranked[:limit]]


def section_visibility(
    history: Sequence[InteractionRecord],
    is_registered: bool = False,
) -> SectionVisibility:
    """Progressively reveal personalized sections as engagement grows."""
    visits = len(history)
    return SectionVisibility(
        show_recommended=visits >= 2,
        show_recent=visits >= 1,
        show_comparisons=visits >= 3 or is_registered,
    )
