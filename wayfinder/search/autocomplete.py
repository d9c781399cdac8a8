from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..catalog.models import CatalogEntry
from ..config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .matcher import highlight, match_score
from .models import MatchField, MatchResult, Suggestion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldRule:
    field: MatchField
    threshold: float
    weight: float
    values: Callable[[CatalogEntry], Sequence[str]]


# Tried in this order; the first field clearing its threshold wins.
FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule(MatchField.name, 0.3, 1.0, lambda e: (e.name,)),
    FieldRule(MatchField.region, 0.4, 0.8, lambda e: (e.region,)),
    FieldRule(MatchField.group, 0.5, 0.6, lambda e: (e.group,)),
    FieldRule(MatchField.tag, 0.5, 0.5, lambda e: e.tags),
)


def _first_match(entry: CatalogEntry, query: str) -> tuple[MatchResult, str] | None:
    for rule in FIELD_RULES:
        for value in rule.values(entry):
            raw = match_score(value, query)
            if raw > rule.threshold:
                result = MatchResult(
                    entry_id=entry.id,
                    field=rule.field,
                    raw_score=raw,
                    weighted_score=raw * rule.weight,
                )
                return result, value
    return None


def get_suggestions(
    entries: Sequence[CatalogEntry],
    query: str,
    limit: int = 5,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[Suggestion]:
    """
    Return at most ``limit`` autocomplete suggestions, best first.

    Each destination contributes at most one suggestion: fields are tested
    name, region, group, then tags, and testing stops at the first field
    whose fuzzy score clears that field's threshold.
    """
    query = (query or "").strip()
    if len(query) < config.min_query_length or limit <= 0:
        return []

    best: dict[str, Suggestion] = {}
    for entry in entries:
        found = _first_match(entry, query)
        if found is None:
            continue
        result, matched_text = found
        current = best.get(entry.id)
        if current is None or result.weighted_score > current.match_score:
            best[entry.id] = Suggestion(
                entry=entry,
                match_type=result.field,
                match_score=result.weighted_score,
                highlight=highlight(matched_text, query),
            )

    ranked = sorted(best.values(), key=lambda s: s.match_score, reverse=True)
    logger.debug("Autocomplete %r: %d matches", query, len(ranked))
    return ranked[:limit]
