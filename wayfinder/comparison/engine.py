from __future__ import annotations

import logging
from collections.abc import Sequence

from ..catalog.data_store import CatalogSnapshot
from ..catalog.models import CatalogEntry, EntryOut
from .criteria import DEFAULT_CRITERIA, Criterion, decide_winner
from .models import ComparisonResult, ComparisonRow

logger = logging.getLogger(__name__)

# First matching tag names the traveller a destination suits best
IDEAL_TRAVELERS: tuple[tuple[str, str], ...] = (
    ("romantic", "Couples and romantics"),
    ("adventure", "Adventurers"),
    ("cultural", "Culture lovers"),
    ("foodie", "Food lovers"),
    ("beach", "Beach lovers"),
    ("nightlife", "Night owls"),
    ("family", "Families"),
    ("budget", "Budget travellers"),
)
DEFAULT_TRAVELER = "All travellers"


def compare(
    a: CatalogEntry,
    b: CatalogEntry,
    criteria: Sequence[Criterion] = DEFAULT_CRITERIA,
) -> list[ComparisonRow]:
    """One row per criterion, in table order."""
    rows: list[ComparisonRow] = []
    for criterion in criteria:
        value_a = criterion.extract(a)
        value_b = criterion.extract(b)
        rows.append(ComparisonRow(
            key=criterion.key,
            label=criterion.label,
            value_a=value_a,
            value_b=value_b,
            sub_label_a=criterion.describe(a) if criterion.describe else None,
            sub_label_b=criterion.describe(b) if criterion.describe else None,
            winner=decide_winner(criterion.rule, value_a, value_b),
        ))
    return rows


def ideal_traveler(entry: CatalogEntry) -> str:
    for tag, traveler in IDEAL_TRAVELERS:
        if tag in entry.tag_set:
            return traveler
    return DEFAULT_TRAVELER


def verdict(a: CatalogEntry, b: CatalogEntry) -> str:
    if a.price_level == b.price_level and a.rating == b.rating:
        return (
            f"{a.name} and {b.name} are both excellent choices! Pick by personal "
            f"taste: {a.name} is perfect for {ideal_traveler(a).lower()}, while "
            f"{b.name} is ideal for {ideal_traveler(b).lower()}."
        )

    for cheap, other in ((a, b), (b, a)):
        if cheap.price_level < other.price_level and cheap.rating >= other.rating:
            return (
                f"{cheap.name} offers the best value for money: it costs less and "
                f"is rated the same or higher than {other.name}."
            )

    premium, budget = (a, b) if a.rating > b.rating else (b, a)
    return (
        f"If you want a premium experience, choose {premium.name}. If you want to "
        f"save without giving up quality, {budget.name} is a great alternative."
    )


def compare_entries(
    entry_id_a: str,
    entry_id_b: str,
    catalog: CatalogSnapshot,
    criteria: Sequence[Criterion] = DEFAULT_CRITERIA,
) -> ComparisonResult | None:
    """Compare two destinations by id; ``None`` when either id is unknown."""
    a = catalog.get_by_id(entry_id_a)
    b = catalog.get_by_id(entry_id_b)
    if a is None or b is None:
        logger.warning("Cannot compare %r with %r: unknown destination", entry_id_a, entry_id_b)
        return None

    return ComparisonResult(
        entry_a=EntryOut.from_entry(a),
        entry_b=EntryOut.from_entry(b),
        rows=compare(a, b, criteria),
        verdict=verdict(a, b),
        ideal_traveler_a=ideal_traveler(a),
        ideal_traveler_b=ideal_traveler(b),
    )
