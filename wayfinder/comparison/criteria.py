from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ..catalog.models import CatalogEntry
from ..config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .models import RowValue

SUMMER = ("June", "July", "August")
SPRING = ("March", "April", "May")
AUTUMN = ("September", "October", "November")

EASY_LANGUAGES = ("English", "Spanish", "French", "Italian", "Portuguese")
EASY_CURRENCIES = ("USD", "GBP")

DAILY_BUDGETS = ("", "30-50€/day", "50-80€/day", "80-120€/day", "120-180€/day", "180€+/day")


class WinnerRule(str, Enum):
    higher_is_better = "higher"
    lower_is_better = "lower"
    advisory = "advisory"


@dataclass(frozen=True)
class Criterion:
    key: str
    label: str
    extract: Callable[[CatalogEntry], RowValue]
    rule: WinnerRule
    describe: Callable[[CatalogEntry], str] | None = None


def decide_winner(rule: WinnerRule, value_a: RowValue, value_b: RowValue) -> int:
    """1 if the first side wins, 2 if the second does, 0 for a tie or no contest."""
    if rule is WinnerRule.advisory or value_a is None or value_b is None:
        return 0
    if value_a == value_b:
        return 0
    if rule is WinnerRule.higher_is_better:
        return 1 if value_a > value_b else 2
    return 1 if value_a < value_b else 2


# ── Describers ───────────────────────────────────────────────────────────


def rating_label(rating: float) -> str:
    if rating >= 4.8:
        return "Excellent"
    if rating >= 4.5:
        return "Great"
    if rating >= 4.0:
        return "Very good"
    if rating >= 3.5:
        return "Good"
    return "Fair"


def popularity_label(popularity: int) -> str:
    if popularity >= 90:
        return "World top"
    if popularity >= 75:
        return "Very popular"
    if popularity >= 50:
        return "Popular"
    if popularity >= 25:
        return "Rising"
    return "Hidden"


def trip_type_label(days: int) -> str:
    if days <= 3:
        return "Long weekend"
    if days <= 5:
        return "Short week"
    if days <= 7:
        return "Full week"
    return "Extended trip"


def season_label(months: tuple[str, ...]) -> str:
    if any(m in SUMMER for m in months):
        return "Summer high season"
    if any(m in SPRING for m in months):
        return "Ideal in spring"
    if any(m in AUTUMN for m in months):
        return "Best in autumn"
    return "Winter / low season"


def jet_lag_label(hours: float) -> str:
    if hours <= 1:
        return "No jet lag"
    if hours <= 3:
        return "Mild jet lag"
    if hours <= 7:
        return "Moderate jet lag"
    return "Significant jet lag"


def quality_of_life(entry: CatalogEntry) -> float:
    return round(entry.rating * 20 + entry.popularity * 0.3, 2)


def _format_offset(offset: float) -> str:
    hours = int(offset) if float(offset).is_integer() else offset
    return f"UTC{'+' if offset >= 0 else ''}{hours}"


# ── Criterion table ──────────────────────────────────────────────────────


def build_criteria(config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> tuple[Criterion, ...]:
    reference = config.reference_utc_offset
    home_currency = config.home_currency

    def jet_lag(entry: CatalogEntry) -> float | None:
        if entry.utc_offset is None:
            return None
        return abs(entry.utc_offset - reference)

    def describe_jet_lag(entry: CatalogEntry) -> str:
        hours = jet_lag(entry)
        if hours is None:
            return "Time zone unknown"
        return f"{_format_offset(entry.utc_offset)} · {jet_lag_label(hours)}"

    def describe_currency(entry: CatalogEntry) -> str:
        if entry.currency == home_currency:
            return "No exchange needed"
        if entry.currency in EASY_CURRENCIES:
            return "Easy exchange"
        return "Exchange on arrival"

    def describe_languages(entry: CatalogEntry) -> str:
        if any(lang in EASY_LANGUAGES for lang in entry.languages):
            return "Easy to communicate"
        return "Translator app helpful"

    return (
        Criterion(
            "rating", "Overall rating",
            lambda e: e.rating, WinnerRule.higher_is_better,
            lambda e: rating_label(e.rating),
        ),
        Criterion(
            "price_level", "Daily budget",
            lambda e: e.price_level, WinnerRule.lower_is_better,
            lambda e: DAILY_BUDGETS[e.price_level],
        ),
        Criterion(
            "popularity", "Popularity",
            lambda e: e.popularity, WinnerRule.higher_is_better,
            lambda e: popularity_label(e.popularity),
        ),
        Criterion(
            "quality_of_life", "Quality of life",
            quality_of_life, WinnerRule.higher_is_better,
        ),
        Criterion(
            "suggested_days", "Suggested stay",
            lambda e: f"{e.suggested_days.min}-{e.suggested_days.max} days", WinnerRule.advisory,
            lambda e: trip_type_label(e.suggested_days.max),
        ),
        Criterion(
            "best_period", "Best period",
            lambda e: " - ".join(e.best_periods[:2]) or None, WinnerRule.advisory,
            lambda e: season_label(e.best_periods),
        ),
        Criterion(
            "jet_lag", "Time difference (hours)",
            jet_lag, WinnerRule.lower_is_better,
            describe_jet_lag,
        ),
        Criterion(
            "currency", "Currency",
            lambda e: e.currency or None, WinnerRule.advisory,
            describe_currency,
        ),
        Criterion(
            "languages", "Languages",
            lambda e: ", ".join(e.languages) or None, WinnerRule.advisory,
            describe_languages,
        ),
        Criterion(
            "emergency_number", "Emergency number",
            lambda e: e.emergency_number or None, WinnerRule.advisory,
        ),
    )


DEFAULT_CRITERIA = build_criteria()
