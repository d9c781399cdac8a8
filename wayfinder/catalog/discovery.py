"""
Catalog-level discovery lists: trending, budget-friendly and hidden gems.

All functions take the entry sequence explicitly and never mutate it.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field

from .models import CatalogEntry

AUTHENTIC_TAG_HINTS = ("cultur", "histor", "local", "tradition", "authentic")
UNIQUE_TAG_HINTS = ("nature", "adventure", "spiritual", "art", "culinary")

MIN_GEM_REASONS = 2
MIN_GEM_SCORE = 50
MIN_GEM_RATING = 4.0


class HiddenGemReason(BaseModel):
    type: str
    label: str
    description: str


class HiddenGemInfo(BaseModel):
    reasons: list[HiddenGemReason] = Field(default_factory=list)
    score: int = 0
    description: str = ""

    @property
    def is_hidden_gem(self) -> bool:
        return len(self.reasons) >= MIN_GEM_REASONS and self.score >= MIN_GEM_SCORE


def _has_hint(tags: Sequence[str], hints: Sequence[str]) -> bool:
    return any(hint in tag.lower() for tag in tags for hint in hints)


def trending(entries: Sequence[CatalogEntry], limit: int = 6) -> list[CatalogEntry]:
    return sorted(entries, key=lambda e: e.popularity, reverse=True)[:limit]


def budget_friendly(entries: Sequence[CatalogEntry], limit: int = 4) -> list[CatalogEntry]:
    cheap = [e for e in entries if e.price_level <= 2]
    return sorted(cheap, key=lambda e: (e.price_level, -e.rating))[:limit]


def by_group(entries: Sequence[CatalogEntry], group: str) -> list[CatalogEntry]:
    return [e for e in entries if e.group == group]


def by_tag(entries: Sequence[CatalogEntry], tag: str) -> list[CatalogEntry]:
    return [e for e in entries if tag in e.tags]


_GEM_DESCRIPTIONS = {
    "low-popularity": "A little-known destination rated {rating}/5, perfect for travellers after authenticity.",
    "underrated": "Underrated but full of potential, well worth a visit.",
    "budget-friendly": "An extraordinary experience at an accessible price ({price}), ideal for budget-minded travellers.",
    "authentic": "A genuine experience away from the most beaten tourist paths.",
    "unique-experience": "Offers unique experiences you will not find elsewhere.",
    "emerging": "An emerging destination gaining popularity among seasoned travellers.",
}


def hidden_gem_info(entry: CatalogEntry) -> HiddenGemInfo:
    """Score how much of a hidden gem a destination is, with the reasons why."""
    reasons: list[HiddenGemReason] = []
    score = 0

    if entry.popularity < 60 and entry.rating >= 4.2:
        reasons.append(HiddenGemReason(
            type="low-popularity",
            label="Off the tourist radar",
            description=(
                f"With a popularity score of {entry.popularity}, this destination "
                "offers an authentic experience away from the crowds."
            ),
        ))
        score += 30
    elif entry.popularity < 70 and entry.rating >= 4.0:
        reasons.append(HiddenGemReason(
            type="underrated",
            label="Underrated",
            description="A destination that deserves more attention than it gets.",
        ))
        score += 20

    if entry.price_level <= 2:
        reasons.append(HiddenGemReason(
            type="budget-friendly",
            label="Affordable",
            description=f"At {'€' * entry.price_level} it offers great value for money.",
        ))
        score += 25

    if _has_hint(entry.tags, AUTHENTIC_TAG_HINTS):
        reasons.append(HiddenGemReason(
            type="authentic",
            label="Authentic",
            description="A genuine experience away from the most beaten tourist paths.",
        ))
        score += 20

    if _has_hint(entry.tags, UNIQUE_TAG_HINTS) and entry.rating >= 4.3:
        reasons.append(HiddenGemReason(
            type="unique-experience",
            label="Unique experience",
            description="Offers something special you will not find anywhere else.",
        ))
        score += 25

    if entry.popularity < 50 and entry.rating >= 4.5:
        reasons.append(HiddenGemReason(
            type="emerging",
            label="On the rise",
            description="An emerging destination gaining popularity among seasoned travellers.",
        ))
        score += 15

    description = ""
    if reasons:
        description = _GEM_DESCRIPTIONS[reasons[0].type].format(
            rating=entry.rating, price="€" * entry.price_level,
        )

    return HiddenGemInfo(reasons=reasons, score=min(100, score), description=description)


def emerging_destinations(entries: Sequence[CatalogEntry], limit: int = 4) -> list[CatalogEntry]:
    scored = [(e, hidden_gem_info(e)) for e in entries]
    gems = [
        (e, info) for e, info in scored
        if info.is_hidden_gem and e.rating >= MIN_GEM_RATING
    ]
    gems.sort(key=lambda pair: pair[1].score, reverse=True)
    return [e for e, _ in gems[:limit]]
