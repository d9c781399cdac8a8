from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SuggestedDays(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int = Field(default=1, ge=1)
    max: int = Field(default=1, ge=1)


class CatalogEntry(BaseModel):
    """One destination. Treated as a value: never mutated once built."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    region: str = Field(default="", description="Country or region")
    group: str = Field(default="", description="Continent")
    tagline: str = ""
    tags: tuple[str, ...] = ()
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    popularity: int = Field(default=0, ge=0, le=100)
    price_level: int = Field(default=3, ge=1, le=5)
    best_periods: tuple[str, ...] = ()
    suggested_days: SuggestedDays = Field(default_factory=SuggestedDays)
    utc_offset: float | None = Field(default=None, ge=-12.0, le=14.0)
    languages: tuple[str, ...] = ()
    currency: str = ""
    emergency_number: str = ""

    @field_validator("tags")
    @classmethod
    def _unique_tags(cls, tags: tuple[str, ...]) -> tuple[str, ...]:
        # Keep first-seen order, drop blanks and repeats
        seen: dict[str, None] = {}
        for tag in tags:
            tag = tag.strip()
            if tag:
                seen.setdefault(tag, None)
        return tuple(seen)

    @property
    def tag_set(self) -> frozenset[str]:
        return frozenset(self.tags)


class EntryOut(BaseModel):
    id: str
    name: str
    region: str
    group: str
    tags: list[str]
    rating: float
    popularity: int
    price_level: int

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "EntryOut":
        return cls(
            id=entry.id,
            name=entry.name,
            region=entry.region,
            group=entry.group,
            tags=list(entry.tags),
            rating=entry.rating,
            popularity=entry.popularity,
            price_level=entry.price_level,
        )
