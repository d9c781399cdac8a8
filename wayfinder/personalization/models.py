from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..catalog.models import EntryOut


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InteractionKind(str, Enum):
    view = "view"
    save = "save"
    share = "share"
    click_external = "click-external"
    expand_section = "expand-section"


# Interactions that count double towards an implicit interest
STRONG_SIGNALS = frozenset({InteractionKind.save, InteractionKind.expand_section})


class Interaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: InteractionKind
    target: str
    timestamp: datetime = Field(default_factory=utcnow)


class InteractionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    entry_id: str = Field(..., min_length=1)
    visited_at: datetime = Field(default_factory=utcnow)
    sections_explored: tuple[str, ...] = ()
    interactions: tuple[Interaction, ...] = ()
    time_spent: int = Field(default=0, ge=0)


class UserType(str, Enum):
    guest = "guest"
    registered = "registered"


class UserPreference(BaseModel):
    model_config = ConfigDict(frozen=True)

    travel_styles: tuple[str, ...] = ()
    budget_level: int = Field(default=3, ge=1, le=5)
    interests: tuple[str, ...] = ()


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str = "anonymous"
    user_type: UserType = UserType.guest
    explicit_preferences: UserPreference | None = None


class SectionVisibility(BaseModel):
    show_recommended: bool
    show_recent: bool
    show_comparisons: bool
    show_deals: bool = True


# ── API payloads ─────────────────────────────────────────────────────────


class VisitRequest(BaseModel):
    entry_id: str = Field(..., min_length=1)
    registered: bool = False


class InteractionRequest(BaseModel):
    entry_id: str = Field(..., min_length=1)
    kind: InteractionKind
    target: str = Field(..., min_length=1)


class SectionRequest(BaseModel):
    entry_id: str = Field(..., min_length=1)
    section: str = Field(..., min_length=1)


class PreferencesRequest(BaseModel):
    travel_styles: list[str] = Field(default_factory=list)
    budget_level: int = Field(default=3, ge=1, le=5)
    interests: list[str] = Field(default_factory=list)


class RecommendationItem(BaseModel):
    entry: EntryOut
    score: float
    reason: str


class RecommendationResponse(BaseModel):
    user_id: str
    implicit_interests: list[str]
    recommendations: list[RecommendationItem]
    visibility: SectionVisibility
