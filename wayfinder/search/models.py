from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from ..catalog.models import CatalogEntry, EntryOut
from .matcher import Highlight


class MatchField(str, Enum):
    name = "name"
    region = "region"
    group = "group"
    tag = "tag"


class MatchResult(BaseModel):
    entry_id: str
    field: MatchField
    raw_score: float = Field(..., ge=0.0, le=1.0)
    weighted_score: float


class Suggestion(BaseModel):
    entry: CatalogEntry
    match_type: MatchField
    match_score: float
    highlight: Highlight


class SuggestionOut(BaseModel):
    entry: EntryOut
    match_type: MatchField
    match_score: float
    highlight: Highlight


class SuggestResponse(BaseModel):
    query: str
    suggestions: list[SuggestionOut]


class SearchHit(BaseModel):
    entry: EntryOut
    score: float


class SearchResponse(BaseModel):
    query: str
    results: list[SearchHit]
    total: int
