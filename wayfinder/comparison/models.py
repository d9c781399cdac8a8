from __future__ import annotations

from pydantic import BaseModel, Field

from ..catalog.models import EntryOut

RowValue = float | int | str | None


class ComparisonRow(BaseModel):
    key: str
    label: str
    value_a: RowValue = None
    value_b: RowValue = None
    sub_label_a: str | None = None
    sub_label_b: str | None = None
    # 0 = tie or informational only, 1 = first destination, 2 = second
    winner: int = Field(default=0, ge=0, le=2)


class ComparisonResult(BaseModel):
    entry_a: EntryOut
    entry_b: EntryOut
    rows: list[ComparisonRow]
    verdict: str
    ideal_traveler_a: str
    ideal_traveler_b: str
