from __future__ import annotations

import re

from pydantic import BaseModel

EXACT_SCORE = 1.0
PREFIX_SCORE = 0.9
SUBSTRING_SCORE = 0.7
SUBSEQUENCE_FLOOR = 0.3
SUBSEQUENCE_SCALE = 0.6


class Highlight(BaseModel):
    text: str
    start: int | None = None
    end: int | None = None


def match_score(text: str, query: str) -> float:
    """
    Score how well ``query`` matches ``text``, case-insensitively.

    Rules are tried in order and the first that applies wins: exact match,
    prefix, contiguous substring, then an in-order subsequence of the query
    characters. Returns 0.0 when nothing matches.
    """
    text = text.lower()
    query = query.lower()

    if text == query:
        return EXACT_SCORE
    if not query:
        return 0.0
    if text.startswith(query):
        return PREFIX_SCORE
    if query in text:
        return SUBSTRING_SCORE

    # Greedy scan: consume query characters in order
    matched = 0
    for ch in text:
        if matched == len(query):
            break
        if ch == query[matched]:
            matched += 1

    if matched == len(query):
        return max(SUBSEQUENCE_FLOOR, SUBSEQUENCE_SCALE * matched / len(query))
    return 0.0


def highlight(text: str, query: str) -> Highlight:
    """Locate the first literal, case-insensitive occurrence of query in text."""
    # Searched in the original text so offsets survive length-changing case folds
    m = re.search(re.escape(query), text, re.IGNORECASE) if query else None
    if m is None:
        return Highlight(text=text)
    return Highlight(text=text, start=m.start(), end=m.end())
