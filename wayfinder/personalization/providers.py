from __future__ import annotations

import logging
from datetime import datetime

from .models import (
    Interaction,
    InteractionKind,
    InteractionRecord,
    UserPreference,
    UserProfile,
    UserType,
    utcnow,
)

logger = logging.getLogger(__name__)

GUEST_HISTORY_LIMIT = 20
REGISTERED_HISTORY_LIMIT = 100

# Newest record first
_histories: dict[str, list[InteractionRecord]] = {}
_profiles: dict[str, UserProfile] = {}


def _history_limit(user_id: str) -> int:
    if get_profile(user_id).user_type == UserType.registered:
        return REGISTERED_HISTORY_LIMIT
    return GUEST_HISTORY_LIMIT


def _find(history: list[InteractionRecord], entry_id: str) -> int:
    for i, record in enumerate(history):
        if record.entry_id == entry_id:
            return i
    return -1


def get_history(user_id: str) -> list[InteractionRecord]:
    return list(_histories.get(user_id, []))


def track_visit(user_id: str, entry_id: str, now: datetime | None = None) -> InteractionRecord:
    """Record a visit, moving a revisited destination back to the front."""
    now = now or utcnow()
    history = _histories.setdefault(user_id, [])
    idx = _find(history, entry_id)
    if idx >= 0:
        previous = history.pop(idx)
        record = previous.model_copy(
            update={"visited_at": now, "time_spent": previous.time_spent + 1},
        )
    else:
        record = InteractionRecord(entry_id=entry_id, visited_at=now)
    history.insert(0, record)
    del history[_history_limit(user_id):]
    return record


def track_section(user_id: str, entry_id: str, section: str) -> InteractionRecord | None:
    history = _histories.get(user_id, [])
    idx = _find(history, entry_id)
    if idx < 0:
        logger.warning("Section %r tracked for %s before any visit to %s", section, user_id, entry_id)
        return None
    record = history[idx]
    if section not in record.sections_explored:
        record = record.model_copy(
            update={"sections_explored": record.sections_explored + (section,)},
        )
        history[idx] = record
    return record


def track_interaction(
    user_id: str,
    entry_id: str,
    kind: InteractionKind,
    target: str,
    now: datetime | None = None,
) -> InteractionRecord | None:
    history = _histories.get(user_id, [])
    idx = _find(history, entry_id)
    if idx < 0:
        logger.warning("Interaction %s tracked for %s before any visit to %s", kind.value, user_id, entry_id)
        return None
    interaction = Interaction(kind=kind, target=target, timestamp=now or utcnow())
    record = history[idx].model_copy(
        update={"interactions": history[idx].interactions + (interaction,)},
    )
    history[idx] = record
    return record


def get_profile(user_id: str) -> UserProfile:
    return _profiles.get(user_id) or UserProfile(user_id=user_id)


def register_user(user_id: str) -> UserProfile:
    profile = get_profile(user_id).model_copy(update={"user_type": UserType.registered})
    _profiles[user_id] = profile
    return profile


def update_preferences(user_id: str, preferences: UserPreference) -> UserProfile:
    """Store explicit preferences; only registered users carry them."""
    profile = UserProfile(
        user_id=user_id,
        user_type=UserType.registered,
        explicit_preferences=preferences,
    )
    _profiles[user_id] = profile
    return profile


def clear_users() -> None:
    _histories.clear()
    _profiles.clear()
