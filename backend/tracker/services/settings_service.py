"""User settings and learning streak."""

from datetime import datetime, timedelta
from typing import Any

from tracker.core.errors import DocumentNotFoundError
from tracker.core.logging import get_logger
from tracker.core.storage import DocumentStore
from tracker.core.timestamps import to_iso, utc_now
from tracker.schemas.user_settings import LearningStreak, UserSettings
from tracker.services.documents import new_id, touch

logger = get_logger(__name__)

SETTINGS = "settings"
MAX_STUDY_SESSIONS = 100


def default_settings_data() -> dict[str, Any]:
    document = {
        "settings": UserSettings().model_dump(mode="json", by_alias=True, exclude_none=True),
        "streak": LearningStreak().model_dump(mode="json", by_alias=True),
    }
    touch(document)
    return document


async def load_user_settings(store: DocumentStore) -> dict[str, Any]:
    """Stored settings, or defaults when nothing has been saved yet."""
    try:
        return await store.read(SETTINGS)
    except DocumentNotFoundError:
        return default_settings_data()


async def update_user_settings(
    store: DocumentStore,
    *,
    settings: dict[str, Any] | None = None,
    streak: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Merge new preference and streak values over the current ones."""
    current = await load_user_settings(store)
    document = {
        "settings": {**current["settings"], **(settings or {})},
        "streak": {**current["streak"], **streak} if streak else current["streak"],
    }
    touch(document)
    await store.write(SETTINGS, document)

    logger.info("Settings updated", fields=sorted(settings or {}))
    return document


def advance_streak(
    streak: dict[str, Any], session: dict[str, Any], now: datetime
) -> dict[str, Any]:
    """Streak after studying at ``now``.

    Same day: unchanged. The day after the last study day: +1.
    Anything else: the streak restarts at 1.
    """
    today = now.date().isoformat()
    yesterday = (now - timedelta(days=1)).date().isoformat()
    last_day = (streak.get("lastStudyDate") or "").split("T")[0]

    current_streak = streak.get("currentStreak", 0)
    longest_streak = streak.get("longestStreak", 0)
    if last_day == today:
        pass
    elif last_day == yesterday:
        current_streak += 1
    else:
        current_streak = 1
    longest_streak = max(longest_streak, current_streak)

    timestamp = to_iso(now)
    recorded = {
        "id": new_id("session"),
        **session,
        "startTime": session.get("startTime") or timestamp,
    }
    sessions = list(streak.get("studySessions") or [])[-(MAX_STUDY_SESSIONS - 1) :]

    return {
        "currentStreak": current_streak,
        "longestStreak": longest_streak,
        "lastStudyDate": timestamp,
        "totalStudyDays": streak.get("totalStudyDays", 0) + (0 if last_day == today else 1),
        "studySessions": [*sessions, recorded],
    }


async def record_study_session(
    store: DocumentStore, session: dict[str, Any], now: datetime | None = None
) -> dict[str, Any]:
    current = await load_user_settings(store)
    streak = advance_streak(current["streak"], session, now or utc_now())
    document = {**current, "streak": streak}
    touch(document)
    await store.write(SETTINGS, document)

    logger.info("Study session recorded", current_streak=streak["currentStreak"])
    return document
