"""Timestamp helpers.

All persisted timestamps are ISO-8601 UTC strings with millisecond
precision and a ``Z`` suffix, e.g. ``2025-01-31T09:15:00.000Z``.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def to_iso(moment: datetime) -> str:
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    """Current time as a persisted timestamp string."""
    return to_iso(utc_now())


def backup_stamp(moment: datetime | None = None) -> str:
    """Filesystem-safe, lexicographically sortable timestamp."""
    return to_iso(moment or utc_now()).replace(":", "-").replace(".", "-")
