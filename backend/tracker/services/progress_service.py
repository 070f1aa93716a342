"""Section progress tracking.

Progress lives in a single document keyed by section id. Entries are
created lazily on the first write; a section without an entry is treated
as not started.
"""

from typing import Any

from tracker.core.logging import get_logger
from tracker.core.storage import DocumentStore
from tracker.core.timestamps import now_iso
from tracker.schemas.progress import SectionStatus
from tracker.services.documents import touch

logger = get_logger(__name__)

PROGRESS = "progress"

NOT_STARTED = SectionStatus.NOT_STARTED.value
IN_PROGRESS = SectionStatus.IN_PROGRESS.value
COMPLETED = SectionStatus.COMPLETED.value


def default_progress(timestamp: str) -> dict[str, Any]:
    return {
        "status": NOT_STARTED,
        "progress": 0,
        "startDate": None,
        "completedDate": None,
        "lastUpdated": timestamp,
    }


def clamp_progress(value: int | float) -> int | float:
    return min(100, max(0, value))


def apply_progress_patch(
    current: dict[str, Any],
    *,
    status: str | None = None,
    progress: int | float | None = None,
    now: str,
) -> dict[str, Any]:
    """Apply a status and/or percentage change to a progress entry.

    Status is applied first, then the percentage, so a single patch such
    as ``{status: "not-started", progress: 40}`` ends up in progress.

    Rules:
        completed       progress forced to 100, completedDate stamped
                        unless the entry was already completed
        not-started     dates cleared, progress zeroed
        in-progress     startDate stamped only if not already set
        progress == 100 promotes to completed
        0 < p < 100     promotes not-started to in-progress
    Percentages are clamped to [0, 100] before the rules run.
    """
    updated = {**current, "lastUpdated": now}
    already_completed = current.get("status") == COMPLETED and bool(current.get("completedDate"))

    if status is not None:
        updated["status"] = status
        if status == IN_PROGRESS and not current.get("startDate"):
            updated["startDate"] = now
        elif status == COMPLETED:
            updated["progress"] = 100
            if not already_completed:
                updated["completedDate"] = now
        elif status == NOT_STARTED:
            updated.update(startDate=None, completedDate=None, progress=0)

    if progress is not None:
        value = clamp_progress(progress)
        updated["progress"] = value
        if value == 100:
            if updated["status"] != COMPLETED:
                updated["status"] = COMPLETED
                updated["completedDate"] = now
            elif not updated.get("completedDate"):
                updated["completedDate"] = now
        elif 0 < value < 100 and updated["status"] == NOT_STARTED:
            updated["status"] = IN_PROGRESS
            if not updated.get("startDate"):
                updated["startDate"] = now

    return updated


async def get_progress(store: DocumentStore) -> dict[str, Any]:
    return await store.read(PROGRESS)


async def replace_progress(store: DocumentStore, sections: dict[str, Any]) -> dict[str, Any]:
    """Bulk-replace every section entry; percentages are clamped."""
    document = {
        "sections": {
            section_id: {**entry, "progress": clamp_progress(entry.get("progress", 0))}
            for section_id, entry in sections.items()
        }
    }
    touch(document)
    await store.write(PROGRESS, document)
    logger.info("Progress replaced", section_count=len(sections))
    return document


async def init_section_progress(
    store: DocumentStore,
    section_id: str,
    *,
    status: str = NOT_STARTED,
    progress: int | float = 0,
) -> dict[str, Any]:
    """Create (or reset) the progress entry for a section.

    The starting values go through the same rules as a patch, so a
    completed section starts at 100 and a partial one is in progress.
    """
    document = await store.read(PROGRESS)
    timestamp = now_iso()

    entry = apply_progress_patch(
        default_progress(timestamp),
        status=status,
        progress=None if status == COMPLETED else progress,
        now=timestamp,
    )
    document.setdefault("sections", {})[section_id] = entry
    touch(document)
    await store.write(PROGRESS, document)

    logger.info("Progress initialized", section_id=section_id, status=status)
    return entry


async def get_section_progress(store: DocumentStore, section_id: str) -> dict[str, Any]:
    """Entry for ``section_id``, or an unsaved not-started default."""
    document = await store.read(PROGRESS)
    return document.get("sections", {}).get(section_id) or default_progress(now_iso())


async def update_section_progress(
    store: DocumentStore, section_id: str, updates: dict[str, Any]
) -> dict[str, Any]:
    """Shallow-merge ``updates`` into a section's entry.

    Only the percentage is clamped; no status rules run.
    """
    document = await store.read(PROGRESS)
    sections = document.setdefault("sections", {})
    timestamp = now_iso()

    current = sections.get(section_id) or default_progress(timestamp)
    entry = {**current, **updates, "lastUpdated": timestamp}
    if entry.get("progress") is not None:
        entry["progress"] = clamp_progress(entry["progress"])
    sections[section_id] = entry
    touch(document)
    await store.write(PROGRESS, document)

    logger.info("Progress updated", section_id=section_id, fields=sorted(updates))
    return entry


async def patch_section_progress(
    store: DocumentStore,
    section_id: str,
    *,
    status: str | None = None,
    progress: int | float | None = None,
) -> dict[str, Any]:
    """Status/percentage transition following the rules of ``apply_progress_patch``."""
    document = await store.read(PROGRESS)
    sections = document.setdefault("sections", {})
    timestamp = now_iso()

    current = sections.get(section_id) or default_progress(timestamp)
    entry = apply_progress_patch(current, status=status, progress=progress, now=timestamp)
    sections[section_id] = entry
    touch(document)
    await store.write(PROGRESS, document)

    logger.info(
        "Progress patched",
        section_id=section_id,
        status=entry["status"],
        progress=entry["progress"],
    )
    return entry
