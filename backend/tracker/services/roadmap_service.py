"""Roadmap service: phases, sections and their nested items.

Every operation loads the whole roadmap document, changes one entity in
memory and writes the whole document back.
"""

from enum import Enum
from typing import Any

from tracker.core.errors import InvalidInputError
from tracker.core.logging import get_logger
from tracker.core.storage import DocumentStore
from tracker.services.documents import find_index, find_item, merge, new_id, renumber, touch
from tracker.services.migration import (
    new_attachment,
    new_task,
    new_topic,
    normalize_roadmap,
    normalize_section,
)

logger = get_logger(__name__)

ROADMAP = "roadmap"


class Missing(str, Enum):
    """Which level of a nested lookup came up empty."""

    PHASE = "Phase not found"
    SECTION = "Section not found"


# ============================================================================
# Document
# ============================================================================


async def load_roadmap(store: DocumentStore) -> dict[str, Any]:
    """Load the roadmap in its current shape.

    Legacy sections are normalized here and, if anything changed, the
    migrated document is written back so the conversion happens only once.
    """
    raw = await store.read(ROADMAP)
    roadmap = normalize_roadmap(raw)
    if roadmap != raw:
        await save_roadmap(store, roadmap)
        logger.info("Roadmap migrated to structured sections")
    return roadmap


async def save_roadmap(store: DocumentStore, roadmap: dict[str, Any]) -> None:
    touch(roadmap)
    await store.write(ROADMAP, roadmap)


async def replace_roadmap(store: DocumentStore, phases: list[dict[str, Any]]) -> dict[str, Any]:
    """Replace the whole roadmap."""
    roadmap = normalize_roadmap({"phases": phases})
    await save_roadmap(store, roadmap)
    logger.info("Roadmap replaced", phase_count=len(roadmap["phases"]))
    return roadmap


# ============================================================================
# Phases
# ============================================================================


async def add_phase(store: DocumentStore, data: dict[str, Any]) -> dict[str, Any]:
    """Append a phase at the end of the roadmap."""
    roadmap = await load_roadmap(store)
    phases = roadmap["phases"]

    phase_id = data.get("id") or new_id("phase")
    if find_index(phases, phase_id) is not None:
        raise InvalidInputError(f"Phase {phase_id} already exists")

    phase = {
        "id": phase_id,
        "title": data.get("title") or "New Phase",
        "duration": data.get("duration") or "TBD",
        "description": data.get("description") or "",
        "sections": [normalize_section(s) for s in data.get("sections") or []],
        "order": len(phases) + 1,
    }
    phases.append(phase)
    await save_roadmap(store, roadmap)

    logger.info("Phase created", phase_id=phase_id, order=phase["order"])
    return phase


async def get_phase(store: DocumentStore, phase_id: str) -> dict[str, Any] | None:
    roadmap = await load_roadmap(store)
    return find_item(roadmap["phases"], phase_id)


async def update_phase(
    store: DocumentStore, phase_id: str, updates: dict[str, Any]
) -> dict[str, Any] | None:
    """Shallow-merge ``updates`` into a phase. The id never changes."""
    roadmap = await load_roadmap(store)
    phases = roadmap["phases"]
    index = find_index(phases, phase_id)
    if index is None:
        return None

    if "sections" in updates:
        updates = {**updates, "sections": [normalize_section(s) for s in updates["sections"] or []]}
    phases[index] = merge(phases[index], updates, id=phase_id)
    await save_roadmap(store, roadmap)

    logger.info("Phase updated", phase_id=phase_id, fields=sorted(updates))
    return phases[index]


async def delete_phase(store: DocumentStore, phase_id: str) -> bool:
    """Remove a phase and close the gap in the ordering."""
    roadmap = await load_roadmap(store)
    phases = roadmap["phases"]
    index = find_index(phases, phase_id)
    if index is None:
        return False

    phases.pop(index)
    renumber(phases)
    await save_roadmap(store, roadmap)

    logger.info("Phase deleted", phase_id=phase_id, remaining=len(phases))
    return True


# ============================================================================
# Sections
# ============================================================================


def _locate(
    roadmap: dict[str, Any], phase_id: str, section_id: str
) -> tuple[dict[str, Any], int] | Missing:
    phase = find_item(roadmap["phases"], phase_id)
    if phase is None:
        return Missing.PHASE
    index = find_index(phase["sections"], section_id)
    if index is None:
        return Missing.SECTION
    return phase, index


async def add_section(
    store: DocumentStore, phase_id: str, data: dict[str, Any]
) -> dict[str, Any] | Missing:
    """Append a section to a phase."""
    roadmap = await load_roadmap(store)
    phase = find_item(roadmap["phases"], phase_id)
    if phase is None:
        return Missing.PHASE

    sections = phase["sections"]
    section_id = data.get("id") or new_id("section")
    if find_index(sections, section_id) is not None:
        raise InvalidInputError(f"Section {section_id} already exists")

    section = {
        "id": section_id,
        "title": data.get("title") or "New Section",
        "why": data.get("why") or "",
        "how": data.get("how") or "",
        "topics": data.get("topics") or [],
        "tasks": data.get("tasks") or [],
        "attachments": data.get("attachments") or [],
        "order": len(sections) + 1,
    }
    if data.get("learningResource"):
        section["learningResource"] = data["learningResource"]
    section = normalize_section(section)
    sections.append(section)
    await save_roadmap(store, roadmap)

    logger.info("Section created", phase_id=phase_id, section_id=section_id)
    return section


async def reorder_sections(
    store: DocumentStore, phase_id: str, section_ids: list[str]
) -> list[dict[str, Any]] | None:
    """Reorder a phase's sections; ids not in the phase are ignored.

    Sections missing from ``section_ids`` are dropped from the phase.
    """
    roadmap = await load_roadmap(store)
    phase = find_item(roadmap["phases"], phase_id)
    if phase is None:
        return None

    reordered = []
    for section_id in section_ids:
        section = find_item(phase["sections"], section_id)
        if section is not None and section not in reordered:
            reordered.append(section)
    renumber(reordered)
    phase["sections"] = reordered
    await save_roadmap(store, roadmap)

    logger.info("Sections reordered", phase_id=phase_id, count=len(reordered))
    return reordered


async def get_section(
    store: DocumentStore, phase_id: str, section_id: str
) -> dict[str, Any] | Missing:
    roadmap = await load_roadmap(store)
    located = _locate(roadmap, phase_id, section_id)
    if isinstance(located, Missing):
        return located
    phase, index = located
    return phase["sections"][index]


async def update_section(
    store: DocumentStore, phase_id: str, section_id: str, updates: dict[str, Any]
) -> dict[str, Any] | Missing:
    """Shallow-merge ``updates`` into a section. The id never changes."""
    roadmap = await load_roadmap(store)
    located = _locate(roadmap, phase_id, section_id)
    if isinstance(located, Missing):
        return located
    phase, index = located

    section = normalize_section(merge(phase["sections"][index], updates, id=section_id))
    phase["sections"][index] = section
    await save_roadmap(store, roadmap)

    logger.info("Section updated", phase_id=phase_id, section_id=section_id, fields=sorted(updates))
    return section


async def delete_section(
    store: DocumentStore, phase_id: str, section_id: str
) -> list[dict[str, Any]] | Missing:
    """Remove a section; returns the renumbered remaining sections."""
    roadmap = await load_roadmap(store)
    located = _locate(roadmap, phase_id, section_id)
    if isinstance(located, Missing):
        return located
    phase, index = located

    phase["sections"].pop(index)
    renumber(phase["sections"])
    await save_roadmap(store, roadmap)

    logger.info("Section deleted", phase_id=phase_id, section_id=section_id)
    return phase["sections"]


# ============================================================================
# Section items
# ============================================================================


async def _append_item(
    store: DocumentStore, phase_id: str, section_id: str, key: str, item: dict[str, Any]
) -> dict[str, Any] | Missing:
    roadmap = await load_roadmap(store)
    located = _locate(roadmap, phase_id, section_id)
    if isinstance(located, Missing):
        return located
    phase, index = located

    phase["sections"][index][key].append(item)
    await save_roadmap(store, roadmap)

    logger.info("Section item added", section_id=section_id, kind=key, item_id=item["id"])
    return item


async def add_topic(
    store: DocumentStore, phase_id: str, section_id: str, title: str
) -> dict[str, Any] | Missing:
    return await _append_item(store, phase_id, section_id, "topics", new_topic(title, section_id))


async def add_task(
    store: DocumentStore,
    phase_id: str,
    section_id: str,
    *,
    title: str,
    description: str | None = None,
    priority: str = "medium",
    due_date: str | None = None,
) -> dict[str, Any] | Missing:
    task = new_task(title, description=description, priority=priority, due_date=due_date)
    return await _append_item(store, phase_id, section_id, "tasks", task)


async def add_attachment(
    store: DocumentStore,
    phase_id: str,
    section_id: str,
    *,
    type: str,
    title: str,
    url: str,
    description: str | None = None,
    file_type: str | None = None,
) -> dict[str, Any] | Missing:
    attachment = new_attachment(type, title, url, description=description, file_type=file_type)
    return await _append_item(store, phase_id, section_id, "attachments", attachment)
