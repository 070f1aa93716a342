"""Section shape migration and roadmap entity factories.

Older roadmap documents stored a section's topics as plain strings and had
no ``tasks`` or ``attachments`` arrays. Normalization happens once, at the
point a roadmap is loaded, so everything downstream only ever sees the
structured shape.
"""

from copy import deepcopy
from enum import Enum
from typing import Any

from tracker.core.timestamps import now_iso
from tracker.services.documents import new_id, short_uuid


class SectionShape(str, Enum):
    """Known on-disk shapes of a section."""

    LEGACY_STRING_TOPICS = "legacy-string-topics"
    STRUCTURED_TOPICS = "structured-topics"


def detect_section_shape(section: dict[str, Any]) -> SectionShape:
    topics = section.get("topics") or []
    if any(isinstance(topic, str) for topic in topics):
        return SectionShape.LEGACY_STRING_TOPICS
    return SectionShape.STRUCTURED_TOPICS


def _legacy_topic(section_id: str, position: int, title: str) -> dict[str, Any]:
    return {
        "id": f"topic-{section_id}-{position}",
        "title": title,
        "completed": False,
        "tasks": [],
        "notes": [],
        "resources": [],
    }


def _structured_topic(topic: dict[str, Any]) -> dict[str, Any]:
    return {
        **topic,
        "tasks": topic.get("tasks") or [],
        "notes": topic.get("notes") or [],
        "resources": topic.get("resources") or [],
    }


def normalize_section(section: dict[str, Any]) -> dict[str, Any]:
    """Return ``section`` in the structured shape.

    Pure and idempotent: the input is never modified, and normalizing an
    already-structured section yields an equal value.
    """
    normalized = deepcopy(section)
    topics = normalized.get("topics") or []

    if detect_section_shape(normalized) is SectionShape.LEGACY_STRING_TOPICS:
        section_id = normalized.get("id", "")
        normalized["topics"] = [
            _legacy_topic(section_id, position, topic)
            if isinstance(topic, str)
            else _structured_topic(topic)
            for position, topic in enumerate(topics, start=1)
        ]
    else:
        normalized["topics"] = [_structured_topic(topic) for topic in topics]

    normalized["tasks"] = normalized.get("tasks") or []
    normalized["attachments"] = normalized.get("attachments") or []
    return normalized


def normalize_roadmap(roadmap: dict[str, Any]) -> dict[str, Any]:
    """Normalize every section of every phase."""
    normalized = dict(roadmap)
    normalized["phases"] = [
        {**phase, "sections": [normalize_section(s) for s in phase.get("sections") or []]}
        for phase in roadmap.get("phases") or []
    ]
    return normalized


# ============================================================================
# Factories
# ============================================================================


def new_topic(title: str, section_id: str) -> dict[str, Any]:
    return {
        "id": f"topic-{section_id}-{short_uuid()}",
        "title": title,
        "completed": False,
        "tasks": [],
        "notes": [],
        "resources": [],
    }


def new_task(
    title: str,
    description: str | None = None,
    priority: str = "medium",
    due_date: str | None = None,
) -> dict[str, Any]:
    task: dict[str, Any] = {
        "id": new_id("task"),
        "title": title,
        "completed": False,
        "priority": priority,
        "createdAt": now_iso(),
    }
    if description is not None:
        task["description"] = description
    if due_date is not None:
        task["dueDate"] = due_date
    return task


def new_attachment(
    type: str,
    title: str,
    url: str,
    description: str | None = None,
    file_type: str | None = None,
) -> dict[str, Any]:
    attachment: dict[str, Any] = {
        "id": new_id("attachment"),
        "type": type,
        "title": title,
        "url": url,
        "createdAt": now_iso(),
    }
    if description is not None:
        attachment["description"] = description
    if file_type is not None:
        attachment["fileType"] = file_type
    return attachment
