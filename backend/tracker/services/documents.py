"""Helpers shared by the per-document services."""

import uuid
from typing import Any

from tracker.core.timestamps import now_iso


def short_uuid() -> str:
    return uuid.uuid4().hex[:8]


def new_id(prefix: str) -> str:
    """Generate an entity id such as ``note-1a2b3c4d``."""
    return f"{prefix}-{short_uuid()}"


def find_index(items: list[dict[str, Any]], item_id: str) -> int | None:
    """Position of the entity with ``item_id``, or None."""
    for index, item in enumerate(items):
        if item.get("id") == item_id:
            return index
    return None


def find_item(items: list[dict[str, Any]], item_id: str) -> dict[str, Any] | None:
    index = find_index(items, item_id)
    return None if index is None else items[index]


def renumber(items: list[dict[str, Any]]) -> None:
    """Rewrite ``order`` so it is a dense 1-based sequence."""
    for position, item in enumerate(items, start=1):
        item["order"] = position


def merge(existing: dict[str, Any], updates: dict[str, Any], **forced: Any) -> dict[str, Any]:
    """Shallow-merge ``updates`` over ``existing``; ``forced`` keys win over both."""
    return {**existing, **updates, **forced}


def touch(document: dict[str, Any]) -> str:
    """Bump a document's ``lastUpdated`` and return the new timestamp."""
    timestamp = now_iso()
    document["lastUpdated"] = timestamp
    return timestamp
