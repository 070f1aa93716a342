"""Note service for CRUD operations."""

from typing import Any

from tracker.core.logging import get_logger
from tracker.core.storage import DocumentStore
from tracker.core.timestamps import now_iso
from tracker.services.documents import find_index, find_item, merge, new_id, touch

logger = get_logger(__name__)

NOTES = "notes"


def matches_query(note: dict[str, Any], query: str) -> bool:
    """Case-insensitive substring match over title and content."""
    needle = query.lower()
    return needle in (note.get("title") or "").lower() or needle in (
        note.get("content") or ""
    ).lower()


async def list_notes(
    store: DocumentStore,
    *,
    section_id: str | None = None,
    query: str | None = None,
) -> dict[str, Any]:
    """Return the notes document, optionally filtered. Nothing is written."""
    document = await store.read(NOTES)
    notes = document.get("notes", [])
    if section_id:
        notes = [n for n in notes if n.get("sectionId") == section_id]
    if query:
        notes = [n for n in notes if matches_query(n, query)]
    return {"notes": notes, "lastUpdated": document.get("lastUpdated")}


async def get_note(store: DocumentStore, note_id: str) -> dict[str, Any] | None:
    document = await store.read(NOTES)
    return find_item(document["notes"], note_id)


async def create_note(
    store: DocumentStore,
    *,
    title: str,
    content: str,
    section_id: str | None = None,
    topic_id: str | None = None,
    template: str | None = None,
    images: list[str] | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Create a note; newest notes come first."""
    document = await store.read(NOTES)
    timestamp = now_iso()

    note: dict[str, Any] = {
        "id": new_id("note"),
        "title": title,
        "content": content,
    }
    if section_id is not None:
        note["sectionId"] = section_id
    if topic_id is not None:
        note["topicId"] = topic_id
    if template is not None:
        note["template"] = template
    note.update(
        images=images or [],
        tags=tags or [],
        createdAt=timestamp,
        updatedAt=timestamp,
    )

    document.setdefault("notes", []).insert(0, note)
    touch(document)
    await store.write(NOTES, document)

    logger.info("Note created", note_id=note["id"], section_id=section_id)
    return note


async def update_note(
    store: DocumentStore, note_id: str, updates: dict[str, Any]
) -> dict[str, Any] | None:
    document = await store.read(NOTES)
    notes = document["notes"]
    index = find_index(notes, note_id)
    if index is None:
        return None

    notes[index] = merge(notes[index], updates, id=note_id, updatedAt=now_iso())
    touch(document)
    await store.write(NOTES, document)

    logger.info("Note updated", note_id=note_id)
    return notes[index]


async def delete_note(store: DocumentStore, note_id: str) -> bool:
    document = await store.read(NOTES)
    notes = document["notes"]
    index = find_index(notes, note_id)
    if index is None:
        return False

    notes.pop(index)
    touch(document)
    await store.write(NOTES, document)

    logger.info("Note deleted", note_id=note_id)
    return True
