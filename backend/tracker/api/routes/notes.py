"""Notes API routes."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from tracker.api.deps import StoreDep
from tracker.core.logging import get_logger
from tracker.schemas.common import ApiResponse, Deleted, ok, provided_fields
from tracker.schemas.note import NoteCreate, NoteTemplate, NoteUpdate
from tracker.services import note_service, note_templates

logger = get_logger(__name__)
router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("")
async def list_notes(
    store: StoreDep,
    section_id: Annotated[str | None, Query(alias="sectionId")] = None,
    q: str | None = None,
) -> dict:
    """List notes, optionally filtered by section and a search string."""
    return ok(await note_service.list_notes(store, section_id=section_id, query=q))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_note(data: NoteCreate, store: StoreDep) -> dict:
    if not data.title or not data.content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Title and content are required",
        )
    note = await note_service.create_note(
        store,
        title=data.title,
        content=data.content,
        section_id=data.section_id,
        topic_id=data.topic_id,
        template=data.template.value if data.template else None,
        images=data.images,
        tags=data.tags,
    )
    return ok(note)


@router.get(
    "/templates",
    response_model=ApiResponse[list[NoteTemplate]],
    response_model_exclude_none=True,
)
async def list_note_templates() -> dict:
    """Bundled templates for new notes."""
    return ok(note_templates.list_templates())


@router.get("/{note_id}")
async def get_note(note_id: str, store: StoreDep) -> dict:
    note = await note_service.get_note(store, note_id)
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return ok(note)


@router.put("/{note_id}")
async def update_note(note_id: str, data: NoteUpdate, store: StoreDep) -> dict:
    note = await note_service.update_note(store, note_id, provided_fields(data))
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return ok(note)


@router.delete("/{note_id}")
async def delete_note(note_id: str, store: StoreDep) -> dict:
    if not await note_service.delete_note(store, note_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return ok(Deleted().model_dump())
