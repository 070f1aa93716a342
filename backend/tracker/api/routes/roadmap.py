"""Roadmap API routes: phases, sections and section items."""

from typing import Any

from fastapi import APIRouter, HTTPException, status

from tracker.api.deps import StoreDep
from tracker.core.logging import get_logger
from tracker.schemas.common import Deleted, ok, provided_fields
from tracker.schemas.roadmap import (
    AttachmentCreate,
    PhaseCreate,
    PhaseUpdate,
    RoadmapReplace,
    SectionCreate,
    SectionReorder,
    SectionUpdate,
    TaskCreate,
    TopicCreate,
)
from tracker.services import roadmap_service
from tracker.services.roadmap_service import Missing

logger = get_logger(__name__)
router = APIRouter(prefix="/roadmap", tags=["roadmap"])


def _found(result: Any) -> Any:
    """Turn a missing phase or section into a 404."""
    if isinstance(result, Missing):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.value)
    return result


# ============================================================================
# Roadmap and phases
# ============================================================================


@router.get("")
async def get_roadmap(store: StoreDep) -> dict:
    """Get the whole roadmap."""
    return ok(await roadmap_service.load_roadmap(store))


@router.put("")
async def replace_roadmap(data: RoadmapReplace, store: StoreDep) -> dict:
    """Replace the whole roadmap."""
    return ok(await roadmap_service.replace_roadmap(store, data.phases))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_phase(data: PhaseCreate, store: StoreDep) -> dict:
    """Append a phase."""
    return ok(await roadmap_service.add_phase(store, provided_fields(data)))


@router.get("/{phase_id}")
async def get_phase(phase_id: str, store: StoreDep) -> dict:
    phase = await roadmap_service.get_phase(store, phase_id)
    if phase is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Phase not found")
    return ok(phase)


@router.put("/{phase_id}")
async def update_phase(phase_id: str, data: PhaseUpdate, store: StoreDep) -> dict:
    phase = await roadmap_service.update_phase(store, phase_id, provided_fields(data))
    if phase is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Phase not found")
    return ok(phase)


@router.delete("/{phase_id}")
async def delete_phase(phase_id: str, store: StoreDep) -> dict:
    """Delete a phase; the remaining phases are renumbered."""
    if not await roadmap_service.delete_phase(store, phase_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Phase not found")
    return ok(Deleted().model_dump())


# ============================================================================
# Sections
# ============================================================================


@router.post("/{phase_id}/sections", status_code=status.HTTP_201_CREATED)
async def create_section(phase_id: str, data: SectionCreate, store: StoreDep) -> dict:
    return ok(_found(await roadmap_service.add_section(store, phase_id, provided_fields(data))))


@router.put("/{phase_id}/sections")
async def reorder_sections(phase_id: str, data: SectionReorder, store: StoreDep) -> dict:
    """Reorder a phase's sections by id."""
    sections = await roadmap_service.reorder_sections(store, phase_id, data.section_ids)
    if sections is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Phase not found")
    return ok(sections)


@router.get("/{phase_id}/sections/{section_id}")
async def get_section(phase_id: str, section_id: str, store: StoreDep) -> dict:
    return ok(_found(await roadmap_service.get_section(store, phase_id, section_id)))


@router.put("/{phase_id}/sections/{section_id}")
async def update_section(
    phase_id: str, section_id: str, data: SectionUpdate, store: StoreDep
) -> dict:
    updates = provided_fields(data)
    return ok(_found(await roadmap_service.update_section(store, phase_id, section_id, updates)))


@router.delete("/{phase_id}/sections/{section_id}")
async def delete_section(phase_id: str, section_id: str, store: StoreDep) -> dict:
    """Delete a section; its siblings are renumbered."""
    _found(await roadmap_service.delete_section(store, phase_id, section_id))
    return ok(Deleted().model_dump())


# ============================================================================
# Section items
# ============================================================================


@router.post("/{phase_id}/sections/{section_id}/topics", status_code=status.HTTP_201_CREATED)
async def create_topic(
    phase_id: str, section_id: str, data: TopicCreate, store: StoreDep
) -> dict:
    return ok(_found(await roadmap_service.add_topic(store, phase_id, section_id, data.title)))


@router.post("/{phase_id}/sections/{section_id}/tasks", status_code=status.HTTP_201_CREATED)
async def create_task(phase_id: str, section_id: str, data: TaskCreate, store: StoreDep) -> dict:
    task = await roadmap_service.add_task(
        store,
        phase_id,
        section_id,
        title=data.title,
        description=data.description,
        priority=data.priority.value,
        due_date=data.due_date,
    )
    return ok(_found(task))


@router.post(
    "/{phase_id}/sections/{section_id}/attachments", status_code=status.HTTP_201_CREATED
)
async def create_attachment(
    phase_id: str, section_id: str, data: AttachmentCreate, store: StoreDep
) -> dict:
    attachment = await roadmap_service.add_attachment(
        store,
        phase_id,
        section_id,
        type=data.type.value,
        title=data.title,
        url=data.url,
        description=data.description,
        file_type=data.file_type,
    )
    return ok(_found(attachment))
