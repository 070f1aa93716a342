"""Section progress API routes."""

from fastapi import APIRouter, HTTPException, status

from tracker.api.deps import StoreDep
from tracker.core.logging import get_logger
from tracker.schemas.common import ok, provided_fields
from tracker.schemas.progress import ProgressInit, ProgressPatch, ProgressReplace, ProgressUpdate
from tracker.services import progress_service

logger = get_logger(__name__)
router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("")
async def get_progress(store: StoreDep) -> dict:
    return ok(await progress_service.get_progress(store))


@router.put("")
async def replace_progress(data: ProgressReplace, store: StoreDep) -> dict:
    """Replace progress for every section at once."""
    sections = provided_fields(data)["sections"]
    return ok(await progress_service.replace_progress(store, sections))


@router.post("", status_code=status.HTTP_201_CREATED)
async def init_progress(data: ProgressInit, store: StoreDep) -> dict:
    """Start tracking a section."""
    if not data.section_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="sectionId is required",
        )
    entry = await progress_service.init_section_progress(
        store,
        data.section_id,
        status=data.status.value,
        progress=data.progress,
    )
    return ok(entry)


@router.get("/{section_id}")
async def get_section_progress(section_id: str, store: StoreDep) -> dict:
    """Progress of one section; untracked sections read as not started."""
    return ok(await progress_service.get_section_progress(store, section_id))


@router.put("/{section_id}")
async def update_section_progress(section_id: str, data: ProgressUpdate, store: StoreDep) -> dict:
    entry = await progress_service.update_section_progress(
        store, section_id, provided_fields(data)
    )
    return ok(entry)


@router.patch("/{section_id}")
async def patch_section_progress(section_id: str, data: ProgressPatch, store: StoreDep) -> dict:
    """Change status and/or percentage, applying the promotion rules."""
    entry = await progress_service.patch_section_progress(
        store,
        section_id,
        status=data.status.value if data.status else None,
        progress=data.progress,
    )
    return ok(entry)
