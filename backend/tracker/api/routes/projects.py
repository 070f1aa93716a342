"""Projects API routes."""

from fastapi import APIRouter, HTTPException, status

from tracker.api.deps import StoreDep
from tracker.core.logging import get_logger
from tracker.schemas.common import Deleted, ok, provided_fields
from tracker.schemas.project import ProjectCreate, ProjectUpdate
from tracker.services import project_service

logger = get_logger(__name__)
router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("")
async def list_projects(store: StoreDep) -> dict:
    return ok(await project_service.list_projects(store))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(data: ProjectCreate, store: StoreDep) -> dict:
    """Create a project; omitted fields get their defaults."""
    return ok(await project_service.create_project(store, provided_fields(data)))


@router.get("/{project_id}")
async def get_project(project_id: str, store: StoreDep) -> dict:
    project = await project_service.get_project(store, project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return ok(project)


@router.put("/{project_id}")
async def update_project(project_id: str, data: ProjectUpdate, store: StoreDep) -> dict:
    project = await project_service.update_project(store, project_id, provided_fields(data))
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return ok(project)


@router.delete("/{project_id}")
async def delete_project(project_id: str, store: StoreDep) -> dict:
    if not await project_service.delete_project(store, project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return ok(Deleted().model_dump())
