"""Resource library API routes."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from tracker.api.deps import StoreDep
from tracker.core.logging import get_logger
from tracker.schemas.common import Deleted, ok, provided_fields
from tracker.schemas.resource import ResourceCreate, ResourceType, ResourceUpdate
from tracker.services import resource_service

logger = get_logger(__name__)
router = APIRouter(prefix="/resources", tags=["resources"])


@router.get("")
async def list_resources(
    store: StoreDep,
    type: ResourceType | None = None,
    section_id: Annotated[str | None, Query(alias="sectionId")] = None,
    q: str | None = None,
) -> dict:
    """List resources filtered by type, section and search string."""
    resources = await resource_service.list_resources(
        store,
        type=type.value if type else None,
        section_id=section_id,
        query=q,
    )
    return ok(resources)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_resource(data: ResourceCreate, store: StoreDep) -> dict:
    if not data.title or not data.url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Title and URL are required",
        )
    resource = await resource_service.create_resource(
        store,
        title=data.title,
        url=data.url,
        type=data.type.value,
        description=data.description,
        tags=data.tags,
        section_id=data.section_id,
    )
    return ok(resource)


@router.get("/{resource_id}")
async def get_resource(resource_id: str, store: StoreDep) -> dict:
    resource = await resource_service.get_resource(store, resource_id)
    if resource is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resource not found")
    return ok(resource)


@router.put("/{resource_id}")
async def update_resource(resource_id: str, data: ResourceUpdate, store: StoreDep) -> dict:
    resource = await resource_service.update_resource(store, resource_id, provided_fields(data))
    if resource is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resource not found")
    return ok(resource)


@router.delete("/{resource_id}")
async def delete_resource(resource_id: str, store: StoreDep) -> dict:
    if not await resource_service.delete_resource(store, resource_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resource not found")
    return ok(Deleted().model_dump())
