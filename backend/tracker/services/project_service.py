"""Project service for CRUD operations."""

from typing import Any

from tracker.core.logging import get_logger
from tracker.core.storage import DocumentStore
from tracker.core.timestamps import now_iso
from tracker.services.documents import find_index, find_item, merge, new_id, touch

logger = get_logger(__name__)

PROJECTS = "projects"

_LIST_FIELDS = ("topics", "sections", "technologies", "images")
_OPTIONAL_FIELDS = ("githubUrl", "demoUrl", "startedAt", "completedAt")


async def list_projects(store: DocumentStore) -> dict[str, Any]:
    return await store.read(PROJECTS)


async def get_project(store: DocumentStore, project_id: str) -> dict[str, Any] | None:
    document = await store.read(PROJECTS)
    return find_item(document["projects"], project_id)


async def create_project(store: DocumentStore, data: dict[str, Any]) -> dict[str, Any]:
    """Create a project, filling every omitted field with its default."""
    document = await store.read(PROJECTS)
    timestamp = now_iso()

    project: dict[str, Any] = {
        "id": new_id("project"),
        "title": data.get("title") or "Untitled Project",
        "description": data.get("description") or "",
        "status": data.get("status") or "planning",
    }
    for field in _OPTIONAL_FIELDS:
        if data.get(field) is not None:
            project[field] = data[field]
    for field in _LIST_FIELDS:
        project[field] = data.get(field) or []
    project.update(
        notes=data.get("notes") or "",
        createdAt=timestamp,
        updatedAt=timestamp,
    )

    document.setdefault("projects", []).append(project)
    touch(document)
    await store.write(PROJECTS, document)

    logger.info("Project created", project_id=project["id"], title=project["title"])
    return project


async def update_project(
    store: DocumentStore, project_id: str, updates: dict[str, Any]
) -> dict[str, Any] | None:
    document = await store.read(PROJECTS)
    projects = document["projects"]
    index = find_index(projects, project_id)
    if index is None:
        return None

    projects[index] = merge(projects[index], updates, id=project_id, updatedAt=now_iso())
    touch(document)
    await store.write(PROJECTS, document)

    logger.info("Project updated", project_id=project_id)
    return projects[index]


async def delete_project(store: DocumentStore, project_id: str) -> bool:
    document = await store.read(PROJECTS)
    projects = document["projects"]
    index = find_index(projects, project_id)
    if index is None:
        return False

    projects.pop(index)
    touch(document)
    await store.write(PROJECTS, document)

    logger.info("Project deleted", project_id=project_id)
    return True
