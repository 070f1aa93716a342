"""Resource library service."""

from typing import Any

from tracker.core.logging import get_logger
from tracker.core.storage import DocumentStore
from tracker.core.timestamps import now_iso
from tracker.services.documents import find_index, find_item, merge, new_id, touch

logger = get_logger(__name__)

RESOURCES = "resources"


async def list_resources(
    store: DocumentStore,
    *,
    type: str | None = None,
    section_id: str | None = None,
    query: str | None = None,
) -> dict[str, Any]:
    """Return the resources document with an optionally filtered list."""
    document = await store.read(RESOURCES)
    resources = document.get("resources", [])

    if type:
        resources = [r for r in resources if r.get("type") == type]
    if section_id:
        resources = [r for r in resources if r.get("sectionId") == section_id]
    if query:
        needle = query.lower()
        resources = [
            r
            for r in resources
            if needle in (r.get("title") or "").lower()
            or needle in (r.get("description") or "").lower()
        ]

    return {**document, "resources": resources}


async def get_resource(store: DocumentStore, resource_id: str) -> dict[str, Any] | None:
    document = await store.read(RESOURCES)
    return find_item(document["resources"], resource_id)


async def create_resource(
    store: DocumentStore,
    *,
    title: str,
    url: str,
    type: str = "other",
    description: str = "",
    tags: list[str] | None = None,
    section_id: str | None = None,
) -> dict[str, Any]:
    document = await store.read(RESOURCES)

    resource: dict[str, Any] = {
        "id": new_id("res"),
        "title": title,
        "url": url,
        "type": type,
        "description": description,
        "tags": tags or [],
    }
    if section_id is not None:
        resource["sectionId"] = section_id
    resource["createdAt"] = now_iso()

    document.setdefault("resources", []).append(resource)
    touch(document)
    await store.write(RESOURCES, document)

    logger.info("Resource created", resource_id=resource["id"], type=type)
    return resource


async def update_resource(
    store: DocumentStore, resource_id: str, updates: dict[str, Any]
) -> dict[str, Any] | None:
    document = await store.read(RESOURCES)
    resources = document["resources"]
    index = find_index(resources, resource_id)
    if index is None:
        return None

    resources[index] = merge(resources[index], updates, id=resource_id)
    touch(document)
    await store.write(RESOURCES, document)

    logger.info("Resource updated", resource_id=resource_id)
    return resources[index]


async def delete_resource(store: DocumentStore, resource_id: str) -> bool:
    document = await store.read(RESOURCES)
    resources = document["resources"]
    index = find_index(resources, resource_id)
    if index is None:
        return False

    resources.pop(index)
    touch(document)
    await store.write(RESOURCES, document)

    logger.info("Resource deleted", resource_id=resource_id)
    return True
