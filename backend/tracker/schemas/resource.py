"""Learning resource library schemas."""

from enum import Enum

from tracker.schemas.common import CamelModel


class ResourceType(str, Enum):
    BOOK = "book"
    COURSE = "course"
    TUTORIAL = "tutorial"
    DOCUMENTATION = "documentation"
    TOOL = "tool"
    COMMUNITY = "community"
    CERTIFICATION = "certification"
    OTHER = "other"


class Resource(CamelModel):
    id: str
    title: str
    url: str
    type: ResourceType = ResourceType.OTHER
    description: str = ""
    tags: list[str] = []
    section_id: str | None = None
    created_at: str


class ResourcesData(CamelModel):
    resources: list[Resource]
    last_updated: str


class ResourceCreate(CamelModel):
    title: str | None = None
    url: str | None = None
    type: ResourceType = ResourceType.OTHER
    description: str = ""
    tags: list[str] = []
    section_id: str | None = None


class ResourceUpdate(CamelModel):
    title: str | None = None
    url: str | None = None
    type: ResourceType | None = None
    description: str | None = None
    tags: list[str] | None = None
    section_id: str | None = None
