"""Roadmap schemas: phases, sections and their nested items."""

from enum import Enum
from typing import Any

from pydantic import Field

from tracker.schemas.common import CamelModel


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AttachmentType(str, Enum):
    FILE = "file"
    LINK = "link"


class LearningResourceType(str, Enum):
    YOUTUBE = "youtube"
    COURSE = "course"
    BOOK = "book"
    DOCUMENTATION = "documentation"
    TUTORIAL = "tutorial"
    OTHER = "other"


class TopicResourceType(str, Enum):
    CODE = "code"
    LINK = "link"
    FILE = "file"
    GITHUB = "github"


class LearningResource(CamelModel):
    """The main resource used to study a section."""

    id: str
    type: LearningResourceType
    title: str
    url: str | None = None
    author: str | None = None
    platform: str | None = None  # Udemy, Coursera, YouTube channel, ...
    description: str | None = None
    started_at: str | None = None
    completed_at: str | None = None


class TopicTask(CamelModel):
    id: str
    title: str
    completed: bool = False
    created_at: str
    completed_at: str | None = None


class TopicNote(CamelModel):
    id: str
    content: str
    created_at: str


class TopicResource(CamelModel):
    id: str
    type: TopicResourceType
    title: str
    url: str
    language: str | None = None
    description: str | None = None
    created_at: str


class Topic(CamelModel):
    id: str
    title: str
    completed: bool = False
    tasks: list[TopicTask] = []
    notes: list[TopicNote] = []
    resources: list[TopicResource] = []
    started_at: str | None = None
    completed_at: str | None = None


class Task(CamelModel):
    id: str
    title: str
    description: str | None = None
    completed: bool = False
    priority: Priority | None = None
    due_date: str | None = None
    created_at: str
    completed_at: str | None = None


class Attachment(CamelModel):
    id: str
    type: AttachmentType
    title: str
    url: str
    description: str | None = None
    file_type: str | None = None  # pdf, doc, ...
    created_at: str


class Section(CamelModel):
    id: str
    title: str
    order: int
    why: str = ""
    how: str = ""
    topics: list[Topic] = []
    tasks: list[Task] = []
    attachments: list[Attachment] = []
    learning_resource: LearningResource | None = None


class Phase(CamelModel):
    id: str
    title: str
    duration: str = ""
    description: str = ""
    order: int
    sections: list[Section] = []


class RoadmapData(CamelModel):
    phases: list[Phase]
    last_updated: str


# ============================================================================
# Requests
# ============================================================================


class RoadmapReplace(CamelModel):
    """Whole-roadmap replacement; sections may still be in the legacy shape."""

    phases: list[dict[str, Any]]


class PhaseCreate(CamelModel):
    id: str | None = None
    title: str | None = None
    duration: str | None = None
    description: str | None = None
    sections: list[dict[str, Any]] | None = None


class PhaseUpdate(CamelModel):
    title: str | None = None
    duration: str | None = None
    description: str | None = None
    order: int | None = None
    sections: list[dict[str, Any]] | None = None


class SectionCreate(CamelModel):
    id: str | None = None
    title: str | None = None
    why: str | None = None
    how: str | None = None
    topics: list[Topic | str] | None = None
    tasks: list[Task] | None = None
    attachments: list[Attachment] | None = None
    learning_resource: LearningResource | None = None


class SectionUpdate(CamelModel):
    title: str | None = None
    why: str | None = None
    how: str | None = None
    order: int | None = None
    topics: list[Topic | str] | None = None
    tasks: list[Task] | None = None
    attachments: list[Attachment] | None = None
    learning_resource: LearningResource | None = None


class SectionReorder(CamelModel):
    section_ids: list[str]


class TopicCreate(CamelModel):
    title: str = Field(min_length=1)


class TaskCreate(CamelModel):
    title: str = Field(min_length=1)
    description: str | None = None
    priority: Priority = Priority.MEDIUM
    due_date: str | None = None


class AttachmentCreate(CamelModel):
    type: AttachmentType
    title: str = Field(min_length=1)
    url: str = Field(min_length=1)
    description: str | None = None
    file_type: str | None = None
