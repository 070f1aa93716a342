"""Portfolio project schemas."""

from enum import Enum
from typing import Any

from tracker.schemas.common import CamelModel


class ProjectStatus(str, Enum):
    NOT_STARTED = "not-started"
    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"


class ProjectTopic(CamelModel):
    id: str
    title: str
    is_custom: bool  # False when linked to a roadmap topic
    section_id: str | None = None
    topic_id: str | None = None


class Project(CamelModel):
    id: str
    title: str
    description: str = ""
    status: ProjectStatus = ProjectStatus.PLANNING
    github_url: str | None = None
    demo_url: str | None = None
    github_data: dict[str, Any] | None = None  # cached repository snapshot, stored as-is
    topics: list[ProjectTopic] = []
    sections: list[str] = []
    technologies: list[str] = []
    notes: str = ""
    images: list[str] = []
    started_at: str | None = None
    completed_at: str | None = None
    created_at: str
    updated_at: str


class ProjectsData(CamelModel):
    projects: list[Project]
    last_updated: str


class ProjectCreate(CamelModel):
    title: str | None = None
    description: str | None = None
    status: ProjectStatus | None = None
    github_url: str | None = None
    demo_url: str | None = None
    topics: list[ProjectTopic] = []
    sections: list[str] = []
    technologies: list[str] = []
    notes: str | None = None
    images: list[str] = []
    started_at: str | None = None
    completed_at: str | None = None


class ProjectUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    status: ProjectStatus | None = None
    github_url: str | None = None
    demo_url: str | None = None
    github_data: dict[str, Any] | None = None
    topics: list[ProjectTopic] | None = None
    sections: list[str] | None = None
    technologies: list[str] | None = None
    notes: str | None = None
    images: list[str] | None = None
    started_at: str | None = None
    completed_at: str | None = None
