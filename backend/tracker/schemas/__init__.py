"""Pydantic schemas."""

from tracker.schemas.common import ApiResponse, CamelModel, Deleted, fail, ok, provided_fields
from tracker.schemas.files import BackupList, BackupResult, UploadResult
from tracker.schemas.note import Note, NoteCreate, NotesData, NoteTemplate, NoteUpdate
from tracker.schemas.progress import (
    ProgressData,
    ProgressInit,
    ProgressPatch,
    ProgressReplace,
    ProgressUpdate,
    SectionProgress,
    SectionStatus,
)
from tracker.schemas.project import Project, ProjectCreate, ProjectsData, ProjectUpdate
from tracker.schemas.resource import Resource, ResourceCreate, ResourcesData, ResourceUpdate
from tracker.schemas.roadmap import (
    Attachment,
    AttachmentCreate,
    Phase,
    PhaseCreate,
    PhaseUpdate,
    RoadmapData,
    RoadmapReplace,
    Section,
    SectionCreate,
    SectionReorder,
    SectionUpdate,
    Task,
    TaskCreate,
    Topic,
    TopicCreate,
)
from tracker.schemas.user_settings import SettingsData, SettingsUpdate, StudySessionCreate

__all__ = [
    "ApiResponse",
    "CamelModel",
    "Deleted",
    "ok",
    "fail",
    "provided_fields",
    "UploadResult",
    "BackupResult",
    "BackupList",
    "Note",
    "NoteCreate",
    "NoteUpdate",
    "NotesData",
    "NoteTemplate",
    "SectionStatus",
    "SectionProgress",
    "ProgressData",
    "ProgressReplace",
    "ProgressInit",
    "ProgressUpdate",
    "ProgressPatch",
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectsData",
    "Resource",
    "ResourceCreate",
    "ResourceUpdate",
    "ResourcesData",
    "RoadmapData",
    "RoadmapReplace",
    "Phase",
    "PhaseCreate",
    "PhaseUpdate",
    "Section",
    "SectionCreate",
    "SectionUpdate",
    "SectionReorder",
    "Topic",
    "TopicCreate",
    "Task",
    "TaskCreate",
    "Attachment",
    "AttachmentCreate",
    "SettingsData",
    "SettingsUpdate",
    "StudySessionCreate",
]
