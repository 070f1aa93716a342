"""Note schemas."""

from enum import Enum

from tracker.schemas.common import CamelModel


class NoteTemplateType(str, Enum):
    BLANK = "blank"
    CONCEPT = "concept"
    TUTORIAL = "tutorial"
    TROUBLESHOOTING = "troubleshooting"
    CHEATSHEET = "cheatsheet"
    REVIEW = "review"


class Note(CamelModel):
    id: str
    title: str
    content: str
    section_id: str | None = None
    topic_id: str | None = None
    linked_notes: list[str] | None = None
    template: NoteTemplateType | None = None
    tags: list[str] = []
    images: list[str] = []
    created_at: str
    updated_at: str


class NotesData(CamelModel):
    notes: list[Note]
    last_updated: str


class NoteCreate(CamelModel):
    title: str | None = None
    content: str | None = None
    section_id: str | None = None
    topic_id: str | None = None
    template: NoteTemplateType | None = None
    images: list[str] = []
    tags: list[str] = []


class NoteUpdate(CamelModel):
    title: str | None = None
    content: str | None = None
    section_id: str | None = None
    topic_id: str | None = None
    linked_notes: list[str] | None = None
    template: NoteTemplateType | None = None
    tags: list[str] | None = None
    images: list[str] | None = None


class NoteTemplate(CamelModel):
    id: NoteTemplateType
    name: str
    description: str
    content: str
