"""Service layer modules."""

from tracker.services import (
    documents,
    migration,
    note_service,
    note_templates,
    progress_service,
    project_service,
    resource_service,
    roadmap_service,
    settings_service,
    upload_service,
)

__all__ = [
    "documents",
    "migration",
    "note_service",
    "note_templates",
    "progress_service",
    "project_service",
    "resource_service",
    "roadmap_service",
    "settings_service",
    "upload_service",
]
