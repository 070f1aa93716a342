"""API routes."""

from tracker.api.routes import (
    backup,
    notes,
    progress,
    projects,
    resources,
    roadmap,
    uploads,
    user_settings,
)

__all__ = [
    "backup",
    "notes",
    "progress",
    "projects",
    "resources",
    "roadmap",
    "uploads",
    "user_settings",
]
