"""User settings and study session API routes."""

from fastapi import APIRouter

from tracker.api.deps import StoreDep
from tracker.core.logging import get_logger
from tracker.schemas.common import ok, provided_fields
from tracker.schemas.user_settings import SettingsUpdate, StudySessionCreate
from tracker.services import settings_service

logger = get_logger(__name__)
router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_settings(store: StoreDep) -> dict:
    return ok(await settings_service.load_user_settings(store))


@router.put("")
async def update_settings(data: SettingsUpdate, store: StoreDep) -> dict:
    document = await settings_service.update_user_settings(
        store, settings=data.settings, streak=data.streak
    )
    return ok(document)


@router.post("")
async def record_study_session(data: StudySessionCreate, store: StoreDep) -> dict:
    """Log a study session and advance the learning streak."""
    return ok(await settings_service.record_study_session(store, provided_fields(data)))
