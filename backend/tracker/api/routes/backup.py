"""Backup API routes."""

from fastapi import APIRouter

from tracker.api.deps import StoreDep
from tracker.core.logging import get_logger
from tracker.schemas.common import ApiResponse, ok
from tracker.schemas.files import BackupList, BackupResult

logger = get_logger(__name__)
router = APIRouter(prefix="/backup", tags=["backup"])


@router.post("", response_model=ApiResponse[BackupResult], response_model_exclude_none=True)
async def create_backup(store: StoreDep) -> dict:
    """Snapshot every document into a timestamped backup directory."""
    path = await store.backup()
    return ok({"path": str(path)})


@router.get("", response_model=ApiResponse[BackupList], response_model_exclude_none=True)
async def list_backups(store: StoreDep) -> dict:
    return ok({"backups": await store.list_backups()})
