"""Attachment upload API routes."""

from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, Query, UploadFile, status

from tracker.api.deps import StoreDep, UploadPolicyDep
from tracker.core.logging import get_logger
from tracker.schemas.common import ApiResponse, Deleted, ok
from tracker.schemas.files import UploadResult
from tracker.services import upload_service

logger = get_logger(__name__)
router = APIRouter(prefix="/upload", tags=["uploads"])


@router.post(
    "",
    response_model=ApiResponse[UploadResult],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def upload_file(
    store: StoreDep,
    policy: UploadPolicyDep,
    file: Annotated[UploadFile | None, File()] = None,
    section_id: Annotated[str | None, Form(alias="sectionId")] = None,
) -> dict:
    """Store a file attached to a section."""
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")
    if not section_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="sectionId is required"
        )

    data = await file.read()
    result = await upload_service.save_attachment(
        store,
        policy,
        section_id=section_id,
        filename=file.filename or "",
        content_type=file.content_type,
        data=data,
    )
    return ok(result)


@router.get("", response_model=ApiResponse[list[str]], response_model_exclude_none=True)
async def list_uploads(
    store: StoreDep,
    section_id: Annotated[str, Query(alias="sectionId")],
) -> dict:
    """URLs of the files attached to a section."""
    return ok(await upload_service.list_attachments(store, section_id))


@router.delete("/{filename}")
async def delete_upload(
    filename: str,
    store: StoreDep,
    section_id: Annotated[str | None, Query(alias="sectionId")] = None,
) -> dict:
    if not section_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="sectionId is required"
        )
    if not await upload_service.delete_attachment(store, section_id, filename):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return ok(Deleted().model_dump())
