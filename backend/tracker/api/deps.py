"""API dependencies."""

from typing import Annotated

from fastapi import Depends

from tracker.core.storage import DocumentStore, get_store
from tracker.services.upload_service import UploadPolicy, get_upload_policy

# Document store dependency - overridden in tests with a temp-dir store
StoreDep = Annotated[DocumentStore, Depends(get_store)]

UploadPolicyDep = Annotated[UploadPolicy, Depends(get_upload_policy)]
