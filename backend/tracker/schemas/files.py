"""Upload and backup schemas."""

from pydantic import BaseModel


class UploadResult(BaseModel):
    url: str
    filename: str


class BackupResult(BaseModel):
    path: str


class BackupList(BaseModel):
    backups: list[str]
