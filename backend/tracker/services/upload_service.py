"""Attachment uploads."""

import re
import time
from dataclasses import dataclass, field
from pathlib import PurePath

from tracker.core.config import get_settings
from tracker.core.errors import InvalidInputError
from tracker.core.logging import get_logger
from tracker.core.storage import DocumentStore
from tracker.services.documents import short_uuid

logger = get_logger(__name__)

_PLAIN_EXTENSION = re.compile(r"[a-z0-9]+")

ALLOWED_TYPES = frozenset(
    {
        # Images
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/svg+xml",
        # Documents
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "text/plain",
        "text/csv",
        "text/markdown",
        # Code
        "text/javascript",
        "application/javascript",
        "text/typescript",
        "application/json",
        "text/html",
        "text/css",
        "text/x-python",
        "application/x-python-code",
        # Archives
        "application/zip",
        "application/x-rar-compressed",
        "application/x-7z-compressed",
    }
)

# Browsers often send application/octet-stream for these
ALLOWED_EXTENSIONS = frozenset(
    {
        "jpg", "jpeg", "png", "gif", "webp", "svg",
        "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx",
        "txt", "csv", "md",
        "js", "ts", "jsx", "tsx", "json", "html", "css", "py", "sql", "sh",
        "zip", "rar", "7z",
    }
)  # fmt: skip


def file_extension(filename: str) -> str:
    return PurePath(filename).suffix.lstrip(".").lower()


@dataclass(frozen=True)
class UploadPolicy:
    """Which files are accepted and how large they may be."""

    max_size: int
    allowed_types: frozenset[str] = field(default=ALLOWED_TYPES)
    allowed_extensions: frozenset[str] = field(default=ALLOWED_EXTENSIONS)

    def check(self, filename: str, content_type: str | None, size: int) -> None:
        """Raise ``InvalidInputError`` for a disallowed type or an oversized file."""
        if content_type not in self.allowed_types and (
            file_extension(filename) not in self.allowed_extensions
        ):
            raise InvalidInputError(
                "Invalid file type. Please upload images, documents, or code files."
            )
        if size > self.max_size:
            limit_mb = self.max_size // (1024 * 1024)
            raise InvalidInputError(f"File too large. Maximum size: {limit_mb}MB")


def get_upload_policy() -> UploadPolicy:
    return UploadPolicy(max_size=get_settings().MAX_UPLOAD_SIZE)


def stored_filename(original: str) -> str:
    """``<8 hex>-<epoch ms>.<ext>``; a missing or unusual extension becomes ``.bin``."""
    extension = file_extension(original)
    if not _PLAIN_EXTENSION.fullmatch(extension):
        extension = "bin"
    return f"{short_uuid()}-{int(time.time() * 1000)}.{extension}"


async def save_attachment(
    store: DocumentStore,
    policy: UploadPolicy,
    *,
    section_id: str,
    filename: str,
    content_type: str | None,
    data: bytes,
) -> dict[str, str]:
    """Validate and store an upload. Nothing touches disk when validation fails."""
    policy.check(filename, content_type, len(data))

    name = stored_filename(filename)
    url = await store.save_upload(section_id, name, data)

    logger.info(
        "Attachment uploaded",
        section_id=section_id,
        original=filename,
        stored=name,
        content_type=content_type,
    )
    return {"url": url, "filename": name}


async def delete_attachment(store: DocumentStore, section_id: str, filename: str) -> bool:
    return await store.delete_upload(section_id, filename)


async def list_attachments(store: DocumentStore, section_id: str) -> list[str]:
    return await store.list_uploads(section_id)
