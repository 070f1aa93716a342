"""File-backed document store.

Every concern of the tracker lives in one JSON document under the data
directory::

    data/
      roadmap.json  progress.json  notes.json
      resources.json  projects.json  settings.json
      backups/<timestamp>/<name>.json
    uploads/<sectionId>/<filename>

Documents are read and written whole. A missing document is bootstrapped
from ``<seed_dir>/<name>.template.json`` on first read.

There is no locking: two requests that modify the same document
concurrently race, and the last write wins.
"""

import asyncio
import json
import os
import re
import shutil
from functools import lru_cache
from pathlib import Path
from typing import Any

from tracker.core.config import get_settings
from tracker.core.errors import DocumentNotFoundError, InvalidInputError, StorageError
from tracker.core.logging import get_logger
from tracker.core.timestamps import backup_stamp

logger = get_logger(__name__)

DOCUMENT_NAMES = ("roadmap", "progress", "notes", "resources", "projects", "settings")

_SAFE_SEGMENT = re.compile(r"^[A-Za-z0-9._-]+$")


def _check_segment(value: str, label: str) -> str:
    """Reject path segments that could escape their directory."""
    if not value or value in {".", ".."} or not _SAFE_SEGMENT.match(value):
        raise InvalidInputError(f"Invalid {label}: {value!r}")
    return value


class DocumentStore:
    """Read and write named JSON documents plus uploaded files."""

    def __init__(
        self,
        data_dir: Path,
        uploads_dir: Path,
        *,
        seed_dir: Path | None = None,
        uploads_url: str = "/uploads",
        backup_retention: int = 7,
    ) -> None:
        self.data_dir = Path(data_dir)
        self.backup_dir = self.data_dir / "backups"
        self.uploads_dir = Path(uploads_dir)
        self.seed_dir = Path(seed_dir) if seed_dir else None
        self.uploads_url = uploads_url.rstrip("/")
        self.backup_retention = max(1, backup_retention)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def document_path(self, name: str) -> Path:
        if name not in DOCUMENT_NAMES:
            raise ValueError(f"Unknown document: {name}")
        return self.data_dir / f"{name}.json"

    def seed_path(self, name: str) -> Path | None:
        if self.seed_dir is None:
            return None
        return self.seed_dir / f"{name}.template.json"

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    async def read(self, name: str) -> dict[str, Any]:
        """Load a document, seeding it from its template on first use."""
        return await asyncio.to_thread(self._read, name)

    async def write(self, name: str, document: dict[str, Any]) -> None:
        """Replace a document wholesale."""
        await asyncio.to_thread(self._write, name, document)

    async def exists(self, name: str) -> bool:
        return await asyncio.to_thread(self.document_path(name).exists)

    async def initialize(self) -> None:
        """Create the directory layout and copy every missing seed."""
        await asyncio.to_thread(self._initialize)

    def _read(self, name: str) -> dict[str, Any]:
        path = self.document_path(name)
        if not path.exists():
            self._seed(name, path)
        try:
            with path.open(encoding="utf-8") as handle:
                return json.load(handle)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Invalid JSON in {path.name}: {exc}") from exc
        except OSError as exc:
            raise StorageError(f"Failed to read {path.name}: {exc}") from exc

    def _seed(self, name: str, target: Path) -> None:
        seed = self.seed_path(name)
        if seed is None or not seed.is_file():
            raise DocumentNotFoundError(f"File not found: {name}.json")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(seed, target)
        except OSError as exc:
            raise StorageError(f"Failed to seed {name}.json: {exc}") from exc
        logger.info("Document seeded", document=name, seed=str(seed))

    def _write(self, name: str, document: dict[str, Any]) -> None:
        path = self.document_path(name)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            payload = json.dumps(document, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Cannot serialize {name}: {exc}") from exc
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            raise StorageError(f"Failed to write {path.name}: {exc}") from exc
        logger.debug("Document written", document=name, bytes=len(payload))

    def _initialize(self) -> None:
        for directory in (self.data_dir, self.backup_dir, self.uploads_dir):
            directory.mkdir(parents=True, exist_ok=True)
        for name in DOCUMENT_NAMES:
            path = self.document_path(name)
            seed = self.seed_path(name)
            if not path.exists() and seed is not None and seed.is_file():
                shutil.copyfile(seed, path)
                logger.info("Document seeded", document=name, seed=str(seed))

    # ------------------------------------------------------------------
    # Backups
    # ------------------------------------------------------------------

    async def backup(self) -> Path:
        """Copy all existing documents into a new timestamped directory."""
        return await asyncio.to_thread(self._backup)

    async def list_backups(self) -> list[str]:
        """Backup directory names, newest first."""
        return await asyncio.to_thread(self._backup_names)

    def _backup(self) -> Path:
        try:
            target = self._new_backup_dir()
            copied = []
            for name in DOCUMENT_NAMES:
                source = self.document_path(name)
                if source.exists():
                    shutil.copy2(source, target / source.name)
                    copied.append(name)
        except OSError as exc:
            raise StorageError(f"Failed to create backup: {exc}") from exc

        pruned = self._prune_backups()
        logger.info("Backup created", path=str(target), documents=copied, pruned=pruned)
        return target

    def _new_backup_dir(self) -> Path:
        """Create a fresh backup directory; same-millisecond stamps get a numeric suffix."""
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        stamp = backup_stamp()
        target = self.backup_dir / stamp
        suffix = 0
        while True:
            try:
                target.mkdir()
                return target
            except FileExistsError:
                suffix += 1
                target = self.backup_dir / f"{stamp}-{suffix}"

    def _backup_names(self) -> list[str]:
        if not self.backup_dir.is_dir():
            return []
        return sorted((p.name for p in self.backup_dir.iterdir() if p.is_dir()), reverse=True)

    def _prune_backups(self) -> list[str]:
        pruned = []
        for name in self._backup_names()[self.backup_retention :]:
            try:
                shutil.rmtree(self.backup_dir / name)
            except OSError as exc:
                logger.warning("Backup prune failed", backup=name, error=str(exc))
                continue
            pruned.append(name)
        return pruned

    # ------------------------------------------------------------------
    # Uploads
    # ------------------------------------------------------------------

    def upload_url(self, section_id: str, filename: str) -> str:
        return f"{self.uploads_url}/{section_id}/{filename}"

    async def ensure_upload_dir(self, section_id: str) -> Path:
        path = self.uploads_dir / _check_segment(section_id, "section id")
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
        return path

    async def save_upload(self, section_id: str, filename: str, data: bytes) -> str:
        """Store an uploaded file and return its public URL."""
        _check_segment(filename, "filename")
        directory = await self.ensure_upload_dir(section_id)
        try:
            await asyncio.to_thread((directory / filename).write_bytes, data)
        except OSError as exc:
            raise StorageError(f"Failed to save upload: {exc}") from exc
        logger.info("Upload saved", section_id=section_id, filename=filename, size=len(data))
        return self.upload_url(section_id, filename)

    async def delete_upload(self, section_id: str, filename: str) -> bool:
        """Remove an uploaded file; drop the section directory once empty."""
        directory = self.uploads_dir / _check_segment(section_id, "section id")
        path = directory / _check_segment(filename, "filename")
        return await asyncio.to_thread(self._delete_upload, directory, path)

    def _delete_upload(self, directory: Path, path: Path) -> bool:
        if not path.is_file():
            return False
        try:
            path.unlink()
            if not any(directory.iterdir()):
                directory.rmdir()
        except OSError as exc:
            raise StorageError(f"Failed to delete upload: {exc}") from exc
        logger.info("Upload deleted", path=str(path))
        return True

    async def list_uploads(self, section_id: str) -> list[str]:
        directory = self.uploads_dir / _check_segment(section_id, "section id")
        names = await asyncio.to_thread(
            lambda: sorted(p.name for p in directory.iterdir()) if directory.is_dir() else []
        )
        return [self.upload_url(section_id, name) for name in names]


@lru_cache
def get_store() -> DocumentStore:
    """Get the process-wide store configured from settings."""
    settings = get_settings()
    return DocumentStore(
        data_dir=settings.DATA_DIR,
        uploads_dir=settings.UPLOADS_DIR,
        seed_dir=settings.seed_dir,
        uploads_url=settings.UPLOADS_URL,
        backup_retention=settings.BACKUP_RETENTION,
    )


async def init_store() -> None:
    """Prepare the data directory."""
    store = get_store()
    logger.info("Initializing document store", data_dir=str(store.data_dir))
    await store.initialize()
