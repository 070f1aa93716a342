"""Tests for uploads, backups and the generic endpoints."""

import re
from pathlib import Path

import httpx
import pytest

from tracker.core.storage import DocumentStore
from tracker.main import app
from tracker.services.upload_service import UploadPolicy, get_upload_policy


@pytest.fixture
def small_uploads():
    app.dependency_overrides[get_upload_policy] = lambda: UploadPolicy(max_size=16)
    yield
    app.dependency_overrides.pop(get_upload_policy, None)


async def _upload(client: httpx.AsyncClient, filename: str, content: bytes, content_type: str):
    return await client.post(
        "/api/upload",
        data={"sectionId": "section-sql"},
        files={"file": (filename, content, content_type)},
    )


class TestUpload:
    @pytest.mark.asyncio
    async def test_upload_stores_file(
        self, client: httpx.AsyncClient, store: DocumentStore
    ) -> None:
        response = await _upload(client, "diagram.PNG", b"\x89PNG....", "image/png")

        assert response.status_code == 201
        data = response.json()["data"]
        assert re.fullmatch(r"[0-9a-f]{8}-\d{13}\.png", data["filename"])
        assert data["url"] == f"/uploads/section-sql/{data['filename']}"
        assert (store.uploads_dir / "section-sql" / data["filename"]).read_bytes() == b"\x89PNG...."

    @pytest.mark.asyncio
    async def test_allowed_by_extension(self, client: httpx.AsyncClient) -> None:
        response = await _upload(client, "query.sql", b"SELECT 1;", "application/octet-stream")

        assert response.status_code == 201
        assert response.json()["data"]["filename"].endswith(".sql")

    @pytest.mark.asyncio
    async def test_allowed_type_without_extension(self, client: httpx.AsyncClient) -> None:
        response = await _upload(client, "README", b"hello", "text/plain")

        assert response.status_code == 201
        assert response.json()["data"]["filename"].endswith(".bin")

    @pytest.mark.asyncio
    async def test_unusual_extension_stored_as_bin(self, client: httpx.AsyncClient) -> None:
        response = await _upload(client, "report.pdf ", b"%PDF-1.4", "application/pdf")

        assert response.status_code == 201
        assert re.fullmatch(r"[0-9a-f]{8}-\d{13}\.bin", response.json()["data"]["filename"])

    @pytest.mark.asyncio
    async def test_rejects_disallowed_type(
        self, client: httpx.AsyncClient, store: DocumentStore
    ) -> None:
        response = await _upload(client, "setup.exe", b"MZ", "application/x-msdownload")

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid file type")
        assert not store.uploads_dir.exists()

    @pytest.mark.asyncio
    async def test_rejects_oversized_file(
        self, client: httpx.AsyncClient, store: DocumentStore, small_uploads
    ) -> None:
        response = await _upload(client, "big.txt", b"x" * 17, "text/plain")

        assert response.status_code == 400
        assert response.json()["error"].startswith("File too large")
        assert not store.uploads_dir.exists()

    @pytest.mark.asyncio
    async def test_requires_section_id(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            "/api/upload", files={"file": ("a.txt", b"a", "text/plain")}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "sectionId is required"

    @pytest.mark.asyncio
    async def test_requires_file(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/api/upload", data={"sectionId": "section-sql"})

        assert response.status_code == 400
        assert response.json()["error"] == "No file provided"

    @pytest.mark.asyncio
    async def test_list_and_delete(self, client: httpx.AsyncClient) -> None:
        filename = (await _upload(client, "a.txt", b"a", "text/plain")).json()["data"]["filename"]

        listed = await client.get("/api/upload", params={"sectionId": "section-sql"})
        assert listed.json()["data"] == [f"/uploads/section-sql/{filename}"]

        deleted = await client.delete(f"/api/upload/{filename}", params={"sectionId": "section-sql"})
        assert deleted.status_code == 200

        missing = await client.delete(f"/api/upload/{filename}", params={"sectionId": "section-sql"})
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_requires_section_id(self, client: httpx.AsyncClient) -> None:
        response = await client.delete("/api/upload/a.txt")

        assert response.status_code == 400
        assert response.json()["error"] == "sectionId is required"


class TestBackup:
    @pytest.mark.asyncio
    async def test_backup_and_list(self, client: httpx.AsyncClient, store: DocumentStore) -> None:
        await client.get("/api/roadmap")

        response = await client.post("/api/backup")

        assert response.status_code == 200
        name = Path(response.json()["data"]["path"]).name
        assert (store.backup_dir / name / "roadmap.json").is_file()

        listed = (await client.get("/api/backup")).json()["data"]["backups"]
        assert listed == [name]


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope(client: httpx.AsyncClient) -> None:
    response = await client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_health(client: httpx.AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_root_points_at_api(client: httpx.AsyncClient) -> None:
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["api"] == "/api"
