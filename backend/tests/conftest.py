"""Shared fixtures: a temp-dir document store and an HTTP client bound to it."""

from collections.abc import AsyncGenerator
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

from tracker.core.config import PACKAGE_SEED_DIR
from tracker.core.storage import DocumentStore, get_store
from tracker.main import app


@pytest.fixture
def store(tmp_path: Path) -> DocumentStore:
    """Store seeded from the bundled templates, isolated per test."""
    return DocumentStore(
        data_dir=tmp_path / "data",
        uploads_dir=tmp_path / "uploads",
        seed_dir=PACKAGE_SEED_DIR,
        backup_retention=3,
    )


@pytest.fixture
def bare_store(tmp_path: Path) -> DocumentStore:
    """Store with no seed templates at all."""
    return DocumentStore(data_dir=tmp_path / "bare", uploads_dir=tmp_path / "bare-uploads")


@pytest_asyncio.fixture
async def client(store: DocumentStore) -> AsyncGenerator[httpx.AsyncClient, None]:
    app.dependency_overrides[get_store] = lambda: store
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()
