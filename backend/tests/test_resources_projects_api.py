"""Tests for the resource library and project endpoints."""

import re
from datetime import UTC, datetime

import httpx
import pytest


def assert_utc_timestamp(value: str) -> None:
    assert value.endswith("Z")
    assert datetime.fromisoformat(value.replace("Z", "+00:00")).tzinfo == UTC


class TestResources:
    @pytest.mark.asyncio
    async def test_create_with_defaults(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            "/api/resources", json={"title": "SQLBolt", "url": "https://sqlbolt.com"}
        )

        assert response.status_code == 201
        resource = response.json()["data"]
        assert re.fullmatch(r"res-[0-9a-f]{8}", resource["id"])
        assert resource["type"] == "other"
        assert resource["description"] == ""
        assert resource["tags"] == []
        assert "sectionId" not in resource
        assert_utc_timestamp(resource["createdAt"])

    @pytest.mark.asyncio
    async def test_create_requires_title_and_url(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/api/resources", json={"title": "No URL"})

        assert response.status_code == 400
        assert response.json()["error"] == "Title and URL are required"

    @pytest.mark.asyncio
    async def test_filters(self, client: httpx.AsyncClient) -> None:
        await client.post(
            "/api/resources",
            json={
                "title": "Airflow docs",
                "url": "https://airflow.apache.org",
                "type": "documentation",
                "sectionId": "section-orchestration",
            },
        )
        await client.post(
            "/api/resources",
            json={"title": "Data course", "url": "https://x", "type": "course",
                  "description": "Covers Airflow basics"},
        )

        by_type = await client.get("/api/resources", params={"type": "course"})
        by_section = await client.get(
            "/api/resources", params={"sectionId": "section-orchestration"}
        )
        by_query = await client.get("/api/resources", params={"q": "AIRFLOW"})

        assert [r["title"] for r in by_type.json()["data"]["resources"]] == ["Data course"]
        assert [r["title"] for r in by_section.json()["data"]["resources"]] == ["Airflow docs"]
        assert {r["title"] for r in by_query.json()["data"]["resources"]} == {
            "Airflow docs",
            "Data course",
        }

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client: httpx.AsyncClient) -> None:
        response = await client.put("/api/resources/res-python-docs", json={"tags": ["py"]})
        assert response.status_code == 200
        assert response.json()["data"]["tags"] == ["py"]
        assert response.json()["data"]["title"] == "The Python Tutorial"

        assert (await client.delete("/api/resources/res-python-docs")).status_code == 200
        assert (await client.get("/api/resources/res-python-docs")).status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_resource(self, client: httpx.AsyncClient) -> None:
        response = await client.put("/api/resources/res-missing", json={"title": "x"})

        assert response.status_code == 404
        assert response.json()["error"] == "Resource not found"


class TestProjects:
    @pytest.mark.asyncio
    async def test_create_with_defaults(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/api/projects", json={})

        assert response.status_code == 201
        project = response.json()["data"]
        assert re.fullmatch(r"project-[0-9a-f]{8}", project["id"])
        assert project["title"] == "Untitled Project"
        assert project["status"] == "planning"
        assert project["technologies"] == []
        assert project["notes"] == ""
        assert "githubUrl" not in project
        assert_utc_timestamp(project["createdAt"])
        assert project["updatedAt"] == project["createdAt"]

    @pytest.mark.asyncio
    async def test_create_keeps_optional_fields(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            "/api/projects",
            json={
                "title": "Warehouse",
                "githubUrl": "https://github.com/me/warehouse",
                "technologies": ["dbt", "duckdb"],
                "status": "in-progress",
            },
        )

        project = response.json()["data"]
        assert project["githubUrl"] == "https://github.com/me/warehouse"
        assert project["technologies"] == ["dbt", "duckdb"]
        assert project["status"] == "in-progress"

    @pytest.mark.asyncio
    async def test_update_stores_github_data_as_is(self, client: httpx.AsyncClient) -> None:
        project = (await client.post("/api/projects", json={"title": "P"})).json()["data"]
        snapshot = {"stars": 3, "languages": {"Python": 1200}, "lastFetched": "2025-01-01"}

        response = await client.put(
            f"/api/projects/{project['id']}", json={"githubData": snapshot}
        )

        updated = response.json()["data"]
        assert updated["githubData"] == snapshot
        assert updated["createdAt"] == project["createdAt"]
        listed = (await client.get("/api/projects")).json()["data"]["projects"]
        assert listed[-1]["githubData"] == snapshot

    @pytest.mark.asyncio
    async def test_delete(self, client: httpx.AsyncClient) -> None:
        project = (await client.post("/api/projects", json={"title": "P"})).json()["data"]

        assert (await client.delete(f"/api/projects/{project['id']}")).status_code == 200
        assert (await client.delete(f"/api/projects/{project['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, client: httpx.AsyncClient) -> None:
        for _ in range(5):
            await client.post("/api/projects", json={})

        projects = (await client.get("/api/projects")).json()["data"]["projects"]
        ids = [p["id"] for p in projects]
        assert len(ids) == len(set(ids))
