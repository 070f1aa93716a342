"""Tests for the HTTP client and the local state container."""

import httpx
import pytest
import pytest_asyncio

from tracker.client import ClientStore, TrackerClient


@pytest_asyncio.fixture
async def tracker(client: httpx.AsyncClient) -> TrackerClient:
    return TrackerClient(client=client)


@pytest_asyncio.fixture
async def loaded(tracker: TrackerClient) -> ClientStore:
    state = ClientStore(tracker)
    assert await state.load_all() is True
    return state


class TestTrackerClient:
    @pytest.mark.asyncio
    async def test_unwraps_success(self, tracker: TrackerClient) -> None:
        result = await tracker.get_roadmap()

        assert result.ok is True
        assert result.status_code == 200
        assert result.data["phases"][0]["id"] == "phase-1"

    @pytest.mark.asyncio
    async def test_unwraps_failure(self, tracker: TrackerClient) -> None:
        result = await tracker.update_phase("phase-missing", {"title": "x"})

        assert result.ok is False
        assert result.status_code == 404
        assert result.error == "Phase not found"

    @pytest.mark.asyncio
    async def test_transport_error_becomes_result(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = httpx.MockTransport(refuse)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            result = await TrackerClient(client=http).get_progress()

        assert result.ok is False
        assert result.status_code is None
        assert "connection refused" in result.error

    @pytest.mark.asyncio
    async def test_non_json_response(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway"))
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            result = await TrackerClient(client=http).get_roadmap()

        assert result.ok is False
        assert result.status_code == 502


class TestClientStore:
    @pytest.mark.asyncio
    async def test_load_all(self, loaded: ClientStore) -> None:
        assert loaded.roadmap["phases"][0]["sections"][1]["topics"][0]["id"] == (
            "topic-section-sql-1"
        )
        assert loaded.progress["sections"] == {}
        assert loaded.notes["notes"] == []
        assert loaded.resources["resources"][0]["id"] == "res-python-docs"
        assert loaded.projects["projects"] == []
        assert loaded.error is None

    @pytest.mark.asyncio
    async def test_load_all_failure_keeps_state(self) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(500, json={"success": False, "error": "disk on fire"})
        )
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            state = ClientStore(TrackerClient(client=http))
            assert await state.load_all() is False

        assert state.roadmap is None
        assert state.error == "disk on fire"

    @pytest.mark.asyncio
    async def test_phase_actions(self, loaded: ClientStore) -> None:
        phase = await loaded.add_phase({"title": "Streaming"})
        assert phase is not None
        assert loaded.roadmap["phases"][-1] == phase

        assert await loaded.update_phase(phase["id"], {"duration": "2 weeks"}) is True
        assert loaded.roadmap["phases"][-1]["duration"] == "2 weeks"

        assert await loaded.delete_phase("phase-1") is True
        assert [(p["id"], p["order"]) for p in loaded.roadmap["phases"]] == [
            ("phase-2", 1),
            (phase["id"], 2),
        ]

    @pytest.mark.asyncio
    async def test_failed_action_leaves_state_untouched(self, loaded: ClientStore) -> None:
        before = [dict(p) for p in loaded.roadmap["phases"]]

        assert await loaded.update_phase("phase-missing", {"title": "x"}) is False

        assert loaded.error == "Phase not found"
        assert loaded.roadmap["phases"] == before

    @pytest.mark.asyncio
    async def test_section_actions(self, loaded: ClientStore) -> None:
        section = await loaded.add_section("phase-2", {"title": "Streaming"})
        assert loaded.get_section("phase-2", section["id"]) == section

        topic = await loaded.add_topic("phase-2", section["id"], "Kafka")
        assert topic is not None
        assert await loaded.toggle_topic("phase-2", section["id"], topic["id"]) is True
        assert loaded.get_section("phase-2", section["id"])["topics"][0]["completed"] is True

        task = await loaded.add_task("phase-2", section["id"], "Run a broker", priority="high")
        assert await loaded.toggle_task("phase-2", section["id"], task["id"]) is True
        toggled = loaded.get_section("phase-2", section["id"])["tasks"][0]
        assert toggled["completed"] is True
        assert toggled["completedAt"] is not None

        assert await loaded.set_learning_resource(
            "phase-2", section["id"], {"id": "lr-1", "type": "book", "title": "Kafka Guide"}
        )
        assert loaded.get_section("phase-2", section["id"])["learningResource"]["title"] == (
            "Kafka Guide"
        )
        assert await loaded.clear_learning_resource("phase-2", section["id"])
        assert loaded.get_section("phase-2", section["id"])["learningResource"] is None

        assert await loaded.delete_section("phase-2", "section-orchestration") is True
        assert [s["order"] for s in loaded.roadmap["phases"][1]["sections"]] == [1]

    @pytest.mark.asyncio
    async def test_update_progress_and_stats(self, loaded: ClientStore) -> None:
        entry = await loaded.update_progress("section-python", progress=100)
        assert entry["status"] == "completed"
        await loaded.update_progress("section-sql", status="in-progress")
        await loaded.add_note("section-sql", "Joins", "Inner vs outer")

        stats = loaded.stats()

        assert stats.total_sections == 3
        assert stats.completed_sections == 1
        assert stats.in_progress_sections == 1
        assert stats.not_started_sections == 1
        assert stats.overall_progress == 33
        assert stats.total_notes == 1
        assert [(p.phase_id, p.progress) for p in stats.phase_progress] == [
            ("phase-1", 50),
            ("phase-2", 0),
        ]

    @pytest.mark.asyncio
    async def test_read_helpers(self, loaded: ClientStore) -> None:
        note = await loaded.add_note("section-sql", "Joins", "Inner vs outer")

        assert loaded.section_notes("section-sql") == [note]
        assert loaded.section_progress("section-sql")["status"] == "not-started"
        phase, section = loaded.find_section("section-orchestration")
        assert phase["id"] == "phase-2"
        assert section["title"] == "Workflow Orchestration"
        assert loaded.find_section("nope") is None
        assert loaded.get_section("phase-9", "section-sql") is None

    @pytest.mark.asyncio
    async def test_note_resource_project_actions(self, loaded: ClientStore) -> None:
        note = await loaded.add_note(None, "Loose note", "No section")
        assert await loaded.update_note(note["id"], {"title": "Renamed"}) is True
        assert loaded.notes["notes"][0]["title"] == "Renamed"
        assert await loaded.delete_note(note["id"]) is True
        assert loaded.notes["notes"] == []

        resource = await loaded.add_resource({"title": "dbt docs", "url": "https://docs.getdbt.com"})
        assert await loaded.update_resource(resource["id"], {"type": "documentation"}) is True
        assert loaded.resources["resources"][-1]["type"] == "documentation"
        assert await loaded.delete_resource(resource["id"]) is True

        project = await loaded.add_project({"title": "Lakehouse"})
        assert await loaded.update_project(project["id"], {"status": "completed"}) is True
        assert loaded.projects["projects"][0]["status"] == "completed"
        assert await loaded.delete_project(project["id"]) is True
        assert loaded.projects["projects"] == []

    @pytest.mark.asyncio
    async def test_invalid_note_reports_error(self, loaded: ClientStore) -> None:
        assert await loaded.add_note("section-sql", "", "") is None
        assert loaded.error == "Title and content are required"
        assert loaded.notes["notes"] == []
