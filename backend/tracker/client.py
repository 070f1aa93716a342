"""Async HTTP client and local state container for the tracker API.

``TrackerClient`` is a thin wrapper over ``httpx.AsyncClient`` that unwraps
the ``{success, data, error}`` envelope into an ``ActionResult``.

``ClientStore`` keeps a local copy of the five documents a UI needs. Every
mutating action goes to the server first; local state only changes when
the server reports success, and always with the entity the server
returned.

Usage::

    async with TrackerClient("http://127.0.0.1:8000") as client:
        store = ClientStore(client)
        await store.load_all()
        await store.update_progress("section-1", progress=40)
        print(store.stats().overall_progress)
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import httpx

from tracker.core.logging import get_logger
from tracker.core.timestamps import now_iso
from tracker.services.documents import find_index, find_item, renumber

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


@dataclass
class ActionResult(Generic[T]):
    """Outcome of one API call."""

    ok: bool
    data: T | None = None
    error: str | None = None
    status_code: int | None = None


@dataclass
class PhaseStats:
    phase_id: str
    title: str
    progress: int
    completed: int
    total: int


@dataclass
class DashboardStats:
    total_sections: int = 0
    completed_sections: int = 0
    in_progress_sections: int = 0
    not_started_sections: int = 0
    overall_progress: int = 0
    total_notes: int = 0
    phase_progress: list[PhaseStats] = field(default_factory=list)


def _percent(part: int, whole: int) -> int:
    return round(part / whole * 100) if whole else 0


# ============================================================================
# HTTP client
# ============================================================================


class TrackerClient:
    """Call the tracker API; never raises for HTTP or transport failures."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._owns_client = client is None

    async def __aenter__(self) -> "TrackerClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def request(self, method: str, path: str, **kwargs: Any) -> ActionResult[Any]:
        """Send a request to ``/api<path>`` and unwrap the envelope."""
        try:
            response = await self._client.request(method, f"/api{path}", **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("API request failed", method=method, path=path, error=str(exc))
            return ActionResult(ok=False, error=str(exc) or type(exc).__name__)

        try:
            body = response.json()
        except ValueError:
            return ActionResult(
                ok=False,
                error=f"Unexpected response from server ({response.status_code})",
                status_code=response.status_code,
            )

        if not body.get("success"):
            return ActionResult(
                ok=False,
                error=body.get("error") or "Request failed",
                status_code=response.status_code,
            )
        return ActionResult(ok=True, data=body.get("data"), status_code=response.status_code)

    # Roadmap

    async def get_roadmap(self) -> ActionResult[dict]:
        return await self.request("GET", "/roadmap")

    async def replace_roadmap(self, phases: list[dict]) -> ActionResult[dict]:
        return await self.request("PUT", "/roadmap", json={"phases": phases})

    async def create_phase(self, phase: dict) -> ActionResult[dict]:
        return await self.request("POST", "/roadmap", json=phase)

    async def update_phase(self, phase_id: str, updates: dict) -> ActionResult[dict]:
        return await self.request("PUT", f"/roadmap/{phase_id}", json=updates)

    async def delete_phase(self, phase_id: str) -> ActionResult[dict]:
        return await self.request("DELETE", f"/roadmap/{phase_id}")

    async def create_section(self, phase_id: str, section: dict) -> ActionResult[dict]:
        return await self.request("POST", f"/roadmap/{phase_id}/sections", json=section)

    async def reorder_sections(self, phase_id: str, section_ids: list[str]) -> ActionResult[list]:
        return await self.request(
            "PUT", f"/roadmap/{phase_id}/sections", json={"sectionIds": section_ids}
        )

    async def get_section(self, phase_id: str, section_id: str) -> ActionResult[dict]:
        return await self.request("GET", f"/roadmap/{phase_id}/sections/{section_id}")

    async def update_section(
        self, phase_id: str, section_id: str, updates: dict
    ) -> ActionResult[dict]:
        return await self.request(
            "PUT", f"/roadmap/{phase_id}/sections/{section_id}", json=updates
        )

    async def delete_section(self, phase_id: str, section_id: str) -> ActionResult[dict]:
        return await self.request("DELETE", f"/roadmap/{phase_id}/sections/{section_id}")

    async def create_section_item(
        self, phase_id: str, section_id: str, kind: str, item: dict
    ) -> ActionResult[dict]:
        """POST a topic, task or attachment to a section."""
        return await self.request(
            "POST", f"/roadmap/{phase_id}/sections/{section_id}/{kind}", json=item
        )

    # Progress

    async def get_progress(self) -> ActionResult[dict]:
        return await self.request("GET", "/progress")

    async def get_section_progress(self, section_id: str) -> ActionResult[dict]:
        return await self.request("GET", f"/progress/{section_id}")

    async def patch_progress(self, section_id: str, changes: dict) -> ActionResult[dict]:
        return await self.request("PATCH", f"/progress/{section_id}", json=changes)

    # Notes

    async def list_notes(self, **params: str) -> ActionResult[dict]:
        return await self.request("GET", "/notes", params=params)

    async def list_note_templates(self) -> ActionResult[list]:
        return await self.request("GET", "/notes/templates")

    async def create_note(self, note: dict) -> ActionResult[dict]:
        return await self.request("POST", "/notes", json=note)

    async def update_note(self, note_id: str, updates: dict) -> ActionResult[dict]:
        return await self.request("PUT", f"/notes/{note_id}", json=updates)

    async def delete_note(self, note_id: str) -> ActionResult[dict]:
        return await self.request("DELETE", f"/notes/{note_id}")

    # Resources

    async def list_resources(self, **params: str) -> ActionResult[dict]:
        return await self.request("GET", "/resources", params=params)

    async def create_resource(self, resource: dict) -> ActionResult[dict]:
        return await self.request("POST", "/resources", json=resource)

    async def update_resource(self, resource_id: str, updates: dict) -> ActionResult[dict]:
        return await self.request("PUT", f"/resources/{resource_id}", json=updates)

    async def delete_resource(self, resource_id: str) -> ActionResult[dict]:
        return await self.request("DELETE", f"/resources/{resource_id}")

    # Projects

    async def list_projects(self) -> ActionResult[dict]:
        return await self.request("GET", "/projects")

    async def create_project(self, project: dict) -> ActionResult[dict]:
        return await self.request("POST", "/projects", json=project)

    async def update_project(self, project_id: str, updates: dict) -> ActionResult[dict]:
        return await self.request("PUT", f"/projects/{project_id}", json=updates)

    async def delete_project(self, project_id: str) -> ActionResult[dict]:
        return await self.request("DELETE", f"/projects/{project_id}")

    # Settings

    async def get_settings(self) -> ActionResult[dict]:
        return await self.request("GET", "/settings")

    async def update_settings(
        self, settings: dict | None = None, streak: dict | None = None
    ) -> ActionResult[dict]:
        body = {k: v for k, v in {"settings": settings, "streak": streak}.items() if v is not None}
        return await self.request("PUT", "/settings", json=body)

    async def record_study_session(self, session: dict) -> ActionResult[dict]:
        return await self.request("POST", "/settings", json=session)

    # Files

    async def upload(
        self, section_id: str, filename: str, content: bytes, content_type: str | None = None
    ) -> ActionResult[dict]:
        return await self.request(
            "POST",
            "/upload",
            data={"sectionId": section_id},
            files={"file": (filename, content, content_type or "application/octet-stream")},
        )

    async def delete_upload(self, section_id: str, filename: str) -> ActionResult[dict]:
        return await self.request("DELETE", f"/upload/{filename}", params={"sectionId": section_id})

    async def backup(self) -> ActionResult[dict]:
        return await self.request("POST", "/backup")


# ============================================================================
# Local state
# ============================================================================


class ClientStore:
    """Local copy of the tracker documents, kept in step with the server."""

    def __init__(self, client: TrackerClient) -> None:
        self.client = client
        self.roadmap: dict[str, Any] | None = None
        self.progress: dict[str, Any] | None = None
        self.notes: dict[str, Any] | None = None
        self.resources: dict[str, Any] | None = None
        self.projects: dict[str, Any] | None = None
        self.error: str | None = None

    def _failed(self, action: str, result: ActionResult[Any]) -> None:
        self.error = result.error or f"Failed to {action}"
        logger.warning("Store action failed", action=action, error=self.error)

    def _accept(self, action: str, result: ActionResult[Any]) -> bool:
        if not result.ok:
            self._failed(action, result)
            return False
        self.error = None
        return True

    async def load_all(self) -> bool:
        """Fetch all five documents; nothing is replaced unless every fetch succeeds."""
        results = await asyncio.gather(
            self.client.get_roadmap(),
            self.client.get_progress(),
            self.client.list_notes(),
            self.client.list_resources(),
            self.client.list_projects(),
        )
        for result in results:
            if not self._accept("load data", result):
                return False
        self.roadmap, self.progress, self.notes, self.resources, self.projects = (
            r.data for r in results
        )
        return True

    # ------------------------------------------------------------------
    # Roadmap
    # ------------------------------------------------------------------

    def _phases(self) -> list[dict[str, Any]]:
        return self.roadmap["phases"] if self.roadmap else []

    def _replace_section(self, phase_id: str, section: dict[str, Any]) -> None:
        phase = find_item(self._phases(), phase_id)
        if phase is None:
            return
        index = find_index(phase["sections"], section["id"])
        if index is None:
            phase["sections"].append(section)
        else:
            phase["sections"][index] = section

    async def replace_roadmap(self, phases: list[dict[str, Any]]) -> bool:
        result = await self.client.replace_roadmap(phases)
        if not self._accept("update roadmap", result):
            return False
        self.roadmap = result.data
        return True

    async def add_phase(self, phase: dict[str, Any]) -> dict[str, Any] | None:
        result = await self.client.create_phase(phase)
        if not self._accept("add phase", result):
            return None
        if self.roadmap is not None:
            self.roadmap["phases"].append(result.data)
        return result.data

    async def update_phase(self, phase_id: str, updates: dict[str, Any]) -> bool:
        result = await self.client.update_phase(phase_id, updates)
        if not self._accept("update phase", result):
            return False
        phases = self._phases()
        index = find_index(phases, phase_id)
        if index is not None:
            phases[index] = result.data
        return True

    async def delete_phase(self, phase_id: str) -> bool:
        result = await self.client.delete_phase(phase_id)
        if not self._accept("delete phase", result):
            return False
        if self.roadmap is not None:
            self.roadmap["phases"] = [p for p in self._phases() if p["id"] != phase_id]
            renumber(self.roadmap["phases"])
        return True

    async def add_section(self, phase_id: str, section: dict[str, Any]) -> dict[str, Any] | None:
        result = await self.client.create_section(phase_id, section)
        if not self._accept("add section", result):
            return None
        self._replace_section(phase_id, result.data)
        return result.data

    async def update_section(self, phase_id: str, section_id: str, updates: dict[str, Any]) -> bool:
        result = await self.client.update_section(phase_id, section_id, updates)
        if not self._accept("update section", result):
            return False
        self._replace_section(phase_id, result.data)
        return True

    async def delete_section(self, phase_id: str, section_id: str) -> bool:
        result = await self.client.delete_section(phase_id, section_id)
        if not self._accept("delete section", result):
            return False
        phase = find_item(self._phases(), phase_id)
        if phase is not None:
            phase["sections"] = [s for s in phase["sections"] if s["id"] != section_id]
            renumber(phase["sections"])
        return True

    async def reorder_sections(self, phase_id: str, section_ids: list[str]) -> bool:
        result = await self.client.reorder_sections(phase_id, section_ids)
        if not self._accept("reorder sections", result):
            return False
        phase = find_item(self._phases(), phase_id)
        if phase is not None:
            phase["sections"] = result.data
        return True

    # ------------------------------------------------------------------
    # Section items
    # ------------------------------------------------------------------

    async def _add_item(
        self, phase_id: str, section_id: str, kind: str, item: dict[str, Any]
    ) -> dict[str, Any] | None:
        result = await self.client.create_section_item(phase_id, section_id, kind, item)
        if not self._accept(f"add {kind}", result):
            return None
        section = self.get_section(phase_id, section_id)
        if section is not None:
            section.setdefault(kind, []).append(result.data)
        return result.data

    async def _rewrite_items(
        self, phase_id: str, section_id: str, kind: str, items: list[dict[str, Any]]
    ) -> bool:
        return await self.update_section(phase_id, section_id, {kind: items})

    async def add_topic(self, phase_id: str, section_id: str, title: str) -> dict[str, Any] | None:
        return await self._add_item(phase_id, section_id, "topics", {"title": title})

    async def update_topic(
        self, phase_id: str, section_id: str, topic_id: str, updates: dict[str, Any]
    ) -> bool:
        section = self.get_section(phase_id, section_id)
        if section is None:
            return False
        topics = [{**t, **updates} if t["id"] == topic_id else t for t in section["topics"]]
        return await self._rewrite_items(phase_id, section_id, "topics", topics)

    async def delete_topic(self, phase_id: str, section_id: str, topic_id: str) -> bool:
        section = self.get_section(phase_id, section_id)
        if section is None:
            return False
        topics = [t for t in section["topics"] if t["id"] != topic_id]
        return await self._rewrite_items(phase_id, section_id, "topics", topics)

    async def toggle_topic(self, phase_id: str, section_id: str, topic_id: str) -> bool:
        section = self.get_section(phase_id, section_id)
        topic = find_item(section["topics"], topic_id) if section else None
        if topic is None:
            return False
        return await self.update_topic(
            phase_id, section_id, topic_id, {"completed": not topic.get("completed")}
        )

    async def add_task(
        self, phase_id: str, section_id: str, title: str, **fields: Any
    ) -> dict[str, Any] | None:
        """Add a section task; ``fields`` may carry description, priority and dueDate."""
        return await self._add_item(phase_id, section_id, "tasks", {"title": title, **fields})

    async def toggle_task(self, phase_id: str, section_id: str, task_id: str) -> bool:
        section = self.get_section(phase_id, section_id)
        if section is None or find_item(section["tasks"], task_id) is None:
            return False
        tasks = []
        for task in section["tasks"]:
            if task["id"] == task_id:
                done = not task.get("completed")
                task = {**task, "completed": done, "completedAt": now_iso() if done else None}
            tasks.append(task)
        return await self._rewrite_items(phase_id, section_id, "tasks", tasks)

    async def delete_task(self, phase_id: str, section_id: str, task_id: str) -> bool:
        section = self.get_section(phase_id, section_id)
        if section is None:
            return False
        tasks = [t for t in section["tasks"] if t["id"] != task_id]
        return await self._rewrite_items(phase_id, section_id, "tasks", tasks)

    async def add_attachment(
        self, phase_id: str, section_id: str, attachment: dict[str, Any]
    ) -> dict[str, Any] | None:
        return await self._add_item(phase_id, section_id, "attachments", attachment)

    async def delete_attachment(self, phase_id: str, section_id: str, attachment_id: str) -> bool:
        section = self.get_section(phase_id, section_id)
        if section is None:
            return False
        attachments = [a for a in section["attachments"] if a["id"] != attachment_id]
        return await self._rewrite_items(phase_id, section_id, "attachments", attachments)

    async def set_learning_resource(
        self, phase_id: str, section_id: str, resource: dict[str, Any]
    ) -> bool:
        return await self.update_section(phase_id, section_id, {"learningResource": resource})

    async def clear_learning_resource(self, phase_id: str, section_id: str) -> bool:
        return await self.update_section(phase_id, section_id, {"learningResource": None})

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    async def update_progress(
        self,
        section_id: str,
        *,
        status: str | None = None,
        progress: int | float | None = None,
    ) -> dict[str, Any] | None:
        changes: dict[str, Any] = {}
        if status is not None:
            changes["status"] = status
        if progress is not None:
            changes["progress"] = progress
        result = await self.client.patch_progress(section_id, changes)
        if not self._accept("update progress", result):
            return None
        if self.progress is None:
            self.progress = {"sections": {}}
        self.progress.setdefault("sections", {})[section_id] = result.data
        return result.data

    # ------------------------------------------------------------------
    # Notes, resources and projects
    # ------------------------------------------------------------------

    async def add_note(
        self, section_id: str | None, title: str, content: str, **fields: Any
    ) -> dict[str, Any] | None:
        note = {"title": title, "content": content, **fields}
        if section_id is not None:
            note["sectionId"] = section_id
        result = await self.client.create_note(note)
        if not self._accept("add note", result):
            return None
        if self.notes is not None:
            self.notes["notes"].insert(0, result.data)
        return result.data

    async def update_note(self, note_id: str, updates: dict[str, Any]) -> bool:
        result = await self.client.update_note(note_id, updates)
        if not self._accept("update note", result):
            return False
        self._replace_entity(self.notes, "notes", result.data)
        return True

    async def delete_note(self, note_id: str) -> bool:
        result = await self.client.delete_note(note_id)
        if not self._accept("delete note", result):
            return False
        self._remove_entity(self.notes, "notes", note_id)
        return True

    async def add_resource(self, resource: dict[str, Any]) -> dict[str, Any] | None:
        result = await self.client.create_resource(resource)
        if not self._accept("add resource", result):
            return None
        if self.resources is not None:
            self.resources["resources"].append(result.data)
        return result.data

    async def update_resource(self, resource_id: str, updates: dict[str, Any]) -> bool:
        result = await self.client.update_resource(resource_id, updates)
        if not self._accept("update resource", result):
            return False
        self._replace_entity(self.resources, "resources", result.data)
        return True

    async def delete_resource(self, resource_id: str) -> bool:
        result = await self.client.delete_resource(resource_id)
        if not self._accept("delete resource", result):
            return False
        self._remove_entity(self.resources, "resources", resource_id)
        return True

    async def add_project(self, project: dict[str, Any]) -> dict[str, Any] | None:
        result = await self.client.create_project(project)
        if not self._accept("add project", result):
            return None
        if self.projects is not None:
            self.projects["projects"].append(result.data)
        return result.data

    async def update_project(self, project_id: str, updates: dict[str, Any]) -> bool:
        result = await self.client.update_project(project_id, updates)
        if not self._accept("update project", result):
            return False
        self._replace_entity(self.projects, "projects", result.data)
        return True

    async def delete_project(self, project_id: str) -> bool:
        result = await self.client.delete_project(project_id)
        if not self._accept("delete project", result):
            return False
        self._remove_entity(self.projects, "projects", project_id)
        return True

    @staticmethod
    def _replace_entity(document: dict[str, Any] | None, key: str, entity: dict[str, Any]) -> None:
        if document is None:
            return
        index = find_index(document[key], entity["id"])
        if index is not None:
            document[key][index] = entity

    @staticmethod
    def _remove_entity(document: dict[str, Any] | None, key: str, entity_id: str) -> None:
        if document is not None:
            document[key] = [e for e in document[key] if e["id"] != entity_id]

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    def section_progress(self, section_id: str) -> dict[str, Any]:
        """Progress entry for a section, not-started when untracked."""
        sections = (self.progress or {}).get("sections", {})
        return sections.get(section_id) or {
            "status": "not-started",
            "progress": 0,
            "startDate": None,
            "completedDate": None,
            "lastUpdated": now_iso(),
        }

    def section_notes(self, section_id: str) -> list[dict[str, Any]]:
        notes = (self.notes or {}).get("notes", [])
        return [n for n in notes if n.get("sectionId") == section_id]

    def find_section(self, section_id: str) -> tuple[dict[str, Any], dict[str, Any]] | None:
        """``(phase, section)`` for the first section with this id."""
        for phase in self._phases():
            section = find_item(phase["sections"], section_id)
            if section is not None:
                return phase, section
        return None

    def get_section(self, phase_id: str, section_id: str) -> dict[str, Any] | None:
        phase = find_item(self._phases(), phase_id)
        return find_item(phase["sections"], section_id) if phase else None

    def stats(self) -> DashboardStats:
        stats = DashboardStats()
        for phase in self._phases():
            completed = 0
            for section in phase["sections"]:
                stats.total_sections += 1
                status = self.section_progress(section["id"])["status"]
                if status == "completed":
                    stats.completed_sections += 1
                    completed += 1
                elif status == "in-progress":
                    stats.in_progress_sections += 1
                else:
                    stats.not_started_sections += 1
                stats.total_notes += len(self.section_notes(section["id"]))

            total = len(phase["sections"])
            stats.phase_progress.append(
                PhaseStats(
                    phase_id=phase["id"],
                    title=phase["title"],
                    progress=_percent(completed, total),
                    completed=completed,
                    total=total,
                )
            )

        stats.overall_progress = _percent(stats.completed_sections, stats.total_sections)
        return stats
