"""Tests for section normalization and entity factories."""

import re

from tracker.services.migration import (
    SectionShape,
    detect_section_shape,
    new_attachment,
    new_task,
    new_topic,
    normalize_roadmap,
    normalize_section,
)

LEGACY_SECTION = {
    "id": "s1",
    "title": "SQL",
    "why": "",
    "how": "",
    "order": 1,
    "topics": ["Joins", "Window functions"],
    "learningResource": {"id": "lr-1", "type": "book", "title": "SQL Book"},
}


class TestDetectShape:
    def test_string_topics_are_legacy(self):
        assert detect_section_shape(LEGACY_SECTION) is SectionShape.LEGACY_STRING_TOPICS

    def test_mixed_topics_are_legacy(self):
        section = {"id": "s1", "topics": [{"id": "t", "title": "A"}, "B"]}
        assert detect_section_shape(section) is SectionShape.LEGACY_STRING_TOPICS

    def test_object_topics_are_structured(self):
        section = {"id": "s1", "topics": [{"id": "t", "title": "A"}]}
        assert detect_section_shape(section) is SectionShape.STRUCTURED_TOPICS

    def test_missing_topics_are_structured(self):
        assert detect_section_shape({"id": "s1"}) is SectionShape.STRUCTURED_TOPICS


class TestNormalizeSection:
    def test_converts_string_topics(self):
        normalized = normalize_section(LEGACY_SECTION)

        assert normalized["topics"] == [
            {
                "id": "topic-s1-1",
                "title": "Joins",
                "completed": False,
                "tasks": [],
                "notes": [],
                "resources": [],
            },
            {
                "id": "topic-s1-2",
                "title": "Window functions",
                "completed": False,
                "tasks": [],
                "notes": [],
                "resources": [],
            },
        ]

    def test_adds_missing_arrays(self):
        normalized = normalize_section(LEGACY_SECTION)

        assert normalized["tasks"] == []
        assert normalized["attachments"] == []

    def test_preserves_other_fields(self):
        normalized = normalize_section(LEGACY_SECTION)

        assert normalized["learningResource"] == LEGACY_SECTION["learningResource"]
        assert normalized["title"] == "SQL"
        assert normalized["order"] == 1

    def test_does_not_modify_input(self):
        before = {**LEGACY_SECTION, "topics": list(LEGACY_SECTION["topics"])}
        normalize_section(LEGACY_SECTION)
        assert LEGACY_SECTION == before

    def test_idempotent(self):
        once = normalize_section(LEGACY_SECTION)
        assert normalize_section(once) == once

    def test_structured_topic_gets_default_lists(self):
        section = {"id": "s1", "topics": [{"id": "t1", "title": "A", "completed": True}]}

        normalized = normalize_section(section)

        assert normalized["topics"][0] == {
            "id": "t1",
            "title": "A",
            "completed": True,
            "tasks": [],
            "notes": [],
            "resources": [],
        }

    def test_structured_section_unchanged(self):
        section = normalize_section({"id": "s1", "topics": [], "tasks": [], "attachments": []})
        assert section == {"id": "s1", "topics": [], "tasks": [], "attachments": []}


class TestNormalizeRoadmap:
    def test_normalizes_every_phase(self):
        roadmap = {
            "phases": [
                {"id": "p1", "sections": [LEGACY_SECTION]},
                {"id": "p2", "sections": [{**LEGACY_SECTION, "id": "s2"}]},
            ],
            "lastUpdated": "2025-01-01T00:00:00.000Z",
        }

        normalized = normalize_roadmap(roadmap)

        assert normalized["lastUpdated"] == roadmap["lastUpdated"]
        assert normalized["phases"][1]["sections"][0]["topics"][0]["id"] == "topic-s2-1"
        assert normalize_roadmap(normalized) == normalized

    def test_phase_without_sections(self):
        normalized = normalize_roadmap({"phases": [{"id": "p1"}]})
        assert normalized["phases"] == [{"id": "p1", "sections": []}]


class TestFactories:
    def test_new_topic(self):
        topic = new_topic("Indexes", "s1")

        assert re.fullmatch(r"topic-s1-[0-9a-f]{8}", topic["id"])
        assert topic["completed"] is False
        assert topic["tasks"] == topic["notes"] == topic["resources"] == []

    def test_new_task_defaults(self):
        task = new_task("Read chapter 3")

        assert re.fullmatch(r"task-[0-9a-f]{8}", task["id"])
        assert task["priority"] == "medium"
        assert task["completed"] is False
        assert task["createdAt"].endswith("Z")
        assert "dueDate" not in task

    def test_new_attachment(self):
        attachment = new_attachment("file", "Slides", "/uploads/s1/x.pdf", file_type="pdf")

        assert re.fullmatch(r"attachment-[0-9a-f]{8}", attachment["id"])
        assert attachment["fileType"] == "pdf"
        assert "description" not in attachment
