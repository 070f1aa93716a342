"""Bundled note templates.

Templates are HTML skeletons that the editor pre-fills when a note is
created from one of them.
"""

from typing import Any

from tracker.schemas.note import NoteTemplateType


def _template(
    template_id: NoteTemplateType, name: str, description: str, sections: list[str], heading: str = ""
) -> dict[str, Any]:
    parts = [f"<h2>{heading}</h2>"] if heading else []
    parts.extend(f"<h3>{title}</h3>\n<p></p>" for title in sections)
    return {
        "id": template_id.value,
        "name": name,
        "description": description,
        "content": "\n\n".join(parts),
    }


NOTE_TEMPLATES: dict[NoteTemplateType, dict[str, Any]] = {
    NoteTemplateType.BLANK: {
        "id": NoteTemplateType.BLANK.value,
        "name": "Blank Note",
        "description": "Start with an empty note",
        "content": "",
    },
    NoteTemplateType.CONCEPT: _template(
        NoteTemplateType.CONCEPT,
        "Concept Summary",
        "Structured template for learning new concepts",
        [
            "What is it?",
            "Why does it matter?",
            "How does it work?",
            "Key Points",
            "Code Example",
            "Related Concepts",
            "Resources",
        ],
        heading="Concept Name",
    ),
    NoteTemplateType.TUTORIAL: _template(
        NoteTemplateType.TUTORIAL,
        "Tutorial Notes",
        "Step-by-step notes for following tutorials",
        [
            "Overview",
            "Learning Goals",
            "Step-by-Step Notes",
            "Issues &amp; Solutions",
            "Key Takeaways",
            "Next Steps",
        ],
        heading="Tutorial: [Title]",
    ),
    NoteTemplateType.TROUBLESHOOTING: _template(
        NoteTemplateType.TROUBLESHOOTING,
        "Troubleshooting",
        "Document errors and their solutions",
        [
            "Error Message",
            "Environment",
            "What I Tried",
            "Solution",
            "Root Cause",
            "Prevention",
            "Helpful Resources",
        ],
        heading="Problem: [Brief Description]",
    ),
    NoteTemplateType.CHEATSHEET: _template(
        NoteTemplateType.CHEATSHEET,
        "Cheatsheet",
        "Quick reference guide for commands and syntax",
        [
            "Quick Start",
            "Setup &amp; Installation",
            "Basic Commands",
            "Common Patterns",
            "Common Mistakes",
            "Examples",
            "Documentation",
        ],
        heading="Cheatsheet: [Topic]",
    ),
    NoteTemplateType.REVIEW: _template(
        NoteTemplateType.REVIEW,
        "Review Note",
        "Spaced repetition review template",
        [
            "Self-Test Questions",
            "Confidence Level",
            "What I Remember",
            "What I Forgot/Got Wrong",
            "New Connections",
            "Next Review",
        ],
        heading="Review: [Topic]",
    ),
}


def list_templates() -> list[dict[str, Any]]:
    return list(NOTE_TEMPLATES.values())


def get_template(template_id: NoteTemplateType | str) -> dict[str, Any]:
    """Template by id; unknown ids fall back to the blank template."""
    try:
        return NOTE_TEMPLATES[NoteTemplateType(template_id)]
    except ValueError:
        return NOTE_TEMPLATES[NoteTemplateType.BLANK]
