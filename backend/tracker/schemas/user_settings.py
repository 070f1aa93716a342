"""User settings and learning streak schemas."""

from enum import Enum

from tracker.schemas.common import CamelModel
from tracker.schemas.note import NoteTemplateType


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class UserSettings(CamelModel):
    github_token: str | None = None
    theme: Theme = Theme.SYSTEM
    accent_color: str = "#8b5cf6"
    show_streak: bool = True
    enable_spaced_repetition: bool = True
    daily_goal_minutes: int = 60
    default_note_template: NoteTemplateType = NoteTemplateType.BLANK


class StudySession(CamelModel):
    id: str
    section_id: str | None = None
    topic_id: str | None = None
    start_time: str
    end_time: str | None = None
    duration_minutes: int | float = 0
    notes: str | None = None


class LearningStreak(CamelModel):
    current_streak: int = 0
    longest_streak: int = 0
    last_study_date: str = ""
    total_study_days: int = 0
    study_sessions: list[StudySession] = []


class SettingsData(CamelModel):
    settings: UserSettings
    streak: LearningStreak
    last_updated: str


class SettingsUpdate(CamelModel):
    settings: dict | None = None
    streak: dict | None = None


class StudySessionCreate(CamelModel):
    section_id: str | None = None
    topic_id: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    duration_minutes: int | float = 0
    notes: str | None = None
