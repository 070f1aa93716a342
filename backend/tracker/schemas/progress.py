"""Section progress schemas."""

from enum import Enum

from tracker.schemas.common import CamelModel


class SectionStatus(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class SectionProgress(CamelModel):
    status: SectionStatus
    progress: int | float  # 0-100
    start_date: str | None = None
    completed_date: str | None = None
    last_updated: str


class ProgressData(CamelModel):
    sections: dict[str, SectionProgress]
    last_updated: str


class ProgressReplace(CamelModel):
    sections: dict[str, SectionProgress]


class ProgressInit(CamelModel):
    section_id: str | None = None
    status: SectionStatus = SectionStatus.NOT_STARTED
    progress: int | float = 0


class ProgressUpdate(CamelModel):
    status: SectionStatus | None = None
    progress: int | float | None = None
    start_date: str | None = None
    completed_date: str | None = None


class ProgressPatch(CamelModel):
    """Status/percentage transition."""

    status: SectionStatus | None = None
    progress: int | float | None = None
