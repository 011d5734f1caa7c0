"""DTOs for interviews."""

from dataclasses import dataclass, field
from datetime import datetime

from hrms.domain.enums import InterviewStatus, InterviewType


@dataclass(frozen=True)
class InterviewCreate:
    application_id: str
    scheduled_at: datetime
    interviewer_ids: tuple[str, ...]
    interview_type: InterviewType = InterviewType.VIDEO
    duration_minutes: int = 60
    location: str | None = None
    meeting_link: str | None = None
    notes: str | None = None
    created_by_id: str | None = None


@dataclass(frozen=True)
class InterviewResult:
    """Interview read-model. Interviews concern candidates, not employees, so they have no owner."""

    id: str
    application_id: str
    interview_type: InterviewType
    status: InterviewStatus
    scheduled_at: datetime
    duration_minutes: int
    interviewer_ids: tuple[str, ...] = field(default_factory=tuple)
    location: str | None = None
    meeting_link: str | None = None
    feedback: str | None = None
    rating: int | None = None
    notes: str | None = None
    created_by_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def owner_id(self) -> None:
        return None


@dataclass(frozen=True)
class InterviewFilters:
    application_id: str | None = None
    status: InterviewStatus | None = None
    interview_type: InterviewType | None = None
    interviewer_id: str | None = None
    scheduled_from: datetime | None = None
    scheduled_to: datetime | None = None
