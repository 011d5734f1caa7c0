"""Interview API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hrms.domain.enums import InterviewStatus, InterviewType
from hrms.schemas.common import PartialUpdate, UtcDatetime


class InterviewCreateRequest(BaseModel):
    """Request body for scheduling an interview."""

    application_id: str = Field(..., min_length=1)
    scheduled_at: UtcDatetime
    interviewer_ids: list[str] = Field(..., min_length=1)
    interview_type: InterviewType = InterviewType.VIDEO
    duration_minutes: int = Field(default=60, ge=15, le=480)
    location: str | None = Field(default=None, max_length=200)
    meeting_link: str | None = Field(default=None, max_length=500)
    notes: str | None = None


class InterviewUpdate(PartialUpdate):
    """Request body for updating an interview (partial).

    Completing requires feedback and a rating, either here or already stored.
    """

    not_nullable = frozenset(
        {"status", "scheduled_at", "interviewer_ids", "interview_type", "duration_minutes"}
    )

    status: InterviewStatus | None = None
    scheduled_at: UtcDatetime | None = None
    interviewer_ids: list[str] | None = Field(default=None, min_length=1)
    interview_type: InterviewType | None = None
    duration_minutes: int | None = Field(default=None, ge=15, le=480)
    location: str | None = Field(default=None, max_length=200)
    meeting_link: str | None = Field(default=None, max_length=500)
    feedback: str | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    notes: str | None = None


class InterviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    application_id: str
    interview_type: InterviewType
    status: InterviewStatus
    scheduled_at: datetime
    duration_minutes: int
    interviewer_ids: list[str] = Field(default_factory=list)
    location: str | None = None
    meeting_link: str | None = None
    feedback: str | None = None
    rating: int | None = None
    notes: str | None = None
    created_by_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
