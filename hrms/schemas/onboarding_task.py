"""Onboarding task API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hrms.domain.enums import OnboardingTaskStatus
from hrms.schemas.common import PartialUpdate, UtcDatetime


class OnboardingTaskCreateRequest(BaseModel):
    employee_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    due_date: UtcDatetime
    assignee_id: str | None = None
    description: str | None = None
    category: str | None = Field(default=None, max_length=64)
    sort_order: int = Field(default=0, ge=0)
    notes: str | None = None


class OnboardingTaskUpdate(PartialUpdate):
    """Request body for updating a task (partial). Employees may set only status, notes, completed_at."""

    not_nullable = frozenset({"title", "due_date", "sort_order", "status"})

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    category: str | None = Field(default=None, max_length=64)
    assignee_id: str | None = None
    due_date: UtcDatetime | None = None
    sort_order: int | None = Field(default=None, ge=0)
    status: OnboardingTaskStatus | None = None
    notes: str | None = None
    completed_at: UtcDatetime | None = None


class BulkTaskChanges(PartialUpdate):
    not_nullable = frozenset({"status", "due_date"})

    status: OnboardingTaskStatus | None = None
    assignee_id: str | None = None
    due_date: UtcDatetime | None = None
    notes: str | None = None


class OnboardingTaskBulkUpdateRequest(BaseModel):
    task_ids: list[str] = Field(..., min_length=1, max_length=100)
    updates: BulkTaskChanges


class OnboardingTaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    employee_id: str
    title: str
    status: OnboardingTaskStatus
    due_date: datetime
    assignee_id: str | None = None
    description: str | None = None
    category: str | None = None
    sort_order: int = 0
    notes: str | None = None
    completed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OnboardingTaskBulkUpdateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    updated_count: int
    updated: list[OnboardingTaskResponse]


class OnboardingSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    employee_id: str
    total: int
    status_counts: dict[str, int]
    completion_percentage: float
    overdue_count: int
    days_since_hire: int | None = None
    recent_tasks: list[OnboardingTaskResponse] = Field(default_factory=list)
