"""DTOs for onboarding tasks."""

from dataclasses import dataclass, field
from datetime import datetime

from hrms.domain.enums import OnboardingTaskStatus


@dataclass(frozen=True)
class OnboardingTaskCreate:
    employee_id: str
    title: str
    due_date: datetime
    assignee_id: str | None = None
    description: str | None = None
    category: str | None = None
    sort_order: int = 0
    notes: str | None = None


@dataclass(frozen=True)
class OnboardingTaskResult:
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

    @property
    def owner_id(self) -> str:
        return self.employee_id

    def is_overdue(self, now: datetime) -> bool:
        return self.due_date < now and self.status not in (
            OnboardingTaskStatus.COMPLETED,
            OnboardingTaskStatus.CANCELLED,
        )


@dataclass(frozen=True)
class OnboardingTaskFilters:
    employee_id: str | None = None
    assignee_id: str | None = None
    status: OnboardingTaskStatus | None = None
    category: str | None = None
    overdue: bool = False


@dataclass(frozen=True)
class OnboardingSummary:
    employee_id: str
    total: int
    status_counts: dict[str, int]
    completion_percentage: float
    overdue_count: int
    days_since_hire: int | None
    recent_tasks: list[OnboardingTaskResult] = field(default_factory=list)


@dataclass(frozen=True)
class BulkUpdateResult:
    updated: list[OnboardingTaskResult]

    @property
    def updated_count(self) -> int:
        return len(self.updated)
