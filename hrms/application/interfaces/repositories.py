"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill.
All types reference application DTOs only; no infrastructure imports.
Owner-scoped list methods take owner_ids: None means unrestricted, a set
restricts rows to those owners (an empty set matches nothing).
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from hrms.application.dtos.audit_log import (
        ActivityCount,
        AuditLogEntryCreate,
        AuditLogFilters,
        AuditLogResult,
        DailyCount,
    )
    from hrms.application.dtos.document import DocumentCreate, DocumentFilters, DocumentResult
    from hrms.application.dtos.employee import EmployeeCreate, EmployeeFilters, EmployeeResult
    from hrms.application.dtos.interview import InterviewCreate, InterviewFilters, InterviewResult
    from hrms.application.dtos.job_posting import (
        JobApplicationCreate,
        JobApplicationFilters,
        JobApplicationResult,
        JobPostingCreate,
        JobPostingFilters,
        JobPostingResult,
    )
    from hrms.application.dtos.org import (
        DepartmentCreate,
        DepartmentFilters,
        DepartmentResult,
        PositionCreate,
        PositionFilters,
        PositionResult,
    )
    from hrms.application.dtos.onboarding_task import (
        OnboardingTaskCreate,
        OnboardingTaskFilters,
        OnboardingTaskResult,
    )
    from hrms.application.dtos.payroll import (
        PayrollFilters,
        PayrollRecordCreate,
        PayrollRecordResult,
    )
    from hrms.domain.enums import ApplicationStatus, JobPostingStatus


class IOrgHierarchyRepository(Protocol):
    """Manager → direct report edges."""

    async def get_direct_report_ids(self, manager_id: str) -> set[str]:
        """Return ids of employees whose manager_id is manager_id (one level only)."""


class IOrgReferenceRepository(Protocol):
    """Departments and positions referenced by employees and postings."""

    async def department_is_active(self, department_id: str) -> bool:
        """Return True if the department exists and is active."""

    async def position_is_active(self, position_id: str) -> bool:
        """Return True if the position exists and is active."""


class IDepartmentRepository(Protocol):
    async def get_by_id(self, department_id: str) -> DepartmentResult | None:
        """Return department by id."""

    async def get_by_name(self, name: str) -> DepartmentResult | None:
        """Return department by name (case-insensitive)."""

    async def list_page(
        self, filters: DepartmentFilters, skip: int, limit: int
    ) -> tuple[list[DepartmentResult], int]:
        """Return (page, total) ordered by name."""

    async def create(self, data: DepartmentCreate) -> DepartmentResult:
        """Insert an active department."""

    async def update(self, department_id: str, changes: dict[str, Any]) -> DepartmentResult:
        """Apply field changes and return the new state."""

    async def count_active_employees(self, department_id: str) -> int:
        """Count non-terminated employees in the department."""

    async def count_active_positions(self, department_id: str) -> int:
        """Count active positions attached to the department."""


class IPositionRepository(Protocol):
    async def get_by_id(self, position_id: str) -> PositionResult | None:
        """Return position by id."""

    async def list_page(
        self, filters: PositionFilters, skip: int, limit: int
    ) -> tuple[list[PositionResult], int]:
        """Return (page, total) ordered by title."""

    async def create(self, data: PositionCreate) -> PositionResult:
        """Insert an active position."""

    async def update(self, position_id: str, changes: dict[str, Any]) -> PositionResult:
        """Apply field changes and return the new state."""

    async def count_active_employees(self, position_id: str) -> int:
        """Count non-terminated employees holding the position."""


class IUserAccountRepository(Protocol):
    async def deactivate_for_employee(self, employee_id: str) -> int:
        """Deactivate user accounts linked to the employee. Returns rows affected."""


class IEmployeeRepository(IOrgHierarchyRepository, Protocol):
    async def get_by_id(self, employee_id: str) -> EmployeeResult | None:
        """Return employee by id."""

    async def get_by_ids(self, employee_ids: Iterable[str]) -> list[EmployeeResult]:
        """Return the employees that exist among employee_ids (any order)."""

    async def get_by_code(self, employee_code: str) -> EmployeeResult | None:
        """Return employee by business employee code."""

    async def get_by_email(self, email: str) -> EmployeeResult | None:
        """Return employee by email (case-insensitive)."""

    async def list_page(
        self,
        owner_ids: frozenset[str] | None,
        filters: EmployeeFilters,
        skip: int,
        limit: int,
    ) -> tuple[list[EmployeeResult], int]:
        """Return (page, total) ordered by last name, first name."""

    async def create(self, data: EmployeeCreate) -> EmployeeResult:
        """Insert an employee."""

    async def update(self, employee_id: str, changes: dict[str, Any]) -> EmployeeResult:
        """Apply field changes and return the new state."""

    async def count_active_subordinates(self, manager_id: str) -> int:
        """Count direct reports that are not TERMINATED."""


class IJobPostingRepository(Protocol):
    async def get_by_id(self, posting_id: str) -> JobPostingResult | None:
        """Return posting by id."""

    async def list_page(
        self,
        statuses: frozenset[JobPostingStatus] | None,
        filters: JobPostingFilters,
        skip: int,
        limit: int,
    ) -> tuple[list[JobPostingResult], int]:
        """Return (page, total) newest first; statuses restricts visible postings."""

    async def create(self, data: JobPostingCreate) -> JobPostingResult:
        """Insert a posting."""

    async def update(self, posting_id: str, changes: dict[str, Any]) -> JobPostingResult:
        """Apply field changes and return the new state."""

    async def delete(self, posting_id: str) -> None:
        """Physically remove a posting."""

    async def count_applications(self, posting_id: str) -> int:
        """Count applications that reference the posting."""


class IJobApplicationRepository(Protocol):
    async def get_by_id(self, application_id: str) -> JobApplicationResult | None:
        """Return application by id."""

    async def list_page(
        self, filters: JobApplicationFilters, skip: int, limit: int
    ) -> tuple[list[JobApplicationResult], int]:
        """Return (page, total), newest first."""

    async def find_for_candidate(
        self, job_posting_id: str, candidate_email: str
    ) -> JobApplicationResult | None:
        """Return the application of candidate_email (case-insensitive) to the posting."""

    async def create(self, data: JobApplicationCreate) -> JobApplicationResult:
        """Insert an application."""

    async def update_status(
        self, application_id: str, status: ApplicationStatus
    ) -> JobApplicationResult:
        """Set application status."""


class IInterviewRepository(Protocol):
    async def get_by_id(self, interview_id: str) -> InterviewResult | None:
        """Return interview by id."""

    async def list_page(
        self, filters: InterviewFilters, skip: int, limit: int
    ) -> tuple[list[InterviewResult], int]:
        """Return (page, total) ordered by scheduled_at ascending."""

    async def create(self, data: InterviewCreate) -> InterviewResult:
        """Insert an interview in SCHEDULED status."""

    async def update(self, interview_id: str, changes: dict[str, Any]) -> InterviewResult:
        """Apply field changes and return the new state."""

    async def find_interviewer_conflicts(
        self,
        interviewer_ids: Iterable[str],
        window_start: datetime,
        window_end: datetime,
        exclude_id: str | None = None,
    ) -> list[InterviewResult]:
        """Return SCHEDULED/IN_PROGRESS interviews sharing an interviewer within the window."""

    async def count_active_for_application(
        self, application_id: str, exclude_id: str | None = None
    ) -> int:
        """Count SCHEDULED/IN_PROGRESS interviews for the application."""


class IOnboardingTaskRepository(Protocol):
    async def get_by_id(self, task_id: str) -> OnboardingTaskResult | None:
        """Return task by id."""

    async def get_by_ids(self, task_ids: Iterable[str]) -> list[OnboardingTaskResult]:
        """Return the tasks that exist among task_ids."""

    async def list_page(
        self,
        owner_ids: frozenset[str] | None,
        filters: OnboardingTaskFilters,
        skip: int,
        limit: int,
        now: datetime,
        assignee_id: str | None = None,
    ) -> tuple[list[OnboardingTaskResult], int]:
        """Return (page, total) ordered by due date, sort order, created_at.

        With owner_ids set, rows match when employee_id is in owner_ids or
        the task is assigned to assignee_id.
        """

    async def list_for_employee(self, employee_id: str) -> list[OnboardingTaskResult]:
        """Return all tasks of one employee, most recently updated first."""

    async def create(self, data: OnboardingTaskCreate) -> OnboardingTaskResult:
        """Insert a task in PENDING status. Raises DUPLICATE_TASK on an open duplicate."""

    async def update(self, task_id: str, changes: dict[str, Any]) -> OnboardingTaskResult:
        """Apply field changes and return the new state."""

    async def find_open_duplicate(
        self, employee_id: str, title: str, exclude_id: str | None = None
    ) -> OnboardingTaskResult | None:
        """Return a PENDING/IN_PROGRESS task of the employee with the same title."""


class IPayrollRepository(Protocol):
    async def get_by_id(self, record_id: str) -> PayrollRecordResult | None:
        """Return record by id."""

    async def list_page(
        self,
        owner_ids: frozenset[str] | None,
        filters: PayrollFilters,
        skip: int,
        limit: int,
    ) -> tuple[list[PayrollRecordResult], int]:
        """Return (page, total) newest period first."""

    async def list_for_employee(self, employee_id: str) -> list[PayrollRecordResult]:
        """Return all records of one employee, newest period first."""

    async def create(self, data: PayrollRecordCreate) -> PayrollRecordResult:
        """Insert a record. Raises OVERLAPPING_PAY_PERIOD on a storage-level conflict."""

    async def update(self, record_id: str, changes: dict[str, Any]) -> PayrollRecordResult:
        """Apply field changes and return the new state."""

    async def find_overlapping(
        self,
        employee_id: str,
        start: date,
        end: date,
        exclude_id: str | None = None,
    ) -> list[PayrollRecordResult]:
        """Return non-CANCELLED records of the employee whose [start, end) intersects."""


class IDocumentRepository(Protocol):
    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        """Return document by id."""

    async def list_page(
        self,
        owner_ids: frozenset[str] | None,
        filters: DocumentFilters,
        skip: int,
        limit: int,
    ) -> tuple[list[DocumentResult], int]:
        """Return (page, total) newest first."""

    async def create(self, data: DocumentCreate) -> DocumentResult:
        """Insert a document record."""

    async def update(self, document_id: str, changes: dict[str, Any]) -> DocumentResult:
        """Apply metadata changes and return the new state."""

    async def delete(self, document_id: str) -> None:
        """Physically remove a document record."""


class IAuditLogRepository(Protocol):
    """Append-only audit store. Retention cleanup is the only delete path."""

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one record."""

    async def get_by_id(self, audit_id: str) -> AuditLogResult | None:
        """Return record by id."""

    async def list_page(
        self, filters: AuditLogFilters, skip: int, limit: int
    ) -> list[AuditLogResult]:
        """Return records matching filters, timestamp descending."""

    async def count(self, filters: AuditLogFilters | None = None) -> int:
        """Count records matching filters (all records when None)."""

    async def count_by_action(self) -> dict[str, int]:
        """Return record counts grouped by action."""

    async def count_per_day(self, since: datetime) -> list[DailyCount]:
        """Return per-day totals for records at or after since, oldest day first."""

    async def top_actors(self, since: datetime, limit: int) -> list[ActivityCount]:
        """Return the most active actor ids since the given time."""

    async def top_resources(self, since: datetime, limit: int) -> list[ActivityCount]:
        """Return the most touched resource types since the given time."""

    async def count_older_than(self, cutoff: datetime) -> int:
        """Count records with timestamp strictly before cutoff."""

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete records with timestamp strictly before cutoff. Returns rows removed."""
