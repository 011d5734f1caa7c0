"""In-memory fakes of the repository, storage and publisher ports for unit tests."""

from __future__ import annotations

import dataclasses
import hashlib
import itertools
from collections import Counter
from collections.abc import AsyncIterator, Iterable
from datetime import date, datetime, timedelta
from typing import Any, BinaryIO

from hrms.application.dtos.audit_log import (
    ActivityCount,
    AuditLogEntryCreate,
    AuditLogFilters,
    AuditLogResult,
    DailyCount,
)
from hrms.application.dtos.context import Actor, OperationContext, RequestMeta
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
from hrms.application.dtos.payroll import PayrollFilters, PayrollRecordCreate, PayrollRecordResult
from hrms.application.services import (
    AuditTrailRecorder,
    OrgHierarchyResolver,
    WorkflowStateMachine,
)
from hrms.application.use_cases.pipeline import AccessScopedPipeline
from hrms.domain.enums import (
    ApplicationStatus,
    DocumentStatus,
    EmployeeStatus,
    EmploymentType,
    InterviewStatus,
    InterviewType,
    JobPostingStatus,
    OnboardingTaskStatus,
    PayrollStatus,
    Role,
)
from hrms.domain.value_objects import PayPeriod
from hrms.shared.utils.datetime import utc_now

_ids = itertools.count(1)


def next_id(prefix: str) -> str:
    return f"{prefix}-{next(_ids)}"


def make_ctx(role: Role = Role.ADMIN, employee_id: str | None = None, actor_id: str = "user-1"):
    return OperationContext(
        actor=Actor(id=actor_id, role=role, employee_id=employee_id),
        request=RequestMeta(request_id="req-1", ip_address="10.0.0.1", user_agent="pytest"),
    )


def _page(items: list, skip: int, limit: int) -> tuple[list, int]:
    return items[skip : skip + limit], len(items)


def _allowed(owner_ids: frozenset[str] | None, owner: str | None) -> bool:
    return owner_ids is None or owner in owner_ids


class _Store:
    """Dict-backed store of frozen result dataclasses."""

    def __init__(self) -> None:
        self.rows: dict[str, Any] = {}

    def add(self, row: Any) -> Any:
        self.rows[row.id] = row
        return row

    async def get_by_id(self, row_id: str) -> Any:
        return self.rows.get(row_id)

    async def get_by_ids(self, row_ids: Iterable[str]) -> list[Any]:
        return [self.rows[i] for i in row_ids if i in self.rows]

    async def update(self, row_id: str, changes: dict[str, Any]) -> Any:
        updated = dataclasses.replace(
            self.rows[row_id], **changes, updated_at=utc_now()
        )
        self.rows[row_id] = updated
        return updated

    async def delete(self, row_id: str) -> None:
        del self.rows[row_id]


# ---- Employees and org reference data ----


def make_employee(
    employee_id: str | None = None,
    *,
    manager_id: str | None = None,
    status: EmployeeStatus = EmployeeStatus.ACTIVE,
    hire_date: date | None = None,
    email: str | None = None,
) -> EmployeeResult:
    employee_id = employee_id or next_id("emp")
    return EmployeeResult(
        id=employee_id,
        employee_code=f"CODE-{employee_id}",
        first_name="Ada",
        last_name=employee_id,
        email=email or f"{employee_id}@example.com",
        phone=None,
        department_id="dept-1",
        position_id="pos-1",
        manager_id=manager_id,
        status=status,
        employment_type=EmploymentType.FULL_TIME,
        hire_date=hire_date or date(2024, 1, 15),
        termination_date=None,
        salary=50000.0,
    )


class FakeEmployeeRepository(_Store):
    def __init__(self, *employees: EmployeeResult, fail_hierarchy: bool = False) -> None:
        super().__init__()
        self.fail_hierarchy = fail_hierarchy
        self.hierarchy_calls = 0
        for e in employees:
            self.add(e)

    async def get_direct_report_ids(self, manager_id: str) -> set[str]:
        self.hierarchy_calls += 1
        if self.fail_hierarchy:
            raise ConnectionError("hierarchy store unavailable")
        return {e.id for e in self.rows.values() if e.manager_id == manager_id}

    async def get_by_code(self, employee_code: str) -> EmployeeResult | None:
        return next((e for e in self.rows.values() if e.employee_code == employee_code), None)

    async def get_by_email(self, email: str) -> EmployeeResult | None:
        return next((e for e in self.rows.values() if e.email.lower() == email.lower()), None)

    async def list_page(
        self, owner_ids: frozenset[str] | None, filters: EmployeeFilters, skip: int, limit: int
    ) -> tuple[list[EmployeeResult], int]:
        rows = [
            e
            for e in self.rows.values()
            if _allowed(owner_ids, e.id)
            and (filters.status is None or e.status is filters.status)
            and (filters.manager_id is None or e.manager_id == filters.manager_id)
        ]
        rows.sort(key=lambda e: (e.last_name, e.first_name))
        return _page(rows, skip, limit)

    async def create(self, data: EmployeeCreate) -> EmployeeResult:
        return self.add(
            EmployeeResult(
                id=next_id("emp"),
                termination_date=None,
                created_at=utc_now(),
                **dataclasses.asdict(data),
            )
        )

    async def count_active_subordinates(self, manager_id: str) -> int:
        return sum(
            1
            for e in self.rows.values()
            if e.manager_id == manager_id and e.status is not EmployeeStatus.TERMINATED
        )


class FakeOrgReferenceRepository:
    def __init__(self, departments: Iterable[str] = ("dept-1",), positions: Iterable[str] = ("pos-1",)):
        self.departments = set(departments)
        self.positions = set(positions)

    async def department_is_active(self, department_id: str) -> bool:
        return department_id in self.departments

    async def position_is_active(self, position_id: str) -> bool:
        return position_id in self.positions


def make_department(
    department_id: str | None = None, name: str = "Engineering", is_active: bool = True
) -> DepartmentResult:
    return DepartmentResult(
        id=department_id or next_id("dept"),
        name=name,
        code=None,
        description=None,
        is_active=is_active,
    )


def make_position(
    position_id: str | None = None,
    department_id: str | None = "dept-1",
    is_active: bool = True,
) -> PositionResult:
    return PositionResult(
        id=position_id or next_id("pos"),
        title="Engineer",
        department_id=department_id,
        is_active=is_active,
    )


class FakeDepartmentRepository(_Store):
    def __init__(self, *departments: DepartmentResult) -> None:
        super().__init__()
        self.active_employees: dict[str, int] = {}
        self.active_positions: dict[str, int] = {}
        for d in departments:
            self.add(d)

    async def get_by_name(self, name: str) -> DepartmentResult | None:
        wanted = name.strip().lower()
        return next((d for d in self.rows.values() if d.name.lower() == wanted), None)

    async def list_page(
        self, filters: DepartmentFilters, skip: int, limit: int
    ) -> tuple[list[DepartmentResult], int]:
        rows = [
            d for d in self.rows.values()
            if filters.is_active is None or d.is_active is filters.is_active
        ]
        return _page(sorted(rows, key=lambda d: d.name), skip, limit)

    async def create(self, data: DepartmentCreate) -> DepartmentResult:
        return self.add(
            DepartmentResult(id=next_id("dept"), is_active=True, **dataclasses.asdict(data))
        )

    async def count_active_employees(self, department_id: str) -> int:
        return self.active_employees.get(department_id, 0)

    async def count_active_positions(self, department_id: str) -> int:
        return self.active_positions.get(department_id, 0)


class FakePositionRepository(_Store):
    def __init__(self, *positions: PositionResult) -> None:
        super().__init__()
        self.active_employees: dict[str, int] = {}
        for p in positions:
            self.add(p)

    async def list_page(
        self, filters: PositionFilters, skip: int, limit: int
    ) -> tuple[list[PositionResult], int]:
        rows = [
            p for p in self.rows.values()
            if filters.department_id is None or p.department_id == filters.department_id
        ]
        return _page(rows, skip, limit)

    async def create(self, data: PositionCreate) -> PositionResult:
        return self.add(
            PositionResult(id=next_id("pos"), is_active=True, **dataclasses.asdict(data))
        )

    async def count_active_employees(self, position_id: str) -> int:
        return self.active_employees.get(position_id, 0)


class FakeUserAccountRepository:
    def __init__(self) -> None:
        self.deactivated: list[str] = []

    async def deactivate_for_employee(self, employee_id: str) -> int:
        self.deactivated.append(employee_id)
        return 1


# ---- Recruiting ----


def make_posting(status: JobPostingStatus = JobPostingStatus.OPEN, posting_id: str | None = None):
    return JobPostingResult(
        id=posting_id or next_id("post"),
        title="Backend Engineer",
        description="Build things",
        department_id="dept-1",
        position_id="pos-1",
        employment_type=EmploymentType.FULL_TIME,
        status=status,
        location=None,
        salary_min=None,
        salary_max=None,
        expires_at=None,
        closed_at=None,
        created_by_id=None,
    )


def make_application(
    posting_id: str, status: ApplicationStatus = ApplicationStatus.SHORTLISTED
) -> JobApplicationResult:
    return JobApplicationResult(
        id=next_id("app"),
        job_posting_id=posting_id,
        candidate_name="Grace",
        candidate_email="grace@example.com",
        status=status,
    )


class FakeJobPostingRepository(_Store):
    def __init__(self, *postings: JobPostingResult) -> None:
        super().__init__()
        self.application_counts: dict[str, int] = {}
        for p in postings:
            self.add(p)

    async def list_page(
        self,
        statuses: frozenset[JobPostingStatus] | None,
        filters: JobPostingFilters,
        skip: int,
        limit: int,
    ) -> tuple[list[JobPostingResult], int]:
        rows = [
            p
            for p in self.rows.values()
            if (statuses is None or p.status in statuses)
            and (filters.status is None or p.status is filters.status)
        ]
        return _page(rows, skip, limit)

    async def create(self, data: JobPostingCreate) -> JobPostingResult:
        return self.add(JobPostingResult(id=next_id("post"), closed_at=None, **dataclasses.asdict(data)))

    async def count_applications(self, posting_id: str) -> int:
        return self.application_counts.get(posting_id, 0)


class FakeJobApplicationRepository(_Store):
    def __init__(self, *applications: JobApplicationResult) -> None:
        super().__init__()
        for a in applications:
            self.add(a)

    async def update_status(self, application_id: str, status: ApplicationStatus) -> JobApplicationResult:
        return await self.update(application_id, {"status": status})

    async def list_page(
        self, filters: JobApplicationFilters, skip: int, limit: int
    ) -> tuple[list[JobApplicationResult], int]:
        rows = [
            a for a in self.rows.values()
            if (filters.job_posting_id is None or a.job_posting_id == filters.job_posting_id)
            and (filters.status is None or a.status is filters.status)
        ]
        return _page(rows, skip, limit)

    async def find_for_candidate(
        self, job_posting_id: str, candidate_email: str
    ) -> JobApplicationResult | None:
        wanted = candidate_email.lower()
        return next(
            (
                a for a in self.rows.values()
                if a.job_posting_id == job_posting_id and a.candidate_email.lower() == wanted
            ),
            None,
        )

    async def create(self, data: JobApplicationCreate) -> JobApplicationResult:
        return self.add(JobApplicationResult(id=next_id("app"), **dataclasses.asdict(data)))


def make_interview(
    application_id: str,
    *,
    status: InterviewStatus = InterviewStatus.SCHEDULED,
    interviewer_ids: tuple[str, ...] = (),
    scheduled_at: datetime | None = None,
    feedback: str | None = None,
    rating: int | None = None,
) -> InterviewResult:
    return InterviewResult(
        id=next_id("int"),
        application_id=application_id,
        interview_type=InterviewType.VIDEO,
        status=status,
        scheduled_at=scheduled_at or utc_now() + timedelta(days=2),
        duration_minutes=60,
        interviewer_ids=interviewer_ids,
        feedback=feedback,
        rating=rating,
    )


class FakeInterviewRepository(_Store):
    _LIVE = (InterviewStatus.SCHEDULED, InterviewStatus.IN_PROGRESS)

    def __init__(self, *interviews: InterviewResult) -> None:
        super().__init__()
        for i in interviews:
            self.add(i)

    async def list_page(
        self, filters: InterviewFilters, skip: int, limit: int
    ) -> tuple[list[InterviewResult], int]:
        rows = sorted(self.rows.values(), key=lambda i: i.scheduled_at)
        return _page(rows, skip, limit)

    async def create(self, data: InterviewCreate) -> InterviewResult:
        fields = dataclasses.asdict(data)
        fields["interviewer_ids"] = tuple(data.interviewer_ids)
        return self.add(
            InterviewResult(id=next_id("int"), status=InterviewStatus.SCHEDULED, **fields)
        )

    async def find_interviewer_conflicts(
        self,
        interviewer_ids: Iterable[str],
        window_start: datetime,
        window_end: datetime,
        exclude_id: str | None = None,
    ) -> list[InterviewResult]:
        wanted = set(interviewer_ids)
        return [
            i
            for i in self.rows.values()
            if i.id != exclude_id
            and i.status in self._LIVE
            and wanted & set(i.interviewer_ids)
            and window_start <= i.scheduled_at <= window_end
        ]

    async def count_active_for_application(
        self, application_id: str, exclude_id: str | None = None
    ) -> int:
        return sum(
            1
            for i in self.rows.values()
            if i.application_id == application_id and i.id != exclude_id and i.status in self._LIVE
        )


# ---- Onboarding ----


def make_task(
    employee_id: str,
    *,
    title: str = "Sign contract",
    status: OnboardingTaskStatus = OnboardingTaskStatus.PENDING,
    assignee_id: str | None = None,
    due_date: datetime | None = None,
    completed_at: datetime | None = None,
    notes: str | None = None,
) -> OnboardingTaskResult:
    return OnboardingTaskResult(
        id=next_id("task"),
        employee_id=employee_id,
        title=title,
        status=status,
        due_date=due_date or utc_now() + timedelta(days=7),
        assignee_id=assignee_id,
        completed_at=completed_at,
        notes=notes,
        created_at=utc_now(),
    )


class FakeOnboardingTaskRepository(_Store):
    _OPEN = (OnboardingTaskStatus.PENDING, OnboardingTaskStatus.IN_PROGRESS)

    def __init__(self, *tasks: OnboardingTaskResult) -> None:
        super().__init__()
        for t in tasks:
            self.add(t)

    async def list_page(
        self,
        owner_ids: frozenset[str] | None,
        filters: OnboardingTaskFilters,
        skip: int,
        limit: int,
        now: datetime,
        assignee_id: str | None = None,
    ) -> tuple[list[OnboardingTaskResult], int]:
        rows = [
            t
            for t in self.rows.values()
            if (
                _allowed(owner_ids, t.employee_id)
                or (assignee_id is not None and t.assignee_id == assignee_id)
            )
            and (filters.employee_id is None or t.employee_id == filters.employee_id)
            and (filters.status is None or t.status is filters.status)
            and (not filters.overdue or t.is_overdue(now))
        ]
        rows.sort(key=lambda t: (t.due_date, t.sort_order))
        return _page(rows, skip, limit)

    async def list_for_employee(self, employee_id: str) -> list[OnboardingTaskResult]:
        rows = [t for t in self.rows.values() if t.employee_id == employee_id]
        return sorted(rows, key=lambda t: t.updated_at or t.created_at or utc_now(), reverse=True)

    async def create(self, data: OnboardingTaskCreate) -> OnboardingTaskResult:
        return self.add(
            OnboardingTaskResult(
                id=next_id("task"),
                status=OnboardingTaskStatus.PENDING,
                created_at=utc_now(),
                **dataclasses.asdict(data),
            )
        )

    async def find_open_duplicate(
        self, employee_id: str, title: str, exclude_id: str | None = None
    ) -> OnboardingTaskResult | None:
        return next(
            (
                t
                for t in self.rows.values()
                if t.employee_id == employee_id
                and t.id != exclude_id
                and t.status in self._OPEN
                and t.title.lower() == title.lower()
            ),
            None,
        )


# ---- Payroll ----


def make_payroll(
    employee_id: str,
    start: date,
    end: date,
    *,
    status: PayrollStatus = PayrollStatus.DRAFT,
    base_salary: float = 5000.0,
    gross_pay: float | None = 5000.0,
    net_pay: float = 5000.0,
) -> PayrollRecordResult:
    return PayrollRecordResult(
        id=next_id("pay"),
        employee_id=employee_id,
        pay_period_start=start,
        pay_period_end=end,
        base_salary=base_salary,
        overtime=0.0,
        bonuses=0.0,
        allowances=0.0,
        deductions=0.0,
        tax=0.0,
        gross_pay=gross_pay,
        net_pay=net_pay,
        status=status,
    )


class FakePayrollRepository(_Store):
    def __init__(self, *records: PayrollRecordResult) -> None:
        super().__init__()
        for r in records:
            self.add(r)

    async def list_page(
        self, owner_ids: frozenset[str] | None, filters: PayrollFilters, skip: int, limit: int
    ) -> tuple[list[PayrollRecordResult], int]:
        rows = [r for r in self.rows.values() if _allowed(owner_ids, r.employee_id)]
        rows.sort(key=lambda r: r.pay_period_start, reverse=True)
        return _page(rows, skip, limit)

    async def list_for_employee(self, employee_id: str) -> list[PayrollRecordResult]:
        rows = [r for r in self.rows.values() if r.employee_id == employee_id]
        return sorted(rows, key=lambda r: r.pay_period_start, reverse=True)

    async def create(self, data: PayrollRecordCreate) -> PayrollRecordResult:
        return self.add(PayrollRecordResult(id=next_id("pay"), **dataclasses.asdict(data)))

    async def find_overlapping(
        self, employee_id: str, start: date, end: date, exclude_id: str | None = None
    ) -> list[PayrollRecordResult]:
        period = PayPeriod(start, end)
        return [
            r
            for r in self.rows.values()
            if r.employee_id == employee_id
            and r.id != exclude_id
            and r.status is not PayrollStatus.CANCELLED
            and period.overlaps(r.period)
        ]


# ---- Documents ----


class FakeDocumentRepository(_Store):
    def __init__(self, *documents: DocumentResult, fail_create: bool = False) -> None:
        super().__init__()
        self.fail_create = fail_create
        for d in documents:
            self.add(d)

    async def list_page(
        self, owner_ids: frozenset[str] | None, filters: DocumentFilters, skip: int, limit: int
    ) -> tuple[list[DocumentResult], int]:
        rows = [d for d in self.rows.values() if _allowed(owner_ids, d.employee_id)]
        return _page(rows, skip, limit)

    async def create(self, data: DocumentCreate) -> DocumentResult:
        if self.fail_create:
            raise RuntimeError("insert failed")
        return self.add(
            DocumentResult(
                id=next_id("doc"), status=DocumentStatus.ACTIVE, **dataclasses.asdict(data)
            )
        )


class FakeDocumentStorage:
    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}

    async def upload(
        self, file_data: BinaryIO, storage_ref: str, expected_checksum: str, content_type: str
    ) -> dict[str, Any]:
        file_data.seek(0)
        content = file_data.read()
        assert hashlib.sha256(content).hexdigest() == expected_checksum
        self.files[storage_ref] = content
        return {"size": len(content), "checksum": expected_checksum}

    async def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        yield self.files[storage_ref]

    async def delete(self, storage_ref: str) -> bool:
        return self.files.pop(storage_ref, None) is not None

    async def exists(self, storage_ref: str) -> bool:
        return storage_ref in self.files


# ---- Audit ----


class FakeAuditLogRepository:
    def __init__(self) -> None:
        self.entries: list[AuditLogResult] = []
        self.delete_calls = 0

    def seed(self, *, action, resource_type: str, actor_id: str = "user-1", timestamp: datetime):
        entry = AuditLogResult(
            id=next_id("audit"),
            actor_id=actor_id,
            action=action,
            resource_type=resource_type,
            resource_id=None,
            before_snapshot=None,
            after_snapshot=None,
            ip_address=None,
            user_agent=None,
            request_id=None,
            timestamp=timestamp,
        )
        self.entries.append(entry)
        return entry

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        result = AuditLogResult(id=next_id("audit"), timestamp=utc_now(), **dataclasses.asdict(entry))
        self.entries.append(result)
        return result

    async def get_by_id(self, audit_id: str) -> AuditLogResult | None:
        return next((e for e in self.entries if e.id == audit_id), None)

    def _matching(self, filters: AuditLogFilters | None) -> list[AuditLogResult]:
        f = filters or AuditLogFilters()
        return [
            e
            for e in self.entries
            if (f.actor_id is None or e.actor_id == f.actor_id)
            and (f.action is None or e.action is f.action)
            and (f.resource_type is None or f.resource_type.lower() in e.resource_type.lower())
        ]

    async def list_page(self, filters: AuditLogFilters, skip: int, limit: int) -> list[AuditLogResult]:
        rows = sorted(self._matching(filters), key=lambda e: e.timestamp, reverse=True)
        return rows[skip : skip + limit]

    async def count(self, filters: AuditLogFilters | None = None) -> int:
        return len(self._matching(filters))

    async def count_by_action(self) -> dict[str, int]:
        return dict(Counter(e.action.value for e in self.entries))

    async def count_per_day(self, since: datetime) -> list[DailyCount]:
        days = Counter(e.timestamp.date() for e in self.entries if e.timestamp >= since)
        return [DailyCount(day=d, count=c) for d, c in sorted(days.items())]

    async def top_actors(self, since: datetime, limit: int) -> list[ActivityCount]:
        counts = Counter(e.actor_id for e in self.entries if e.timestamp >= since and e.actor_id)
        return [ActivityCount(key=k, count=c) for k, c in counts.most_common(limit)]

    async def top_resources(self, since: datetime, limit: int) -> list[ActivityCount]:
        counts = Counter(e.resource_type for e in self.entries if e.timestamp >= since)
        return [ActivityCount(key=k, count=c) for k, c in counts.most_common(limit)]

    async def count_older_than(self, cutoff: datetime) -> int:
        return sum(1 for e in self.entries if e.timestamp < cutoff)

    async def delete_older_than(self, cutoff: datetime) -> int:
        self.delete_calls += 1
        before = len(self.entries)
        self.entries = [e for e in self.entries if e.timestamp >= cutoff]
        return before - len(self.entries)


class FailingAuditLogRepository(FakeAuditLogRepository):
    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        raise ConnectionError("audit store unavailable")


# ---- Events ----


class RecordingPublisher:
    def __init__(self, fail: bool = False) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []
        self.fail = fail

    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        if self.fail:
            raise RuntimeError("broker down")
        self.events.append((event, payload))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]


def build_pipeline(
    employees: FakeEmployeeRepository,
    audit_repo: FakeAuditLogRepository | None = None,
    publisher: RecordingPublisher | None = None,
) -> tuple[AccessScopedPipeline, FakeAuditLogRepository, RecordingPublisher]:
    audit_repo = audit_repo if audit_repo is not None else FakeAuditLogRepository()
    publisher = publisher if publisher is not None else RecordingPublisher()
    pipeline = AccessScopedPipeline(
        OrgHierarchyResolver(employees), AuditTrailRecorder(audit_repo), events=publisher
    )
    return pipeline, audit_repo, publisher


def workflow() -> WorkflowStateMachine:
    return WorkflowStateMachine()
