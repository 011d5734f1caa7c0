"""Tests for EmployeeService and JobPostingService (in-memory repositories)."""

from dataclasses import replace
from datetime import date, timedelta

import pytest

from hrms.application.dtos.employee import EmployeeCreate, EmployeeFilters
from hrms.application.dtos.job_posting import JobPostingCreate, JobPostingFilters
from hrms.application.use_cases import EmployeeService, JobPostingService
from hrms.domain.enums import AuditAction, EmployeeStatus, JobPostingStatus, Role
from hrms.domain.exceptions import (
    AccessDeniedException,
    BusinessRuleException,
    DependencyNotFoundException,
    ResourceNotFoundException,
    ValidationException,
)
from hrms.shared.utils.datetime import utc_now
from tests.fakes import (
    FakeEmployeeRepository,
    FakeJobPostingRepository,
    FakeOrgReferenceRepository,
    FakeUserAccountRepository,
    build_pipeline,
    make_ctx,
    make_employee,
    make_posting,
)


@pytest.fixture
def env():
    employees = FakeEmployeeRepository(
        make_employee("m-1", email="boss@example.com"),
        make_employee("e-1", manager_id="m-1"),
        make_employee("e-2"),
    )
    users = FakeUserAccountRepository()
    pipeline, audit, events = build_pipeline(employees)
    service = EmployeeService(pipeline, employees, FakeOrgReferenceRepository(), users)
    return service, employees, users, audit, events


def _new_employee(**overrides) -> EmployeeCreate:
    data = EmployeeCreate(
        employee_code="EMP-100",
        first_name="Lin",
        last_name="Chen",
        email="lin@example.com",
        hire_date=date(2025, 3, 1),
        department_id="dept-1",
        position_id="pos-1",
    )
    return replace(data, **overrides)


class TestEmployees:
    async def test_create_publishes_event(self, env) -> None:
        service, _, _, audit, events = env
        created = await service.create_employee(make_ctx(Role.HR), _new_employee(manager_id="m-1"))
        assert created.status is EmployeeStatus.ACTIVE
        assert audit.entries[0].action is AuditAction.CREATE
        assert events.names() == ["employee.created"]

    async def test_duplicate_email_is_case_insensitive(self, env) -> None:
        service, *_ = env
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.create_employee(make_ctx(), _new_employee(email="BOSS@example.com"))
        assert exc_info.value.error_code == "DUPLICATE_EMAIL"

    async def test_duplicate_code(self, env) -> None:
        service, *_ = env
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.create_employee(make_ctx(), _new_employee(employee_code="CODE-e-1"))
        assert exc_info.value.error_code == "DUPLICATE_EMPLOYEE_ID"

    async def test_unknown_department(self, env) -> None:
        service, *_ = env
        with pytest.raises(DependencyNotFoundException) as exc_info:
            await service.create_employee(make_ctx(), _new_employee(department_id="dept-x"))
        assert exc_info.value.error_code == "DEPARTMENT_NOT_FOUND"

    async def test_inactive_manager(self, env) -> None:
        service, employees, *_ = env
        await employees.update("m-1", {"status": EmployeeStatus.TERMINATED})
        with pytest.raises(DependencyNotFoundException) as exc_info:
            await service.create_employee(make_ctx(), _new_employee(manager_id="m-1"))
        assert exc_info.value.error_code == "MANAGER_NOT_FOUND"

    async def test_cannot_manage_self(self, env) -> None:
        service, *_ = env
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.update_employee(make_ctx(), "e-1", {"manager_id": "e-1"})
        assert exc_info.value.error_code == "INVALID_MANAGER"

    async def test_terminate_deactivates_login(self, env) -> None:
        service, _, users, audit, _ = env
        terminated = await service.terminate_employee(make_ctx(), "e-2")
        assert terminated.status is EmployeeStatus.TERMINATED
        assert terminated.termination_date == utc_now().date()
        assert users.deactivated == ["e-2"]
        assert audit.entries[-1].action is AuditAction.DELETE

    async def test_manager_with_reports_cannot_be_terminated(self, env) -> None:
        service, *_ = env
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.terminate_employee(make_ctx(), "m-1")
        assert exc_info.value.error_code == "HAS_ACTIVE_SUBORDINATES"
        assert exc_info.value.details["subordinate_count"] == 1

    async def test_terminate_twice(self, env) -> None:
        service, *_ = env
        await service.terminate_employee(make_ctx(), "e-2")
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.terminate_employee(make_ctx(), "e-2")
        assert exc_info.value.error_code == "ALREADY_TERMINATED"

    async def test_manager_lists_self_and_reports(self, env) -> None:
        service, *_ = env
        page = await service.list_employees(make_ctx(Role.MANAGER, employee_id="m-1"), EmployeeFilters())
        assert {e.id for e in page.items} == {"m-1", "e-1"}
        assert page.total == 2

    async def test_employee_cannot_list_but_can_read_self(self, env) -> None:
        service, *_ = env
        ctx = make_ctx(Role.EMPLOYEE, employee_id="e-1")
        with pytest.raises(AccessDeniedException):
            await service.list_employees(ctx, EmployeeFilters())
        assert (await service.get_employee(ctx, "e-1")).id == "e-1"
        with pytest.raises(AccessDeniedException):
            await service.get_employee(ctx, "e-2")

    async def test_manager_cannot_update(self, env) -> None:
        service, _, _, audit, _ = env
        with pytest.raises(AccessDeniedException):
            await service.update_employee(make_ctx(Role.MANAGER, employee_id="m-1"), "e-1", {"phone": "1"})
        assert audit.entries == []


@pytest.fixture
def postings_env():
    employees = FakeEmployeeRepository(make_employee("e-1"))
    postings = FakeJobPostingRepository(
        make_posting(posting_id="open"),
        make_posting(JobPostingStatus.ON_HOLD, posting_id="held"),
    )
    pipeline, audit, _ = build_pipeline(employees)
    return JobPostingService(pipeline, postings, FakeOrgReferenceRepository()), postings, audit


class TestJobPostings:
    async def test_employees_see_open_postings_only(self, postings_env) -> None:
        service, *_ = postings_env
        ctx = make_ctx(Role.EMPLOYEE, employee_id="e-1")
        page = await service.list_postings(ctx, JobPostingFilters())
        assert [p.id for p in page.items] == ["open"]
        with pytest.raises(ResourceNotFoundException):
            await service.get_posting(ctx, "held")

    async def test_hr_sees_everything(self, postings_env) -> None:
        service, *_ = postings_env
        page = await service.list_postings(make_ctx(Role.HR), JobPostingFilters())
        assert {p.id for p in page.items} == {"open", "held"}

    async def test_salary_range(self, postings_env) -> None:
        service, *_ = postings_env
        data = JobPostingCreate(
            title="QA", description="d", department_id="dept-1", position_id="pos-1",
            salary_min=90000, salary_max=50000,
        )
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.create_posting(make_ctx(), data)
        assert exc_info.value.error_code == "INVALID_SALARY_RANGE"

    async def test_expiry_must_be_future(self, postings_env) -> None:
        service, *_ = postings_env
        data = JobPostingCreate(
            title="QA", description="d", department_id="dept-1", position_id="pos-1",
            expires_at=utc_now() - timedelta(days=1),
        )
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.create_posting(make_ctx(), data)
        assert exc_info.value.error_code == "INVALID_EXPIRATION_DATE"

    async def test_closing_stamps_closed_at(self, postings_env) -> None:
        service, *_ = postings_env
        closed = await service.update_posting(make_ctx(), "open", {"status": JobPostingStatus.CLOSED})
        assert closed.closed_at is not None
        reopened = await service.update_posting(make_ctx(), "open", {"status": JobPostingStatus.OPEN})
        assert reopened.closed_at is None

    async def test_delete_with_applications_closes(self, postings_env) -> None:
        service, postings, audit = postings_env
        postings.application_counts["open"] = 2
        result = await service.delete_posting(make_ctx(), "open")
        assert result.status is JobPostingStatus.CLOSED
        assert "open" in postings.rows
        assert audit.entries[-1].action is AuditAction.DELETE

    async def test_delete_without_applications_removes(self, postings_env) -> None:
        service, postings, audit = postings_env
        assert await service.delete_posting(make_ctx(), "held") is None
        assert "held" not in postings.rows
        assert audit.entries[-1].after_snapshot is None


class TestNullChanges:
    @pytest.mark.parametrize("field", ["status", "first_name", "email", "department_id", "employee_code"])
    async def test_update_refuses_null(self, env, field) -> None:
        service, employees, _, audit, events = env
        before = employees.rows["e-1"]
        with pytest.raises(ValidationException) as exc_info:
            await service.update_employee(make_ctx(Role.HR), "e-1", {field: None})
        assert exc_info.value.error_code == "VALIDATION_ERROR"
        assert employees.rows["e-1"] == before
        assert audit.entries == []
        assert events.events == []

    async def test_manager_can_be_cleared(self, env) -> None:
        service, *_ = env
        updated = await service.update_employee(make_ctx(Role.HR), "e-1", {"manager_id": None})
        assert updated.manager_id is None
