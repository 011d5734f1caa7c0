"""PATCH routes answer explicit nulls on required fields with 422 and leave rows alone."""

from datetime import date

import pytest
from httpx import AsyncClient

from hrms.api.v1.dependencies import (
    get_employee_service,
    get_interview_service,
    get_onboarding_task_service,
    get_payroll_service,
)
from hrms.application.use_cases import (
    EmployeeService,
    InterviewService,
    OnboardingTaskService,
    PayrollService,
)
from hrms.domain.enums import ApplicationStatus, Role
from hrms.main import app
from tests.fakes import (
    FakeEmployeeRepository,
    FakeInterviewRepository,
    FakeJobApplicationRepository,
    FakeJobPostingRepository,
    FakeOnboardingTaskRepository,
    FakeOrgReferenceRepository,
    FakePayrollRepository,
    FakeUserAccountRepository,
    build_pipeline,
    make_application,
    make_employee,
    make_interview,
    make_payroll,
    make_posting,
    make_task,
    workflow,
)


@pytest.fixture
def env():
    employees = FakeEmployeeRepository(make_employee("e-1"), make_employee("iv-1"))
    pipeline, audit, _ = build_pipeline(employees)

    payroll = FakePayrollRepository(make_payroll("e-1", date(2025, 1, 1), date(2025, 2, 1)))
    postings = FakeJobPostingRepository(make_posting(posting_id="open"))
    applications = FakeJobApplicationRepository()
    application = applications.add(make_application("open", ApplicationStatus.INTERVIEW_SCHEDULED))
    interviews = FakeInterviewRepository(make_interview(application.id, interviewer_ids=("iv-1",)))
    tasks = FakeOnboardingTaskRepository(make_task("e-1"))

    services = {
        get_payroll_service: PayrollService(pipeline, payroll, employees, workflow()),
        get_interview_service: InterviewService(
            pipeline, interviews, applications, postings, employees, workflow()
        ),
        get_onboarding_task_service: OnboardingTaskService(pipeline, tasks, employees, workflow()),
        get_employee_service: EmployeeService(
            pipeline, employees, FakeOrgReferenceRepository(), FakeUserAccountRepository()
        ),
    }
    for dependency, service in services.items():
        app.dependency_overrides[dependency] = lambda service=service: service
    return {
        "payroll": payroll,
        "interviews": interviews,
        "onboarding-tasks": tasks,
        "employees": employees,
        "audit": audit,
    }


def _only_id(repo) -> str:
    (row_id,) = repo.rows
    return row_id


@pytest.mark.parametrize(
    "resource, body",
    [
        ("payroll", {"base_salary": None}),
        ("payroll", {"pay_period_start": None}),
        ("payroll", {"tax": None, "notes": "x"}),
        ("interviews", {"status": None}),
        ("interviews", {"scheduled_at": None}),
        ("onboarding-tasks", {"status": None}),
        ("onboarding-tasks", {"due_date": None}),
        ("employees", {"status": None}),
        ("employees", {"last_name": None}),
    ],
)
async def test_null_required_field_is_unprocessable(
    client: AsyncClient, auth_headers, env, resource, body
) -> None:
    repo = env[resource]
    row_id = "e-1" if resource == "employees" else _only_id(repo)
    before = repo.rows[row_id]

    response = await client.patch(
        f"/api/v1/{resource}/{row_id}", json=body, headers=auth_headers(Role.HR)
    )

    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"
    assert repo.rows[row_id] == before
    assert env["audit"].entries == []


async def test_bulk_null_status_is_unprocessable(client: AsyncClient, auth_headers, env) -> None:
    task_id = _only_id(env["onboarding-tasks"])
    response = await client.patch(
        "/api/v1/onboarding-tasks/bulk",
        json={"task_ids": [task_id], "updates": {"status": None}},
        headers=auth_headers(Role.HR),
    )
    assert response.status_code == 422


async def test_nullable_field_may_be_cleared(client: AsyncClient, auth_headers, env) -> None:
    record_id = _only_id(env["payroll"])
    response = await client.patch(
        f"/api/v1/payroll/{record_id}", json={"notes": None}, headers=auth_headers(Role.HR)
    )
    assert response.status_code == 200
    assert response.json()["notes"] is None
