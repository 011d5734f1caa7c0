"""Route tests for employees and onboarding tasks with in-memory services."""

import pytest
from httpx import AsyncClient

from hrms.api.v1.dependencies import get_employee_service, get_onboarding_task_service
from hrms.application.use_cases import EmployeeService, OnboardingTaskService
from hrms.domain.enums import OnboardingTaskStatus, Role
from hrms.main import app
from tests.fakes import (
    FakeEmployeeRepository,
    FakeOnboardingTaskRepository,
    FakeOrgReferenceRepository,
    FakeUserAccountRepository,
    build_pipeline,
    make_employee,
    make_task,
    workflow,
)

NEW_EMPLOYEE = {
    "employee_code": "EMP-200",
    "first_name": "Ada",
    "last_name": "Osei",
    "email": "ada@example.com",
    "hire_date": "2025-03-01",
    "department_id": "dept-1",
    "position_id": "pos-1",
}


@pytest.fixture
def employees():
    repo = FakeEmployeeRepository(
        make_employee("m-1"),
        make_employee("e-1", manager_id="m-1"),
        make_employee("e-2"),
    )
    pipeline, audit, _ = build_pipeline(repo)
    service = EmployeeService(
        pipeline, repo, FakeOrgReferenceRepository(), FakeUserAccountRepository()
    )
    app.dependency_overrides[get_employee_service] = lambda: service
    return repo, audit


@pytest.fixture
def tasks():
    employees = FakeEmployeeRepository(
        make_employee("m-1"), make_employee("e-1", manager_id="m-1"), make_employee("e-2")
    )
    repo = FakeOnboardingTaskRepository()
    pipeline, audit, _ = build_pipeline(employees)
    service = OnboardingTaskService(pipeline, repo, employees, workflow())
    app.dependency_overrides[get_onboarding_task_service] = lambda: service
    return repo, audit


class TestEmployeeRoutes:
    async def test_list_envelope(self, client: AsyncClient, auth_headers, employees) -> None:
        response = await client.get("/api/v1/employees?limit=2", headers=auth_headers(Role.HR))
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 3
        assert body["limit"] == 2
        assert body["pages"] == 2
        assert len(body["items"]) == 2

    async def test_manager_list_is_scoped(self, client: AsyncClient, auth_headers, employees) -> None:
        response = await client.get(
            "/api/v1/employees", headers=auth_headers(Role.MANAGER, employee_id="m-1")
        )
        assert {e["id"] for e in response.json()["items"]} == {"m-1", "e-1"}

    async def test_read_records_request_metadata(
        self, client: AsyncClient, auth_headers, employees
    ) -> None:
        _, audit = employees
        response = await client.get(
            "/api/v1/employees/e-1",
            headers={**auth_headers(), "X-Request-ID": "req-abc", "User-Agent": "hr-portal"},
        )
        assert response.status_code == 200
        assert response.json()["employee_code"] == "CODE-e-1"
        entry = audit.entries[-1]
        assert entry.request_id == "req-abc"
        assert entry.user_agent == "hr-portal"
        assert entry.actor_id == "user-1"

    async def test_unknown_employee(self, client: AsyncClient, auth_headers, employees) -> None:
        response = await client.get("/api/v1/employees/ghost", headers=auth_headers())
        assert response.status_code == 404
        assert response.json()["error"] == "RESOURCE_NOT_FOUND"

    async def test_employee_role_reading_someone_else(
        self, client: AsyncClient, auth_headers, employees
    ) -> None:
        response = await client.get(
            "/api/v1/employees/e-2", headers=auth_headers(Role.EMPLOYEE, employee_id="e-1")
        )
        assert response.status_code == 403

    async def test_create(self, client: AsyncClient, auth_headers, employees) -> None:
        response = await client.post("/api/v1/employees", json=NEW_EMPLOYEE, headers=auth_headers())
        assert response.status_code == 201
        assert response.json()["status"] == "ACTIVE"

    async def test_duplicate_email_is_a_conflict(
        self, client: AsyncClient, auth_headers, employees
    ) -> None:
        payload = {**NEW_EMPLOYEE, "email": "E-1@example.com"}
        response = await client.post("/api/v1/employees", json=payload, headers=auth_headers())
        assert response.status_code == 409
        assert response.json()["error"] == "DUPLICATE_EMAIL"

    async def test_invalid_body(self, client: AsyncClient, auth_headers, employees) -> None:
        payload = {**NEW_EMPLOYEE, "email": "not-an-email"}
        response = await client.post("/api/v1/employees", json=payload, headers=auth_headers())
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_unknown_department_is_bad_request(
        self, client: AsyncClient, auth_headers, employees
    ) -> None:
        payload = {**NEW_EMPLOYEE, "department_id": "dept-x"}
        response = await client.post("/api/v1/employees", json=payload, headers=auth_headers())
        assert response.status_code == 400
        assert response.json()["error"] == "DEPARTMENT_NOT_FOUND"

    async def test_delete_terminates(self, client: AsyncClient, auth_headers, employees) -> None:
        repo, _ = employees
        response = await client.delete("/api/v1/employees/e-2", headers=auth_headers())
        assert response.status_code == 200
        assert response.json()["status"] == "TERMINATED"
        assert "e-2" in repo.rows


class TestOnboardingBulkRoute:
    async def test_bulk_update(self, client: AsyncClient, auth_headers, tasks) -> None:
        repo, audit = tasks
        a = repo.add(make_task("e-1", title="A"))
        b = repo.add(make_task("e-1", title="B"))

        response = await client.patch(
            "/api/v1/onboarding-tasks/bulk",
            json={"task_ids": [a.id, b.id], "updates": {"status": "IN_PROGRESS"}},
            headers=auth_headers(Role.HR),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["updated_count"] == 2
        assert {t["status"] for t in body["updated"]} == {"IN_PROGRESS"}
        assert len(audit.entries) == 2

    async def test_bulk_rejection_writes_nothing(
        self, client: AsyncClient, auth_headers, tasks
    ) -> None:
        repo, audit = tasks
        a = repo.add(make_task("e-1", title="A"))

        response = await client.patch(
            "/api/v1/onboarding-tasks/bulk",
            json={"task_ids": [a.id], "updates": {"status": "COMPLETED"}},
            headers=auth_headers(Role.HR),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_STATUS_TRANSITION"
        assert repo.rows[a.id].status is OnboardingTaskStatus.PENDING
        assert audit.entries == []

    async def test_empty_id_list_is_invalid(self, client: AsyncClient, auth_headers, tasks) -> None:
        response = await client.patch(
            "/api/v1/onboarding-tasks/bulk",
            json={"task_ids": [], "updates": {"notes": "x"}},
            headers=auth_headers(Role.HR),
        )
        assert response.status_code == 422
