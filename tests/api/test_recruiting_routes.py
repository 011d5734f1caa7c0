"""Route tests for job applications, departments and positions with in-memory services."""

import pytest
from httpx import AsyncClient

from hrms.api.v1.dependencies import get_job_application_service, get_org_structure_service
from hrms.application.use_cases import JobApplicationService, OrgStructureService
from hrms.domain.enums import JobPostingStatus, Role
from hrms.main import app
from tests.fakes import (
    FakeDepartmentRepository,
    FakeEmployeeRepository,
    FakeJobApplicationRepository,
    FakeJobPostingRepository,
    FakePositionRepository,
    build_pipeline,
    make_department,
    make_employee,
    make_posting,
    make_position,
    workflow,
)

APPLICATION = {
    "job_posting_id": "open",
    "candidate_name": "Ada Lovelace",
    "candidate_email": "ada@example.com",
}


@pytest.fixture
def applications():
    postings = FakeJobPostingRepository(
        make_posting(posting_id="open"), make_posting(JobPostingStatus.CLOSED, posting_id="closed")
    )
    repo = FakeJobApplicationRepository()
    pipeline, audit, _ = build_pipeline(FakeEmployeeRepository(make_employee("m-1")))
    service = JobApplicationService(pipeline, repo, postings, workflow())
    app.dependency_overrides[get_job_application_service] = lambda: service
    return repo


@pytest.fixture
def org():
    departments = FakeDepartmentRepository(make_department("dept-1", "Engineering"))
    positions = FakePositionRepository(make_position("pos-1", "dept-1"))
    pipeline, _, _ = build_pipeline(FakeEmployeeRepository(make_employee("m-1")))
    service = OrgStructureService(pipeline, departments, positions)
    app.dependency_overrides[get_org_structure_service] = lambda: service
    return departments, positions


class TestJobApplicationRoutes:
    async def test_submit_then_read(self, client: AsyncClient, auth_headers, applications) -> None:
        response = await client.post(
            "/api/v1/job-applications", json=APPLICATION, headers=auth_headers(Role.HR)
        )
        assert response.status_code == 201
        created = response.json()
        assert created["status"] == "APPLIED"

        fetched = await client.get(
            f"/api/v1/job-applications/{created['id']}", headers=auth_headers(Role.HR)
        )
        assert fetched.json()["candidate_email"] == "ada@example.com"

        listed = await client.get(
            "/api/v1/job-applications?job_posting_id=open", headers=auth_headers(Role.HR)
        )
        assert listed.json()["total"] == 1

    async def test_duplicate_is_a_conflict(self, client: AsyncClient, auth_headers, applications) -> None:
        await client.post("/api/v1/job-applications", json=APPLICATION, headers=auth_headers())
        response = await client.post(
            "/api/v1/job-applications",
            json={**APPLICATION, "candidate_email": "ADA@example.com"},
            headers=auth_headers(),
        )
        assert response.status_code == 409
        assert response.json()["error"] == "DUPLICATE_APPLICATION"

    async def test_closed_posting(self, client: AsyncClient, auth_headers, applications) -> None:
        response = await client.post(
            "/api/v1/job-applications",
            json={**APPLICATION, "job_posting_id": "closed"},
            headers=auth_headers(),
        )
        assert response.status_code == 400
        assert response.json()["error"] == "INACTIVE_JOB_POSTING"

    async def test_unknown_posting(self, client: AsyncClient, auth_headers, applications) -> None:
        response = await client.post(
            "/api/v1/job-applications",
            json={**APPLICATION, "job_posting_id": "ghost"},
            headers=auth_headers(),
        )
        assert response.status_code == 400
        assert response.json()["error"] == "JOB_POSTING_NOT_FOUND"

    async def test_invalid_email(self, client: AsyncClient, auth_headers, applications) -> None:
        response = await client.post(
            "/api/v1/job-applications",
            json={**APPLICATION, "candidate_email": "nope"},
            headers=auth_headers(),
        )
        assert response.status_code == 422

    async def test_status_move(self, client: AsyncClient, auth_headers, applications) -> None:
        created = (
            await client.post("/api/v1/job-applications", json=APPLICATION, headers=auth_headers())
        ).json()
        response = await client.patch(
            f"/api/v1/job-applications/{created['id']}/status",
            json={"status": "UNDER_REVIEW"},
            headers=auth_headers(),
        )
        assert response.status_code == 200
        assert response.json()["status"] == "UNDER_REVIEW"

        skipped = await client.patch(
            f"/api/v1/job-applications/{created['id']}/status",
            json={"status": "HIRED"},
            headers=auth_headers(),
        )
        assert skipped.status_code == 400
        assert skipped.json()["error"] == "INVALID_STATUS_TRANSITION"

    async def test_manager_is_forbidden(self, client: AsyncClient, auth_headers, applications) -> None:
        response = await client.get(
            "/api/v1/job-applications", headers=auth_headers(Role.MANAGER, employee_id="m-1")
        )
        assert response.status_code == 403


class TestOrgRoutes:
    async def test_create_department(self, client: AsyncClient, auth_headers, org) -> None:
        response = await client.post(
            "/api/v1/departments", json={"name": "  Legal "}, headers=auth_headers(Role.HR)
        )
        assert response.status_code == 201
        assert response.json()["name"] == "Legal"

    async def test_duplicate_department_is_a_conflict(self, client: AsyncClient, auth_headers, org) -> None:
        response = await client.post(
            "/api/v1/departments", json={"name": "engineering"}, headers=auth_headers()
        )
        assert response.status_code == 409
        assert response.json()["error"] == "DUPLICATE_DEPARTMENT_NAME"

    async def test_null_name_is_unprocessable(self, client: AsyncClient, auth_headers, org) -> None:
        response = await client.patch(
            "/api/v1/departments/dept-1", json={"name": None}, headers=auth_headers()
        )
        assert response.status_code == 422

    async def test_delete_blocked_by_positions(self, client: AsyncClient, auth_headers, org) -> None:
        departments, _ = org
        departments.active_positions["dept-1"] = 1
        response = await client.delete("/api/v1/departments/dept-1", headers=auth_headers())
        assert response.status_code == 400
        assert response.json()["error"] == "HAS_ACTIVE_POSITIONS"

    async def test_delete_deactivates(self, client: AsyncClient, auth_headers, org) -> None:
        departments, _ = org
        response = await client.delete("/api/v1/departments/dept-1", headers=auth_headers())
        assert response.status_code == 200
        assert response.json()["is_active"] is False
        assert "dept-1" in departments.rows

    async def test_manager_lists_but_cannot_create(self, client: AsyncClient, auth_headers, org) -> None:
        headers = auth_headers(Role.MANAGER, employee_id="m-1")
        listed = await client.get("/api/v1/departments", headers=headers)
        assert listed.status_code == 200
        assert listed.json()["total"] == 1
        created = await client.post("/api/v1/departments", json={"name": "Ops"}, headers=headers)
        assert created.status_code == 403

    async def test_create_position_in_unknown_department(
        self, client: AsyncClient, auth_headers, org
    ) -> None:
        response = await client.post(
            "/api/v1/positions",
            json={"title": "Analyst", "department_id": "ghost"},
            headers=auth_headers(),
        )
        assert response.status_code == 400
        assert response.json()["error"] == "DEPARTMENT_NOT_FOUND"

    async def test_position_lookup(self, client: AsyncClient, auth_headers, org) -> None:
        response = await client.get("/api/v1/positions/pos-1", headers=auth_headers())
        assert response.status_code == 200
        assert response.json()["department_id"] == "dept-1"
