"""Tests for OrgStructureService (in-memory repositories)."""

import pytest

from hrms.application.dtos.org import DepartmentCreate, DepartmentFilters, PositionCreate
from hrms.application.use_cases import OrgStructureService
from hrms.domain.enums import AuditAction, Role
from hrms.domain.exceptions import (
    AccessDeniedException,
    BusinessRuleException,
    DependencyNotFoundException,
    ResourceNotFoundException,
    ValidationException,
)
from tests.fakes import (
    FakeDepartmentRepository,
    FakeEmployeeRepository,
    FakePositionRepository,
    build_pipeline,
    make_ctx,
    make_department,
    make_employee,
    make_position,
)

MANAGER = {"role": Role.MANAGER, "employee_id": "m-1"}


@pytest.fixture
def env():
    departments = FakeDepartmentRepository(
        make_department("dept-1", "Engineering"),
        make_department("dept-2", "Finance"),
        make_department("dept-old", "Typing Pool", is_active=False),
    )
    positions = FakePositionRepository(make_position("pos-1", "dept-1"))
    pipeline, audit, _ = build_pipeline(FakeEmployeeRepository(make_employee("m-1")))
    service = OrgStructureService(pipeline, departments, positions)
    return service, departments, positions, audit


class TestDepartments:
    async def test_create(self, env) -> None:
        service, departments, _, audit = env
        created = await service.create_department(make_ctx(Role.HR), DepartmentCreate(name="Legal"))
        assert created.is_active is True
        assert departments.rows[created.id].name == "Legal"
        assert audit.entries[-1].action is AuditAction.CREATE

    async def test_duplicate_name_ignores_case(self, env) -> None:
        service, departments, *_ = env
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.create_department(make_ctx(), DepartmentCreate(name="engineering"))
        assert exc_info.value.error_code == "DUPLICATE_DEPARTMENT_NAME"
        assert exc_info.value.details["conflicting_ids"] == ["dept-1"]
        assert len(departments.rows) == 3

    async def test_rename_onto_existing_name(self, env) -> None:
        service, *_ = env
        with pytest.raises(BusinessRuleException):
            await service.update_department(make_ctx(), "dept-2", {"name": "Engineering"})

    async def test_rename_changing_only_case(self, env) -> None:
        service, *_ = env
        renamed = await service.update_department(make_ctx(), "dept-1", {"name": "ENGINEERING"})
        assert renamed.name == "ENGINEERING"

    async def test_null_name_is_refused(self, env) -> None:
        service, departments, _, audit = env
        with pytest.raises(ValidationException):
            await service.update_department(make_ctx(), "dept-1", {"name": None})
        assert departments.rows["dept-1"].name == "Engineering"
        assert audit.entries == []

    async def test_deactivate_unused(self, env) -> None:
        service, departments, _, audit = env
        result = await service.deactivate_department(make_ctx(), "dept-2")
        assert result.is_active is False
        assert "dept-2" in departments.rows
        assert audit.entries[-1].action is AuditAction.DELETE

    async def test_deactivate_with_active_employees(self, env) -> None:
        service, departments, *_ = env
        departments.active_employees["dept-2"] = 3
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.deactivate_department(make_ctx(), "dept-2")
        assert exc_info.value.error_code == "HAS_ACTIVE_EMPLOYEES"
        assert exc_info.value.details["employee_count"] == 3
        assert departments.rows["dept-2"].is_active is True

    async def test_deactivate_with_active_positions(self, env) -> None:
        service, departments, *_ = env
        departments.active_positions["dept-1"] = 1
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.update_department(make_ctx(), "dept-1", {"is_active": False})
        assert exc_info.value.error_code == "HAS_ACTIVE_POSITIONS"

    async def test_deactivate_twice(self, env) -> None:
        service, *_ = env
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.deactivate_department(make_ctx(), "dept-old")
        assert exc_info.value.error_code == "ALREADY_INACTIVE"

    async def test_manager_may_browse(self, env) -> None:
        service, *_ = env
        page = await service.list_departments(make_ctx(**MANAGER), DepartmentFilters(is_active=True))
        assert [d.name for d in page.items] == ["Engineering", "Finance"]
        found = await service.get_department(make_ctx(**MANAGER), "dept-1")
        assert found.id == "dept-1"

    async def test_manager_cannot_change(self, env) -> None:
        service, departments, *_ = env
        with pytest.raises(AccessDeniedException):
            await service.deactivate_department(make_ctx(**MANAGER), "dept-2")
        assert departments.rows["dept-2"].is_active is True

    async def test_employee_cannot_browse(self, env) -> None:
        service, *_ = env
        with pytest.raises(AccessDeniedException):
            await service.get_department(make_ctx(Role.EMPLOYEE, employee_id="m-1"), "dept-1")

    async def test_unknown_department(self, env) -> None:
        service, *_ = env
        with pytest.raises(ResourceNotFoundException):
            await service.get_department(make_ctx(), "ghost")


class TestPositions:
    async def test_create_in_active_department(self, env) -> None:
        service, _, positions, _ = env
        created = await service.create_position(
            make_ctx(Role.HR), PositionCreate(title="Analyst", department_id="dept-2")
        )
        assert positions.rows[created.id].department_id == "dept-2"

    async def test_inactive_department_is_rejected(self, env) -> None:
        service, _, positions, _ = env
        with pytest.raises(DependencyNotFoundException) as exc_info:
            await service.create_position(
                make_ctx(), PositionCreate(title="Typist", department_id="dept-old")
            )
        assert exc_info.value.error_code == "DEPARTMENT_NOT_FOUND"
        assert len(positions.rows) == 1

    async def test_move_to_unknown_department(self, env) -> None:
        service, *_ = env
        with pytest.raises(DependencyNotFoundException):
            await service.update_position(make_ctx(), "pos-1", {"department_id": "ghost"})

    async def test_deactivate_held_position(self, env) -> None:
        service, _, positions, _ = env
        positions.active_employees["pos-1"] = 2
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.deactivate_position(make_ctx(), "pos-1")
        assert exc_info.value.error_code == "HAS_ACTIVE_EMPLOYEES"
        assert positions.rows["pos-1"].is_active is True

    async def test_deactivate_free_position(self, env) -> None:
        service, *_ = env
        result = await service.deactivate_position(make_ctx(), "pos-1")
        assert result.is_active is False
