"""Department and position management.

Both are reference data without an employee owner: ADMIN/HR change them,
MANAGER may browse them as well. Deleting deactivates, and only once no
active employee (or, for departments, active position) depends on the row.
"""

from __future__ import annotations

from typing import Any

from hrms.application.dtos.common import Page, PageRequest
from hrms.application.dtos.context import OperationContext
from hrms.application.dtos.org import (
    DepartmentCreate,
    DepartmentFilters,
    DepartmentResult,
    PositionCreate,
    PositionFilters,
    PositionResult,
)
from hrms.application.interfaces.repositories import IDepartmentRepository, IPositionRepository
from hrms.application.use_cases.pipeline import (
    HR_ROLES,
    MANAGING_ROLES,
    AccessScopedPipeline,
    reject_nulls,
)
from hrms.domain.enums import AuditAction, ReasonCode
from hrms.domain.exceptions import (
    BusinessRuleException,
    DependencyNotFoundException,
    ResourceNotFoundException,
)

DEPARTMENT = "department"
POSITION = "position"


class OrgStructureService:
    def __init__(
        self,
        pipeline: AccessScopedPipeline,
        department_repo: IDepartmentRepository,
        position_repo: IPositionRepository,
    ) -> None:
        self.pipeline = pipeline
        self.department_repo = department_repo
        self.position_repo = position_repo

    # ---- departments ----

    async def list_departments(
        self,
        ctx: OperationContext,
        filters: DepartmentFilters,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[DepartmentResult]:
        paging = PageRequest.clamped(page, limit)

        async def load(_scope):
            items, total = await self.department_repo.list_page(filters, paging.skip, paging.limit)
            return Page(items=items, total=total, page=paging.page, limit=paging.limit)

        return await self.pipeline.read_many(
            ctx, resource_type=DEPARTMENT, load=load, allowed_roles=MANAGING_ROLES
        )

    async def get_department(self, ctx: OperationContext, department_id: str) -> DepartmentResult:
        return await self._read_reference(
            ctx, DEPARTMENT, department_id, self.department_repo.get_by_id
        )

    async def create_department(
        self, ctx: OperationContext, data: DepartmentCreate
    ) -> DepartmentResult:
        async def insert(_scope) -> DepartmentResult:
            await self._check_department_name(data.name)
            return await self.department_repo.create(data)

        return await self.pipeline.create(
            ctx, resource_type=DEPARTMENT, insert=insert, allowed_roles=HR_ROLES
        )

    async def update_department(
        self, ctx: OperationContext, department_id: str, changes: dict[str, Any]
    ) -> DepartmentResult:
        changes = dict(changes)
        reject_nulls(changes, ("name", "is_active"))

        async def apply(current: DepartmentResult, _scope) -> DepartmentResult:
            name = changes.get("name")
            if name and name.strip().lower() != current.name.lower():
                await self._check_department_name(name)
            if changes.get("is_active") is False and current.is_active:
                await self._check_department_unused(department_id)
            if not changes:
                return current
            return await self.department_repo.update(department_id, changes)

        return await self.pipeline.mutate(
            ctx,
            resource_type=DEPARTMENT,
            resource_id=department_id,
            load=self.department_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
        )

    async def deactivate_department(
        self, ctx: OperationContext, department_id: str
    ) -> DepartmentResult:
        async def apply(current: DepartmentResult, _scope) -> DepartmentResult:
            if not current.is_active:
                raise BusinessRuleException(
                    ReasonCode.ALREADY_INACTIVE, "Department is already inactive"
                )
            await self._check_department_unused(department_id)
            return await self.department_repo.update(department_id, {"is_active": False})

        return await self.pipeline.mutate(
            ctx,
            resource_type=DEPARTMENT,
            resource_id=department_id,
            load=self.department_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
            audit_action=AuditAction.DELETE,
        )

    # ---- positions ----

    async def list_positions(
        self,
        ctx: OperationContext,
        filters: PositionFilters,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[PositionResult]:
        paging = PageRequest.clamped(page, limit)

        async def load(_scope):
            items, total = await self.position_repo.list_page(filters, paging.skip, paging.limit)
            return Page(items=items, total=total, page=paging.page, limit=paging.limit)

        return await self.pipeline.read_many(
            ctx, resource_type=POSITION, load=load, allowed_roles=MANAGING_ROLES
        )

    async def get_position(self, ctx: OperationContext, position_id: str) -> PositionResult:
        return await self._read_reference(ctx, POSITION, position_id, self.position_repo.get_by_id)

    async def create_position(self, ctx: OperationContext, data: PositionCreate) -> PositionResult:
        async def insert(_scope) -> PositionResult:
            if data.department_id:
                await self._require_active_department(data.department_id)
            return await self.position_repo.create(data)

        return await self.pipeline.create(
            ctx, resource_type=POSITION, insert=insert, allowed_roles=HR_ROLES
        )

    async def update_position(
        self, ctx: OperationContext, position_id: str, changes: dict[str, Any]
    ) -> PositionResult:
        changes = dict(changes)
        reject_nulls(changes, ("title", "is_active"))

        async def apply(current: PositionResult, _scope) -> PositionResult:
            department_id = changes.get("department_id")
            if department_id and department_id != current.department_id:
                await self._require_active_department(department_id)
            if changes.get("is_active") is False and current.is_active:
                await self._check_position_unused(position_id)
            if not changes:
                return current
            return await self.position_repo.update(position_id, changes)

        return await self.pipeline.mutate(
            ctx,
            resource_type=POSITION,
            resource_id=position_id,
            load=self.position_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
        )

    async def deactivate_position(self, ctx: OperationContext, position_id: str) -> PositionResult:
        async def apply(current: PositionResult, _scope) -> PositionResult:
            if not current.is_active:
                raise BusinessRuleException(ReasonCode.ALREADY_INACTIVE, "Position is already inactive")
            await self._check_position_unused(position_id)
            return await self.position_repo.update(position_id, {"is_active": False})

        return await self.pipeline.mutate(
            ctx,
            resource_type=POSITION,
            resource_id=position_id,
            load=self.position_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
            audit_action=AuditAction.DELETE,
        )

    # ---- checks ----

    async def _read_reference(self, ctx: OperationContext, resource_type: str, resource_id: str, load):
        # Owner-less rows: the role gate is the whole access check.
        await self.pipeline.authorize(ctx, resource_type, AuditAction.READ, MANAGING_ROLES)
        entity = await load(resource_id)
        if entity is None:
            raise ResourceNotFoundException(resource_type, resource_id)
        await self.pipeline.record(ctx, AuditAction.READ, resource_type, resource_id)
        return entity

    async def _check_department_name(self, name: str) -> None:
        existing = await self.department_repo.get_by_name(name)
        if existing is not None:
            raise BusinessRuleException(
                ReasonCode.DUPLICATE_DEPARTMENT_NAME,
                "Department name already exists",
                conflicting_ids=[existing.id],
            )

    async def _check_department_unused(self, department_id: str) -> None:
        employees = await self.department_repo.count_active_employees(department_id)
        if employees:
            raise BusinessRuleException(
                ReasonCode.HAS_ACTIVE_EMPLOYEES,
                f"Cannot deactivate department with {employees} active employee(s). Reassign employees first.",
                employee_count=employees,
            )
        positions = await self.department_repo.count_active_positions(department_id)
        if positions:
            raise BusinessRuleException(
                ReasonCode.HAS_ACTIVE_POSITIONS,
                f"Cannot deactivate department with {positions} active position(s). Reassign or deactivate positions first.",
                position_count=positions,
            )

    async def _check_position_unused(self, position_id: str) -> None:
        employees = await self.position_repo.count_active_employees(position_id)
        if employees:
            raise BusinessRuleException(
                ReasonCode.HAS_ACTIVE_EMPLOYEES,
                f"Cannot deactivate position held by {employees} active employee(s).",
                employee_count=employees,
            )

    async def _require_active_department(self, department_id: str) -> None:
        department = await self.department_repo.get_by_id(department_id)
        if department is None or not department.is_active:
            raise DependencyNotFoundException(
                ReasonCode.DEPARTMENT_NOT_FOUND, "Department not found or inactive", department_id
            )
