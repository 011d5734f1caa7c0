"""Employee operations: scoped reads, validated create/update, soft termination."""

from __future__ import annotations

from typing import Any

from hrms.application.dtos.common import Page, PageRequest
from hrms.application.dtos.context import OperationContext
from hrms.application.dtos.employee import EmployeeCreate, EmployeeFilters, EmployeeResult
from hrms.application.interfaces.repositories import (
    IEmployeeRepository,
    IOrgReferenceRepository,
    IUserAccountRepository,
)
from hrms.application.use_cases.pipeline import (
    HR_ROLES,
    MANAGING_ROLES,
    AccessScopedPipeline,
    reject_nulls,
)
from hrms.domain.enums import AuditAction, EmployeeStatus, GovernedEntity, ReasonCode
from hrms.domain.exceptions import BusinessRuleException, DependencyNotFoundException
from hrms.shared.utils.datetime import utc_now

_RESOURCE = GovernedEntity.EMPLOYEE
NOT_NULL_FIELDS = (
    "employee_code",
    "first_name",
    "last_name",
    "email",
    "department_id",
    "position_id",
    "employment_type",
    "status",
)


class EmployeeService:
    """Employee records. Deleting an employee terminates it; rows are never removed."""

    def __init__(
        self,
        pipeline: AccessScopedPipeline,
        employee_repo: IEmployeeRepository,
        org_repo: IOrgReferenceRepository,
        user_repo: IUserAccountRepository | None = None,
    ) -> None:
        self.pipeline = pipeline
        self.employee_repo = employee_repo
        self.org_repo = org_repo
        self.user_repo = user_repo

    async def list_employees(
        self,
        ctx: OperationContext,
        filters: EmployeeFilters,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[EmployeeResult]:
        paging = PageRequest.clamped(page, limit)

        async def load(scope):
            items, total = await self.employee_repo.list_page(
                scope.owner_filter(), filters, paging.skip, paging.limit
            )
            return Page(items=items, total=total, page=paging.page, limit=paging.limit)

        return await self.pipeline.read_many(
            ctx, resource_type=_RESOURCE, load=load, allowed_roles=MANAGING_ROLES
        )

    async def get_employee(self, ctx: OperationContext, employee_id: str) -> EmployeeResult:
        return await self.pipeline.read_one(
            ctx,
            resource_type=_RESOURCE,
            resource_id=employee_id,
            load=self.employee_repo.get_by_id,
        )

    async def create_employee(self, ctx: OperationContext, data: EmployeeCreate) -> EmployeeResult:
        async def insert(_scope):
            await self._check_unique(data.employee_code, data.email)
            await self._check_department(data.department_id)
            await self._check_position(data.position_id)
            if data.manager_id:
                await self._check_manager(data.manager_id)
            return await self.employee_repo.create(data)

        created = await self.pipeline.create(
            ctx, resource_type=_RESOURCE, insert=insert, allowed_roles=HR_ROLES
        )
        await self.pipeline.publish(
            "employee.created",
            {"employee_id": created.id, "email": created.email, "name": created.full_name},
        )
        return created

    async def update_employee(
        self, ctx: OperationContext, employee_id: str, changes: dict[str, Any]
    ) -> EmployeeResult:
        changes = dict(changes)
        reject_nulls(changes, NOT_NULL_FIELDS)

        async def apply(current: EmployeeResult, _scope) -> EmployeeResult:
            code = changes.get("employee_code")
            email = changes.get("email")
            await self._check_unique(
                code if code and code != current.employee_code else None,
                email if email and email.lower() != current.email.lower() else None,
            )
            if changes.get("department_id") and changes["department_id"] != current.department_id:
                await self._check_department(changes["department_id"])
            if changes.get("position_id") and changes["position_id"] != current.position_id:
                await self._check_position(changes["position_id"])
            manager_id = changes.get("manager_id")
            if manager_id:
                if manager_id == employee_id:
                    raise BusinessRuleException(
                        ReasonCode.INVALID_MANAGER, "Employee cannot be their own manager"
                    )
                if manager_id != current.manager_id:
                    await self._check_manager(manager_id)
            if (
                changes.get("status") is EmployeeStatus.TERMINATED
                and not changes.get("termination_date")
                and current.termination_date is None
            ):
                changes["termination_date"] = utc_now().date()
            if not changes:
                return current
            return await self.employee_repo.update(employee_id, changes)

        return await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=employee_id,
            load=self.employee_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
        )

    async def terminate_employee(self, ctx: OperationContext, employee_id: str) -> EmployeeResult:
        """Soft delete: status TERMINATED, termination date today, linked login disabled."""

        async def apply(current: EmployeeResult, _scope) -> EmployeeResult:
            if current.status is EmployeeStatus.TERMINATED:
                raise BusinessRuleException(
                    ReasonCode.ALREADY_TERMINATED, "Employee is already terminated"
                )
            subordinates = await self.employee_repo.count_active_subordinates(employee_id)
            if subordinates:
                raise BusinessRuleException(
                    ReasonCode.HAS_ACTIVE_SUBORDINATES,
                    "Cannot terminate employee with active subordinates. Reassign subordinates first.",
                    subordinate_count=subordinates,
                )
            terminated = await self.employee_repo.update(
                employee_id,
                {"status": EmployeeStatus.TERMINATED, "termination_date": utc_now().date()},
            )
            if self.user_repo is not None:
                await self.user_repo.deactivate_for_employee(employee_id)
            return terminated

        return await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=employee_id,
            load=self.employee_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
            audit_action=AuditAction.DELETE,
        )

    # ---- reference checks ----

    async def _check_unique(self, employee_code: str | None, email: str | None) -> None:
        if employee_code and await self.employee_repo.get_by_code(employee_code):
            raise BusinessRuleException(
                ReasonCode.DUPLICATE_EMPLOYEE_ID,
                "Employee ID already exists",
                employee_code=employee_code,
            )
        if email and await self.employee_repo.get_by_email(email):
            raise BusinessRuleException(
                ReasonCode.DUPLICATE_EMAIL, "Email already exists", email=email
            )

    async def _check_department(self, department_id: str) -> None:
        if not await self.org_repo.department_is_active(department_id):
            raise DependencyNotFoundException(
                ReasonCode.DEPARTMENT_NOT_FOUND,
                "Department not found or inactive",
                department_id,
            )

    async def _check_position(self, position_id: str) -> None:
        if not await self.org_repo.position_is_active(position_id):
            raise DependencyNotFoundException(
                ReasonCode.POSITION_NOT_FOUND, "Position not found or inactive", position_id
            )

    async def _check_manager(self, manager_id: str) -> None:
        manager = await self.employee_repo.get_by_id(manager_id)
        if manager is None or not manager.is_active:
            raise DependencyNotFoundException(
                ReasonCode.MANAGER_NOT_FOUND, "Manager not found or inactive", manager_id
            )
