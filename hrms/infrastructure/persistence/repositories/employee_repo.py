"""Employee repository. Implements IEmployeeRepository (and the hierarchy lookup)."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.application.dtos.employee import EmployeeCreate, EmployeeFilters, EmployeeResult
from hrms.domain.enums import EmployeeStatus, EmploymentType, GovernedEntity, ReasonCode
from hrms.domain.exceptions import BusinessRuleException
from hrms.infrastructure.persistence.models.employee import Employee
from hrms.infrastructure.persistence.repositories.base import BaseRepository, plain, violates


def _orm_to_result(e: Employee) -> EmployeeResult:
    return EmployeeResult(
        id=e.id,
        employee_code=e.employee_code,
        first_name=e.first_name,
        last_name=e.last_name,
        email=e.email,
        phone=e.phone,
        department_id=e.department_id,
        position_id=e.position_id,
        manager_id=e.manager_id,
        status=EmployeeStatus(e.status),
        employment_type=EmploymentType(e.employment_type),
        hire_date=e.hire_date,
        termination_date=e.termination_date,
        salary=e.salary,
        created_at=e.created_at,
        updated_at=e.updated_at,
    )


class EmployeeRepository(BaseRepository[Employee]):
    resource_type = GovernedEntity.EMPLOYEE.value

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Employee)

    async def get_by_id(self, employee_id: str) -> EmployeeResult | None:
        row = await self._get_row(employee_id)
        return _orm_to_result(row) if row else None

    async def get_by_ids(self, employee_ids: Iterable[str]) -> list[EmployeeResult]:
        ids = list(employee_ids)
        if not ids:
            return []
        result = await self.db.execute(select(Employee).where(Employee.id.in_(ids)))
        return [_orm_to_result(e) for e in result.scalars().all()]

    async def get_by_code(self, employee_code: str) -> EmployeeResult | None:
        result = await self.db.execute(
            select(Employee).where(Employee.employee_code == employee_code)
        )
        row = result.scalar_one_or_none()
        return _orm_to_result(row) if row else None

    async def get_by_email(self, email: str) -> EmployeeResult | None:
        result = await self.db.execute(
            select(Employee).where(func.lower(Employee.email) == email.lower())
        )
        row = result.scalar_one_or_none()
        return _orm_to_result(row) if row else None

    async def get_direct_report_ids(self, manager_id: str) -> set[str]:
        result = await self.db.execute(select(Employee.id).where(Employee.manager_id == manager_id))
        return set(result.scalars().all())

    async def count_active_subordinates(self, manager_id: str) -> int:
        count = await self.db.scalar(
            select(func.count(Employee.id)).where(
                Employee.manager_id == manager_id,
                Employee.status != EmployeeStatus.TERMINATED.value,
            )
        )
        return count or 0

    async def list_page(
        self,
        owner_ids: frozenset[str] | None,
        filters: EmployeeFilters,
        skip: int,
        limit: int,
    ) -> tuple[list[EmployeeResult], int]:
        stmt = select(Employee)
        if owner_ids is not None:
            stmt = stmt.where(Employee.id.in_(owner_ids))
        if filters.search:
            term = f"%{filters.search}%"
            stmt = stmt.where(
                or_(
                    Employee.first_name.ilike(term),
                    Employee.last_name.ilike(term),
                    Employee.email.ilike(term),
                    Employee.employee_code.ilike(term),
                )
            )
        if filters.status is not None:
            stmt = stmt.where(Employee.status == filters.status.value)
        if filters.department_id:
            stmt = stmt.where(Employee.department_id == filters.department_id)
        if filters.manager_id:
            stmt = stmt.where(Employee.manager_id == filters.manager_id)
        if filters.employment_type is not None:
            stmt = stmt.where(Employee.employment_type == filters.employment_type.value)
        rows, total = await self._page(
            stmt.order_by(Employee.last_name, Employee.first_name, Employee.id), skip, limit
        )
        return [_orm_to_result(e) for e in rows], total

    async def create(self, data: EmployeeCreate) -> EmployeeResult:
        row = await self._insert(
            Employee(
                employee_code=data.employee_code,
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
                phone=data.phone,
                department_id=data.department_id,
                position_id=data.position_id,
                manager_id=data.manager_id,
                status=plain(data.status),
                employment_type=plain(data.employment_type),
                hire_date=data.hire_date,
                salary=data.salary,
            )
        )
        return _orm_to_result(row)

    async def update(self, employee_id: str, changes: dict[str, Any]) -> EmployeeResult:
        return _orm_to_result(await self._update_row(employee_id, changes))

    def _translate_integrity_error(self, error: IntegrityError) -> None:
        if violates(error, "employee_code"):
            raise BusinessRuleException(
                ReasonCode.DUPLICATE_EMPLOYEE_ID, "Employee ID already exists"
            ) from error
        if violates(error, "email"):
            raise BusinessRuleException(ReasonCode.DUPLICATE_EMAIL, "Email already exists") from error
