"""Org reference repositories: departments, positions, and user accounts."""

from typing import Any

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.application.dtos.org import (
    DepartmentCreate,
    DepartmentFilters,
    DepartmentResult,
    PositionCreate,
    PositionFilters,
    PositionResult,
)
from hrms.domain.enums import EmployeeStatus, ReasonCode
from hrms.domain.exceptions import BusinessRuleException
from hrms.infrastructure.persistence.models.department import Department, Position
from hrms.infrastructure.persistence.models.employee import Employee
from hrms.infrastructure.persistence.models.user_account import UserAccount
from hrms.infrastructure.persistence.repositories.base import BaseRepository, violates

DEPARTMENT_NAME_CONSTRAINT = "uq_department_name"


def _department_to_result(d: Department) -> DepartmentResult:
    return DepartmentResult(
        id=d.id,
        name=d.name,
        code=d.code,
        description=d.description,
        is_active=d.is_active,
        created_at=d.created_at,
        updated_at=d.updated_at,
    )


def _position_to_result(p: Position) -> PositionResult:
    return PositionResult(
        id=p.id,
        title=p.title,
        department_id=p.department_id,
        is_active=p.is_active,
        created_at=p.created_at,
        updated_at=p.updated_at,
    )


def _count_active_employees(*criteria: Any):
    return select(func.count(Employee.id)).where(
        *criteria, Employee.status != EmployeeStatus.TERMINATED.value
    )


class OrgReferenceRepository:
    """Implements IOrgReferenceRepository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def department_is_active(self, department_id: str) -> bool:
        result = await self.db.execute(
            select(Department.is_active).where(Department.id == department_id)
        )
        return bool(result.scalar_one_or_none())

    async def position_is_active(self, position_id: str) -> bool:
        result = await self.db.execute(select(Position.is_active).where(Position.id == position_id))
        return bool(result.scalar_one_or_none())


class DepartmentRepository(BaseRepository[Department]):
    """Implements IDepartmentRepository."""

    resource_type = "department"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Department)

    async def get_by_id(self, department_id: str) -> DepartmentResult | None:
        row = await self._get_row(department_id)
        return _department_to_result(row) if row else None

    async def get_by_name(self, name: str) -> DepartmentResult | None:
        result = await self.db.execute(
            select(Department).where(func.lower(Department.name) == name.strip().lower())
        )
        row = result.scalars().first()
        return _department_to_result(row) if row else None

    async def list_page(
        self, filters: DepartmentFilters, skip: int, limit: int
    ) -> tuple[list[DepartmentResult], int]:
        stmt = select(Department)
        if filters.search:
            term = f"%{filters.search}%"
            stmt = stmt.where(or_(Department.name.ilike(term), Department.code.ilike(term)))
        if filters.is_active is not None:
            stmt = stmt.where(Department.is_active.is_(filters.is_active))
        rows, total = await self._page(stmt.order_by(Department.name, Department.id), skip, limit)
        return [_department_to_result(d) for d in rows], total

    async def create(self, data: DepartmentCreate) -> DepartmentResult:
        row = await self._insert(
            Department(name=data.name, code=data.code, description=data.description)
        )
        return _department_to_result(row)

    async def update(self, department_id: str, changes: dict[str, Any]) -> DepartmentResult:
        return _department_to_result(await self._update_row(department_id, changes))

    async def count_active_employees(self, department_id: str) -> int:
        count = await self.db.scalar(_count_active_employees(Employee.department_id == department_id))
        return count or 0

    async def count_active_positions(self, department_id: str) -> int:
        count = await self.db.scalar(
            select(func.count(Position.id)).where(
                Position.department_id == department_id, Position.is_active.is_(True)
            )
        )
        return count or 0

    def _translate_integrity_error(self, error: IntegrityError) -> None:
        if violates(error, DEPARTMENT_NAME_CONSTRAINT):
            raise BusinessRuleException(
                ReasonCode.DUPLICATE_DEPARTMENT_NAME, "Department name already exists"
            ) from error


class PositionRepository(BaseRepository[Position]):
    """Implements IPositionRepository."""

    resource_type = "position"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Position)

    async def get_by_id(self, position_id: str) -> PositionResult | None:
        row = await self._get_row(position_id)
        return _position_to_result(row) if row else None

    async def list_page(
        self, filters: PositionFilters, skip: int, limit: int
    ) -> tuple[list[PositionResult], int]:
        stmt = select(Position)
        if filters.department_id:
            stmt = stmt.where(Position.department_id == filters.department_id)
        if filters.is_active is not None:
            stmt = stmt.where(Position.is_active.is_(filters.is_active))
        rows, total = await self._page(stmt.order_by(Position.title, Position.id), skip, limit)
        return [_position_to_result(p) for p in rows], total

    async def create(self, data: PositionCreate) -> PositionResult:
        row = await self._insert(Position(title=data.title, department_id=data.department_id))
        return _position_to_result(row)

    async def update(self, position_id: str, changes: dict[str, Any]) -> PositionResult:
        return _position_to_result(await self._update_row(position_id, changes))

    async def count_active_employees(self, position_id: str) -> int:
        count = await self.db.scalar(_count_active_employees(Employee.position_id == position_id))
        return count or 0


class UserAccountRepository:
    """Implements IUserAccountRepository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def deactivate_for_employee(self, employee_id: str) -> int:
        result = await self.db.execute(
            update(UserAccount)
            .where(UserAccount.employee_id == employee_id, UserAccount.is_active.is_(True))
            .values(is_active=False)
        )
        return result.rowcount or 0
