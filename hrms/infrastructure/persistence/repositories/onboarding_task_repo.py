"""Onboarding task repository. Implements IOnboardingTaskRepository."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.application.dtos.onboarding_task import (
    OnboardingTaskCreate,
    OnboardingTaskFilters,
    OnboardingTaskResult,
)
from hrms.domain.enums import GovernedEntity, OnboardingTaskStatus, ReasonCode
from hrms.domain.exceptions import BusinessRuleException
from hrms.infrastructure.persistence.models.onboarding_task import (
    OPEN_DUPLICATE_INDEX,
    OnboardingTask,
)
from hrms.infrastructure.persistence.repositories.base import BaseRepository, violates

_OPEN = (OnboardingTaskStatus.PENDING.value, OnboardingTaskStatus.IN_PROGRESS.value)


def _orm_to_result(t: OnboardingTask) -> OnboardingTaskResult:
    return OnboardingTaskResult(
        id=t.id,
        employee_id=t.employee_id,
        title=t.title,
        status=OnboardingTaskStatus(t.status),
        due_date=t.due_date,
        assignee_id=t.assignee_id,
        description=t.description,
        category=t.category,
        sort_order=t.sort_order,
        notes=t.notes,
        completed_at=t.completed_at,
        created_at=t.created_at,
        updated_at=t.updated_at,
    )


class OnboardingTaskRepository(BaseRepository[OnboardingTask]):
    resource_type = GovernedEntity.ONBOARDING_TASK.value

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, OnboardingTask)

    async def get_by_id(self, task_id: str) -> OnboardingTaskResult | None:
        row = await self._get_row(task_id)
        return _orm_to_result(row) if row else None

    async def get_by_ids(self, task_ids: Iterable[str]) -> list[OnboardingTaskResult]:
        ids = list(task_ids)
        if not ids:
            return []
        result = await self.db.execute(select(OnboardingTask).where(OnboardingTask.id.in_(ids)))
        return [_orm_to_result(t) for t in result.scalars().all()]

    async def list_page(
        self,
        owner_ids: frozenset[str] | None,
        filters: OnboardingTaskFilters,
        skip: int,
        limit: int,
        now: datetime,
        assignee_id: str | None = None,
    ) -> tuple[list[OnboardingTaskResult], int]:
        stmt = select(OnboardingTask)
        if owner_ids is not None:
            visible = OnboardingTask.employee_id.in_(owner_ids)
            if assignee_id:
                visible = or_(visible, OnboardingTask.assignee_id == assignee_id)
            stmt = stmt.where(visible)
        if filters.employee_id:
            stmt = stmt.where(OnboardingTask.employee_id == filters.employee_id)
        if filters.assignee_id:
            stmt = stmt.where(OnboardingTask.assignee_id == filters.assignee_id)
        if filters.status is not None:
            stmt = stmt.where(OnboardingTask.status == filters.status.value)
        if filters.category:
            stmt = stmt.where(OnboardingTask.category == filters.category)
        if filters.overdue:
            stmt = stmt.where(OnboardingTask.due_date < now, OnboardingTask.status.in_(_OPEN))
        rows, total = await self._page(
            stmt.order_by(
                OnboardingTask.due_date, OnboardingTask.sort_order, OnboardingTask.created_at
            ),
            skip,
            limit,
        )
        return [_orm_to_result(t) for t in rows], total

    async def list_for_employee(self, employee_id: str) -> list[OnboardingTaskResult]:
        result = await self.db.execute(
            select(OnboardingTask)
            .where(OnboardingTask.employee_id == employee_id)
            .order_by(OnboardingTask.updated_at.desc())
        )
        return [_orm_to_result(t) for t in result.scalars().all()]

    async def create(self, data: OnboardingTaskCreate) -> OnboardingTaskResult:
        row = await self._insert(
            OnboardingTask(
                employee_id=data.employee_id,
                assignee_id=data.assignee_id,
                title=data.title,
                description=data.description,
                category=data.category,
                status=OnboardingTaskStatus.PENDING.value,
                due_date=data.due_date,
                sort_order=data.sort_order,
                notes=data.notes,
            )
        )
        return _orm_to_result(row)

    async def update(self, task_id: str, changes: dict[str, Any]) -> OnboardingTaskResult:
        return _orm_to_result(await self._update_row(task_id, changes))

    async def find_open_duplicate(
        self, employee_id: str, title: str, exclude_id: str | None = None
    ) -> OnboardingTaskResult | None:
        stmt = select(OnboardingTask).where(
            OnboardingTask.employee_id == employee_id,
            func.lower(OnboardingTask.title) == title.lower(),
            OnboardingTask.status.in_(_OPEN),
        )
        if exclude_id:
            stmt = stmt.where(OnboardingTask.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        row = result.scalar_one_or_none()
        return _orm_to_result(row) if row else None

    def _translate_integrity_error(self, error: IntegrityError) -> None:
        if violates(error, OPEN_DUPLICATE_INDEX):
            raise BusinessRuleException(
                ReasonCode.DUPLICATE_TASK,
                "An open task with this title already exists for the employee",
            ) from error
