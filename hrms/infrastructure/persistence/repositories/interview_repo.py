"""Interview repository. Implements IInterviewRepository."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.application.dtos.interview import InterviewCreate, InterviewFilters, InterviewResult
from hrms.domain.enums import GovernedEntity, InterviewStatus, InterviewType
from hrms.infrastructure.persistence.models.interview import Interview
from hrms.infrastructure.persistence.repositories.base import BaseRepository, plain

_LIVE = (InterviewStatus.SCHEDULED.value, InterviewStatus.IN_PROGRESS.value)


def _orm_to_result(i: Interview) -> InterviewResult:
    return InterviewResult(
        id=i.id,
        application_id=i.application_id,
        interview_type=InterviewType(i.interview_type),
        status=InterviewStatus(i.status),
        scheduled_at=i.scheduled_at,
        duration_minutes=i.duration_minutes,
        interviewer_ids=tuple(i.interviewer_ids or ()),
        location=i.location,
        meeting_link=i.meeting_link,
        feedback=i.feedback,
        rating=i.rating,
        notes=i.notes,
        created_by_id=i.created_by_id,
        created_at=i.created_at,
        updated_at=i.updated_at,
    )


class InterviewRepository(BaseRepository[Interview]):
    resource_type = GovernedEntity.INTERVIEW.value

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Interview)

    async def get_by_id(self, interview_id: str) -> InterviewResult | None:
        row = await self._get_row(interview_id)
        return _orm_to_result(row) if row else None

    async def list_page(
        self, filters: InterviewFilters, skip: int, limit: int
    ) -> tuple[list[InterviewResult], int]:
        stmt = select(Interview)
        if filters.application_id:
            stmt = stmt.where(Interview.application_id == filters.application_id)
        if filters.status is not None:
            stmt = stmt.where(Interview.status == filters.status.value)
        if filters.interview_type is not None:
            stmt = stmt.where(Interview.interview_type == filters.interview_type.value)
        if filters.interviewer_id:
            stmt = stmt.where(Interview.interviewer_ids.contains([filters.interviewer_id]))
        if filters.scheduled_from is not None:
            stmt = stmt.where(Interview.scheduled_at >= filters.scheduled_from)
        if filters.scheduled_to is not None:
            stmt = stmt.where(Interview.scheduled_at <= filters.scheduled_to)
        rows, total = await self._page(
            stmt.order_by(Interview.scheduled_at, Interview.id), skip, limit
        )
        return [_orm_to_result(i) for i in rows], total

    async def create(self, data: InterviewCreate) -> InterviewResult:
        row = await self._insert(
            Interview(
                application_id=data.application_id,
                interview_type=plain(data.interview_type),
                status=InterviewStatus.SCHEDULED.value,
                scheduled_at=data.scheduled_at,
                duration_minutes=data.duration_minutes,
                interviewer_ids=list(data.interviewer_ids),
                location=data.location,
                meeting_link=data.meeting_link,
                notes=data.notes,
                created_by_id=data.created_by_id,
            )
        )
        return _orm_to_result(row)

    async def update(self, interview_id: str, changes: dict[str, Any]) -> InterviewResult:
        if "interviewer_ids" in changes:
            changes = {**changes, "interviewer_ids": list(changes["interviewer_ids"])}
        return _orm_to_result(await self._update_row(interview_id, changes))

    async def find_interviewer_conflicts(
        self,
        interviewer_ids: Iterable[str],
        window_start: datetime,
        window_end: datetime,
        exclude_id: str | None = None,
    ) -> list[InterviewResult]:
        ids = list(interviewer_ids)
        if not ids:
            return []
        stmt = select(Interview).where(
            Interview.status.in_(_LIVE),
            Interview.interviewer_ids.overlap(ids),
            Interview.scheduled_at >= window_start,
            Interview.scheduled_at <= window_end,
        )
        if exclude_id:
            stmt = stmt.where(Interview.id != exclude_id)
        result = await self.db.execute(stmt)
        return [_orm_to_result(i) for i in result.scalars().all()]

    async def count_active_for_application(
        self, application_id: str, exclude_id: str | None = None
    ) -> int:
        stmt = select(func.count(Interview.id)).where(
            Interview.application_id == application_id, Interview.status.in_(_LIVE)
        )
        if exclude_id:
            stmt = stmt.where(Interview.id != exclude_id)
        return await self.db.scalar(stmt) or 0
