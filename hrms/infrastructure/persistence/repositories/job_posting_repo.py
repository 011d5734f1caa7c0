"""Job posting and job application repositories."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.application.dtos.job_posting import (
    JobApplicationCreate,
    JobApplicationFilters,
    JobApplicationResult,
    JobPostingCreate,
    JobPostingFilters,
    JobPostingResult,
)
from hrms.domain.enums import ApplicationStatus, EmploymentType, GovernedEntity, JobPostingStatus
from hrms.infrastructure.persistence.models.job_posting import JobApplication, JobPosting
from hrms.infrastructure.persistence.repositories.base import BaseRepository, plain


def _orm_to_result(p: JobPosting) -> JobPostingResult:
    return JobPostingResult(
        id=p.id,
        title=p.title,
        description=p.description,
        department_id=p.department_id,
        position_id=p.position_id,
        employment_type=EmploymentType(p.employment_type),
        status=JobPostingStatus(p.status),
        location=p.location,
        salary_min=p.salary_min,
        salary_max=p.salary_max,
        expires_at=p.expires_at,
        closed_at=p.closed_at,
        created_by_id=p.created_by_id,
        created_at=p.created_at,
        updated_at=p.updated_at,
    )


def _application_to_result(a: JobApplication) -> JobApplicationResult:
    return JobApplicationResult(
        id=a.id,
        job_posting_id=a.job_posting_id,
        candidate_name=a.candidate_name,
        candidate_email=a.candidate_email,
        status=ApplicationStatus(a.status),
        created_at=a.created_at,
        updated_at=a.updated_at,
    )


class JobPostingRepository(BaseRepository[JobPosting]):
    """Implements IJobPostingRepository."""

    resource_type = GovernedEntity.JOB_POSTING.value

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, JobPosting)

    async def get_by_id(self, posting_id: str) -> JobPostingResult | None:
        row = await self._get_row(posting_id)
        return _orm_to_result(row) if row else None

    async def list_page(
        self,
        statuses: frozenset[JobPostingStatus] | None,
        filters: JobPostingFilters,
        skip: int,
        limit: int,
    ) -> tuple[list[JobPostingResult], int]:
        stmt = select(JobPosting)
        if statuses is not None:
            stmt = stmt.where(JobPosting.status.in_([s.value for s in statuses]))
        if filters.search:
            term = f"%{filters.search}%"
            stmt = stmt.where(
                or_(JobPosting.title.ilike(term), JobPosting.description.ilike(term))
            )
        if filters.status is not None:
            stmt = stmt.where(JobPosting.status == filters.status.value)
        if filters.department_id:
            stmt = stmt.where(JobPosting.department_id == filters.department_id)
        if filters.employment_type is not None:
            stmt = stmt.where(JobPosting.employment_type == filters.employment_type.value)
        rows, total = await self._page(
            stmt.order_by(JobPosting.created_at.desc(), JobPosting.id), skip, limit
        )
        return [_orm_to_result(p) for p in rows], total

    async def create(self, data: JobPostingCreate) -> JobPostingResult:
        row = await self._insert(
            JobPosting(
                title=data.title,
                description=data.description,
                department_id=data.department_id,
                position_id=data.position_id,
                employment_type=plain(data.employment_type),
                status=plain(data.status),
                location=data.location,
                salary_min=data.salary_min,
                salary_max=data.salary_max,
                expires_at=data.expires_at,
                created_by_id=data.created_by_id,
            )
        )
        return _orm_to_result(row)

    async def update(self, posting_id: str, changes: dict[str, Any]) -> JobPostingResult:
        return _orm_to_result(await self._update_row(posting_id, changes))

    async def delete(self, posting_id: str) -> None:
        await self._delete_row(posting_id)

    async def count_applications(self, posting_id: str) -> int:
        count = await self.db.scalar(
            select(func.count(JobApplication.id)).where(JobApplication.job_posting_id == posting_id)
        )
        return count or 0


class JobApplicationRepository(BaseRepository[JobApplication]):
    """Implements IJobApplicationRepository."""

    resource_type = "job_application"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, JobApplication)

    async def get_by_id(self, application_id: str) -> JobApplicationResult | None:
        row = await self._get_row(application_id)
        return _application_to_result(row) if row else None

    async def update_status(
        self, application_id: str, status: ApplicationStatus
    ) -> JobApplicationResult:
        row = await self._update_row(application_id, {"status": status})
        return _application_to_result(row)

    async def list_page(
        self, filters: JobApplicationFilters, skip: int, limit: int
    ) -> tuple[list[JobApplicationResult], int]:
        stmt = select(JobApplication)
        if filters.job_posting_id:
            stmt = stmt.where(JobApplication.job_posting_id == filters.job_posting_id)
        if filters.status is not None:
            stmt = stmt.where(JobApplication.status == filters.status.value)
        if filters.search:
            term = f"%{filters.search}%"
            stmt = stmt.where(
                or_(
                    JobApplication.candidate_name.ilike(term),
                    JobApplication.candidate_email.ilike(term),
                )
            )
        rows, total = await self._page(
            stmt.order_by(JobApplication.created_at.desc(), JobApplication.id), skip, limit
        )
        return [_application_to_result(a) for a in rows], total

    async def find_for_candidate(
        self, job_posting_id: str, candidate_email: str
    ) -> JobApplicationResult | None:
        result = await self.db.execute(
            select(JobApplication).where(
                JobApplication.job_posting_id == job_posting_id,
                func.lower(JobApplication.candidate_email) == candidate_email.lower(),
            )
        )
        row = result.scalars().first()
        return _application_to_result(row) if row else None

    async def create(self, data: JobApplicationCreate) -> JobApplicationResult:
        row = await self._insert(
            JobApplication(
                job_posting_id=data.job_posting_id,
                candidate_name=data.candidate_name,
                candidate_email=data.candidate_email,
                status=plain(data.status),
            )
        )
        return _application_to_result(row)
