"""Job posting operations.

Postings have no employee owner: only unrestricted actors (ADMIN/HR) may
change them, while every authenticated role can browse OPEN postings.
"""

from __future__ import annotations

from typing import Any

from hrms.application.dtos.common import Page, PageRequest
from hrms.application.dtos.context import OperationContext
from hrms.application.dtos.job_posting import JobPostingCreate, JobPostingFilters, JobPostingResult
from hrms.application.interfaces.repositories import IJobPostingRepository, IOrgReferenceRepository
from hrms.application.use_cases.pipeline import HR_ROLES, AccessScopedPipeline, reject_nulls
from hrms.domain.enums import AuditAction, GovernedEntity, JobPostingStatus, ReasonCode
from hrms.domain.exceptions import (
    BusinessRuleException,
    DependencyNotFoundException,
    ResourceNotFoundException,
)
from hrms.domain.value_objects import Scope
from hrms.shared.utils.datetime import utc_now

_RESOURCE = GovernedEntity.JOB_POSTING
_PUBLIC_STATUSES = frozenset({JobPostingStatus.OPEN})
NOT_NULL_FIELDS = (
    "title", "description", "department_id", "position_id", "employment_type", "status"
)


class JobPostingService:
    def __init__(
        self,
        pipeline: AccessScopedPipeline,
        posting_repo: IJobPostingRepository,
        org_repo: IOrgReferenceRepository,
    ) -> None:
        self.pipeline = pipeline
        self.posting_repo = posting_repo
        self.org_repo = org_repo

    async def list_postings(
        self,
        ctx: OperationContext,
        filters: JobPostingFilters,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[JobPostingResult]:
        paging = PageRequest.clamped(page, limit)

        async def load(scope: Scope):
            statuses = None if scope.is_unrestricted else _PUBLIC_STATUSES
            items, total = await self.posting_repo.list_page(
                statuses, filters, paging.skip, paging.limit
            )
            return Page(items=items, total=total, page=paging.page, limit=paging.limit)

        return await self.pipeline.read_many(ctx, resource_type=_RESOURCE, load=load)

    async def get_posting(self, ctx: OperationContext, posting_id: str) -> JobPostingResult:
        scope = await self.pipeline.authorize(ctx, _RESOURCE, AuditAction.READ)
        posting = await self.posting_repo.get_by_id(posting_id)
        # Non-public postings are indistinguishable from missing ones outside HR.
        if posting is None or (
            not scope.is_unrestricted and posting.status not in _PUBLIC_STATUSES
        ):
            raise ResourceNotFoundException(_RESOURCE.value, posting_id)
        await self.pipeline.record(ctx, AuditAction.READ, _RESOURCE, posting_id)
        return posting

    async def create_posting(self, ctx: OperationContext, data: JobPostingCreate) -> JobPostingResult:
        async def insert(_scope):
            await self._check_references(data.department_id, data.position_id)
            self._check_salary_range(data.salary_min, data.salary_max)
            self._check_expiry(data.expires_at)
            return await self.posting_repo.create(data)

        return await self.pipeline.create(
            ctx, resource_type=_RESOURCE, insert=insert, allowed_roles=HR_ROLES
        )

    async def update_posting(
        self, ctx: OperationContext, posting_id: str, changes: dict[str, Any]
    ) -> JobPostingResult:
        changes = dict(changes)
        reject_nulls(changes, NOT_NULL_FIELDS)

        async def apply(current: JobPostingResult, _scope) -> JobPostingResult:
            await self._check_references(
                changes.get("department_id") if changes.get("department_id") != current.department_id else None,
                changes.get("position_id") if changes.get("position_id") != current.position_id else None,
            )
            self._check_salary_range(
                changes.get("salary_min", current.salary_min),
                changes.get("salary_max", current.salary_max),
            )
            if "expires_at" in changes:
                self._check_expiry(changes["expires_at"])
            status = changes.get("status")
            if status is JobPostingStatus.CLOSED and current.status is not JobPostingStatus.CLOSED:
                changes["closed_at"] = utc_now()
            elif status is not None and status is not JobPostingStatus.CLOSED:
                changes["closed_at"] = None
            if not changes:
                return current
            return await self.posting_repo.update(posting_id, changes)

        return await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=posting_id,
            load=self.posting_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
        )

    async def delete_posting(self, ctx: OperationContext, posting_id: str) -> JobPostingResult | None:
        """Close a posting that has applications; physically remove one that has none.

        Returns the closed posting, or None after a physical delete.
        """

        async def apply(current: JobPostingResult, _scope) -> JobPostingResult | None:
            if await self.posting_repo.count_applications(posting_id):
                if current.status is JobPostingStatus.CLOSED:
                    return current
                return await self.posting_repo.update(
                    posting_id, {"status": JobPostingStatus.CLOSED, "closed_at": utc_now()}
                )
            await self.posting_repo.delete(posting_id)
            return None

        return await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=posting_id,
            load=self.posting_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
            audit_action=AuditAction.DELETE,
        )

    async def _check_references(self, department_id: str | None, position_id: str | None) -> None:
        if department_id and not await self.org_repo.department_is_active(department_id):
            raise DependencyNotFoundException(
                ReasonCode.DEPARTMENT_NOT_FOUND, "Department not found or inactive", department_id
            )
        if position_id and not await self.org_repo.position_is_active(position_id):
            raise DependencyNotFoundException(
                ReasonCode.POSITION_NOT_FOUND, "Position not found or inactive", position_id
            )

    @staticmethod
    def _check_salary_range(salary_min: float | None, salary_max: float | None) -> None:
        if salary_min is not None and salary_max is not None and salary_min > salary_max:
            raise BusinessRuleException(
                ReasonCode.INVALID_SALARY_RANGE,
                "Minimum salary cannot be greater than maximum salary",
                salary_min=salary_min,
                salary_max=salary_max,
            )

    @staticmethod
    def _check_expiry(expires_at) -> None:
        if expires_at is not None and expires_at <= utc_now():
            raise BusinessRuleException(
                ReasonCode.INVALID_EXPIRATION_DATE, "Expiration date must be in the future"
            )
