"""Job application operations: intake against open postings, review moves, scoped reads."""

from __future__ import annotations

import logging
from dataclasses import replace

from hrms.application.dtos.common import Page, PageRequest
from hrms.application.dtos.context import OperationContext
from hrms.application.dtos.job_posting import (
    JobApplicationCreate,
    JobApplicationFilters,
    JobApplicationResult,
)
from hrms.application.interfaces.repositories import (
    IJobApplicationRepository,
    IJobPostingRepository,
)
from hrms.application.services.workflow_state_machine import WorkflowStateMachine
from hrms.application.use_cases.pipeline import HR_ROLES, AccessScopedPipeline
from hrms.domain.enums import ApplicationStatus, JobPostingStatus, ReasonCode
from hrms.domain.exceptions import BusinessRuleException, DependencyNotFoundException
from hrms.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

RESOURCE = "job_application"


class JobApplicationService:
    """Candidate applications, handled by ADMIN/HR.

    New applications start APPLIED. Review moves follow the application
    table; scheduling an interview and interview outcomes move the status
    from the interview side.
    """

    def __init__(
        self,
        pipeline: AccessScopedPipeline,
        application_repo: IJobApplicationRepository,
        posting_repo: IJobPostingRepository,
        workflow: WorkflowStateMachine,
    ) -> None:
        self.pipeline = pipeline
        self.application_repo = application_repo
        self.posting_repo = posting_repo
        self.workflow = workflow

    async def list_applications(
        self,
        ctx: OperationContext,
        filters: JobApplicationFilters,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[JobApplicationResult]:
        paging = PageRequest.clamped(page, limit)

        async def load(_scope):
            items, total = await self.application_repo.list_page(filters, paging.skip, paging.limit)
            return Page(items=items, total=total, page=paging.page, limit=paging.limit)

        return await self.pipeline.read_many(
            ctx, resource_type=RESOURCE, load=load, allowed_roles=HR_ROLES
        )

    async def get_application(
        self, ctx: OperationContext, application_id: str
    ) -> JobApplicationResult:
        return await self.pipeline.read_one(
            ctx,
            resource_type=RESOURCE,
            resource_id=application_id,
            load=self.application_repo.get_by_id,
            allowed_roles=HR_ROLES,
        )

    async def submit_application(
        self, ctx: OperationContext, data: JobApplicationCreate
    ) -> JobApplicationResult:
        """Record an application to an OPEN, unexpired posting; one per candidate email."""
        email = data.candidate_email.strip().lower()

        async def insert(_scope) -> JobApplicationResult:
            posting = await self.posting_repo.get_by_id(data.job_posting_id)
            if posting is None:
                raise DependencyNotFoundException(
                    ReasonCode.JOB_POSTING_NOT_FOUND, "Job posting not found", data.job_posting_id
                )
            if posting.status is not JobPostingStatus.OPEN:
                raise BusinessRuleException(
                    ReasonCode.INACTIVE_JOB_POSTING,
                    "Job posting is not accepting applications",
                    status=posting.status.value,
                )
            if posting.expires_at is not None and posting.expires_at <= utc_now():
                raise BusinessRuleException(
                    ReasonCode.JOB_POSTING_EXPIRED, "Job posting has expired"
                )
            if await self.application_repo.find_for_candidate(posting.id, email):
                raise BusinessRuleException(
                    ReasonCode.DUPLICATE_APPLICATION,
                    "Candidate has already applied for this posting",
                    candidate_email=email,
                )
            return await self.application_repo.create(
                replace(
                    data,
                    candidate_name=data.candidate_name.strip(),
                    candidate_email=email,
                    status=ApplicationStatus.APPLIED,
                )
            )

        created = await self.pipeline.create(
            ctx, resource_type=RESOURCE, insert=insert, allowed_roles=HR_ROLES
        )
        logger.info(
            "Job application %s received for posting %s", created.id, created.job_posting_id
        )
        return created

    async def change_status(
        self, ctx: OperationContext, application_id: str, status: ApplicationStatus
    ) -> JobApplicationResult:
        async def apply(current: JobApplicationResult, _scope) -> JobApplicationResult:
            self.workflow.ensure_application_transition(current.status, status)
            if current.status is status:
                return current
            return await self.application_repo.update_status(application_id, status)

        return await self.pipeline.mutate(
            ctx,
            resource_type=RESOURCE,
            resource_id=application_id,
            load=self.application_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
        )
