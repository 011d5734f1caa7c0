"""Interview operations: scheduling, workflow updates with application cascades, cancellation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any

from hrms.application.dtos.common import Page, PageRequest
from hrms.application.dtos.context import OperationContext
from hrms.application.dtos.interview import InterviewCreate, InterviewFilters, InterviewResult
from hrms.application.interfaces.repositories import (
    IEmployeeRepository,
    IInterviewRepository,
    IJobApplicationRepository,
    IJobPostingRepository,
)
from hrms.application.services.workflow_state_machine import (
    TransitionContext,
    WorkflowStateMachine,
)
from hrms.application.use_cases.pipeline import HR_ROLES, AccessScopedPipeline, reject_nulls
from hrms.domain.enums import (
    ApplicationStatus,
    AuditAction,
    EmployeeStatus,
    GovernedEntity,
    InterviewStatus,
    ReasonCode,
)
from hrms.domain.exceptions import BusinessRuleException, DependencyNotFoundException
from hrms.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

_RESOURCE = GovernedEntity.INTERVIEW
NOT_NULL_FIELDS = (
    "status", "scheduled_at", "interviewer_ids", "interview_type", "duration_minutes"
)
SCHEDULABLE_APPLICATION_STATUSES = frozenset({
    ApplicationStatus.UNDER_REVIEW,
    ApplicationStatus.SHORTLISTED,
    ApplicationStatus.INTERVIEW_SCHEDULED,
})


class InterviewService:
    """Interviews for job applications (ADMIN/HR only).

    Status changes follow the interview transition table. Completing or
    missing an interview moves the linked application as a required side
    effect; cancelling the last live interview sends it back to review.
    """

    def __init__(
        self,
        pipeline: AccessScopedPipeline,
        interview_repo: IInterviewRepository,
        application_repo: IJobApplicationRepository,
        posting_repo: IJobPostingRepository,
        employee_repo: IEmployeeRepository,
        workflow: WorkflowStateMachine,
        min_lead_minutes: int = 30,
        conflict_window_minutes: int = 60,
    ) -> None:
        self.pipeline = pipeline
        self.interview_repo = interview_repo
        self.application_repo = application_repo
        self.posting_repo = posting_repo
        self.employee_repo = employee_repo
        self.workflow = workflow
        self.min_lead = timedelta(minutes=min_lead_minutes)
        self.conflict_window = timedelta(minutes=conflict_window_minutes)

    async def list_interviews(
        self,
        ctx: OperationContext,
        filters: InterviewFilters,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[InterviewResult]:
        paging = PageRequest.clamped(page, limit)

        async def load(_scope):
            items, total = await self.interview_repo.list_page(filters, paging.skip, paging.limit)
            return Page(items=items, total=total, page=paging.page, limit=paging.limit)

        return await self.pipeline.read_many(
            ctx, resource_type=_RESOURCE, load=load, allowed_roles=HR_ROLES
        )

    async def get_interview(self, ctx: OperationContext, interview_id: str) -> InterviewResult:
        return await self.pipeline.read_one(
            ctx,
            resource_type=_RESOURCE,
            resource_id=interview_id,
            load=self.interview_repo.get_by_id,
            allowed_roles=HR_ROLES,
        )

    async def schedule_interview(
        self, ctx: OperationContext, data: InterviewCreate
    ) -> InterviewResult:
        async def insert(_scope) -> InterviewResult:
            application = await self.application_repo.get_by_id(data.application_id)
            if application is None:
                raise DependencyNotFoundException(
                    ReasonCode.APPLICATION_NOT_FOUND,
                    "Job application not found",
                    data.application_id,
                )
            posting = await self.posting_repo.get_by_id(application.job_posting_id)
            if posting is None or not posting.status.accepts_interviews:
                raise BusinessRuleException(
                    ReasonCode.INACTIVE_JOB_POSTING,
                    "Cannot schedule interview for inactive job posting",
                    job_posting_id=application.job_posting_id,
                )
            if application.status not in SCHEDULABLE_APPLICATION_STATUSES:
                raise BusinessRuleException(
                    ReasonCode.INVALID_APPLICATION_STATUS,
                    f"Cannot schedule interview for application with status: {application.status.value}",
                    current_status=application.status.value,
                    allowed_statuses=sorted(s.value for s in SCHEDULABLE_APPLICATION_STATUSES),
                )
            self._check_schedule_time(data.scheduled_at)
            await self._check_interviewers(data.interviewer_ids)
            await self._warn_on_conflicts(
                data.interviewer_ids, data.scheduled_at, data.duration_minutes
            )

            created = await self.interview_repo.create(replace(data, created_by_id=ctx.actor.id))
            if application.status is not ApplicationStatus.INTERVIEW_SCHEDULED:
                await self.application_repo.update_status(
                    application.id, ApplicationStatus.INTERVIEW_SCHEDULED
                )
            return created

        created = await self.pipeline.create(
            ctx, resource_type=_RESOURCE, insert=insert, allowed_roles=HR_ROLES
        )
        await self.pipeline.publish(
            "interview.scheduled",
            {
                "interview_id": created.id,
                "application_id": created.application_id,
                "scheduled_at": created.scheduled_at.isoformat(),
                "interviewer_ids": list(created.interviewer_ids),
            },
        )
        return created

    async def update_interview(
        self, ctx: OperationContext, interview_id: str, changes: dict[str, Any]
    ) -> InterviewResult:
        changes = dict(changes)
        reject_nulls(changes, NOT_NULL_FIELDS)
        completed = False

        async def apply(current: InterviewResult, _scope) -> InterviewResult:
            nonlocal completed
            requested = changes.get("status", current.status)
            rating = changes.get("rating", current.rating)
            context = TransitionContext(
                feedback=changes.get("feedback", current.feedback),
                rating=rating,
            )
            self.workflow.ensure_transition(_RESOURCE, current.status, requested, context)

            scheduled_at = changes.get("scheduled_at", current.scheduled_at)
            rescheduled = scheduled_at != current.scheduled_at
            reopened = requested is InterviewStatus.SCHEDULED and current.status is not requested
            if rescheduled or reopened:
                self._check_schedule_time(scheduled_at)
            interviewer_ids = tuple(changes.get("interviewer_ids", current.interviewer_ids))
            if "interviewer_ids" in changes:
                changes["interviewer_ids"] = interviewer_ids
                await self._check_interviewers(interviewer_ids)
            if rescheduled or "interviewer_ids" in changes or "duration_minutes" in changes:
                await self._warn_on_conflicts(
                    interviewer_ids,
                    scheduled_at,
                    changes.get("duration_minutes", current.duration_minutes),
                    exclude_id=interview_id,
                )

            updated = await self.interview_repo.update(interview_id, changes) if changes else current
            if requested is not current.status:
                cascade = self.workflow.application_status_after(requested, rating)
                if cascade is not None:
                    await self.application_repo.update_status(current.application_id, cascade)
                completed = requested is InterviewStatus.COMPLETED
            return updated

        updated = await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=interview_id,
            load=self.interview_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
        )
        if completed:
            await self.pipeline.publish(
                "interview.completed",
                {
                    "interview_id": updated.id,
                    "application_id": updated.application_id,
                    "rating": updated.rating,
                },
            )
        return updated

    async def cancel_interview(self, ctx: OperationContext, interview_id: str) -> InterviewResult:
        """Delete by cancelling; the interview row is kept."""

        async def apply(current: InterviewResult, _scope) -> InterviewResult:
            if current.status is InterviewStatus.CANCELLED:
                raise BusinessRuleException(
                    ReasonCode.ALREADY_CANCELLED, "Interview is already cancelled"
                )
            self.workflow.ensure_transition(_RESOURCE, current.status, InterviewStatus.CANCELLED)
            cancelled = await self.interview_repo.update(
                interview_id, {"status": InterviewStatus.CANCELLED}
            )
            application = await self.application_repo.get_by_id(current.application_id)
            if (
                application is not None
                and application.status is ApplicationStatus.INTERVIEW_SCHEDULED
                and not await self.interview_repo.count_active_for_application(
                    application.id, exclude_id=interview_id
                )
            ):
                await self.application_repo.update_status(
                    application.id, ApplicationStatus.UNDER_REVIEW
                )
            return cancelled

        return await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=interview_id,
            load=self.interview_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
            audit_action=AuditAction.DELETE,
        )

    def _check_schedule_time(self, scheduled_at: datetime) -> None:
        earliest = utc_now() + self.min_lead
        if scheduled_at < earliest:
            minutes = int(self.min_lead.total_seconds() // 60)
            raise BusinessRuleException(
                ReasonCode.INVALID_SCHEDULE_TIME,
                f"Interview must be scheduled at least {minutes} minutes in advance",
                earliest=earliest.isoformat(),
            )

    async def _check_interviewers(self, interviewer_ids: Iterable[str]) -> None:
        wanted = list(dict.fromkeys(interviewer_ids))
        found = await self.employee_repo.get_by_ids(wanted)
        active = {e.id for e in found if e.status is EmployeeStatus.ACTIVE}
        invalid = [i for i in wanted if i not in active]
        if invalid:
            raise BusinessRuleException(
                ReasonCode.INVALID_INTERVIEWERS,
                "Some interviewers are invalid or inactive",
                invalid_ids=invalid,
            )

    async def _warn_on_conflicts(
        self,
        interviewer_ids: Iterable[str],
        scheduled_at: datetime,
        duration_minutes: int,
        exclude_id: str | None = None,
    ) -> None:
        """Overlapping interviews are allowed; they are only logged."""
        conflicts = await self.interview_repo.find_interviewer_conflicts(
            interviewer_ids,
            scheduled_at - self.conflict_window,
            scheduled_at + timedelta(minutes=duration_minutes) + self.conflict_window,
            exclude_id=exclude_id,
        )
        if conflicts:
            logger.warning(
                "Interviewer scheduling conflict at %s with interviews %s",
                scheduled_at.isoformat(),
                ", ".join(c.id for c in conflicts),
            )
