"""Onboarding task operations: scoped CRUD, bulk status changes and per-employee progress."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import Any

from hrms.application.dtos.common import Page, PageRequest
from hrms.application.dtos.context import OperationContext
from hrms.application.dtos.onboarding_task import (
    BulkUpdateResult,
    OnboardingSummary,
    OnboardingTaskCreate,
    OnboardingTaskFilters,
    OnboardingTaskResult,
)
from hrms.application.interfaces.repositories import IEmployeeRepository, IOnboardingTaskRepository
from hrms.application.services.workflow_state_machine import WorkflowStateMachine
from hrms.application.use_cases.pipeline import (
    HR_ROLES,
    MANAGING_ROLES,
    AccessScopedPipeline,
    reject_nulls,
)
from hrms.domain.enums import (
    AuditAction,
    EmployeeStatus,
    GovernedEntity,
    OnboardingTaskStatus,
    ReasonCode,
    Role,
)
from hrms.domain.exceptions import (
    AccessDeniedException,
    BusinessRuleException,
    DependencyNotFoundException,
    ResourceNotFoundException,
)
from hrms.shared.utils.datetime import utc_now

_RESOURCE = GovernedEntity.ONBOARDING_TASK
SUMMARY_RESOURCE = "onboarding_summary"
EMPLOYEE_EDITABLE_FIELDS = frozenset({"status", "notes", "completed_at"})
BULK_EDITABLE_FIELDS = frozenset({"status", "assignee_id", "due_date", "notes"})
NOT_NULL_FIELDS = ("title", "due_date", "sort_order", "status")
ONBOARDABLE_STATUSES = frozenset({EmployeeStatus.ACTIVE, EmployeeStatus.PROBATION})
RECENT_TASKS = 10


class OnboardingTaskService:
    """Tasks belong to the onboarded employee; the assignee also gets access."""

    def __init__(
        self,
        pipeline: AccessScopedPipeline,
        task_repo: IOnboardingTaskRepository,
        employee_repo: IEmployeeRepository,
        workflow: WorkflowStateMachine,
    ) -> None:
        self.pipeline = pipeline
        self.task_repo = task_repo
        self.employee_repo = employee_repo
        self.workflow = workflow

    @staticmethod
    def _owners(ctx: OperationContext):
        """Owner ids for scope checks: the task's employee, plus the assignee when it is the actor."""
        me = ctx.actor.employee_id

        def owners(task: OnboardingTaskResult) -> tuple[str | None, ...]:
            return (task.employee_id, task.assignee_id if task.assignee_id == me else None)

        return owners

    async def list_tasks(
        self,
        ctx: OperationContext,
        filters: OnboardingTaskFilters,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[OnboardingTaskResult]:
        paging = PageRequest.clamped(page, limit)

        async def load(scope):
            items, total = await self.task_repo.list_page(
                scope.owner_filter(),
                filters,
                paging.skip,
                paging.limit,
                utc_now(),
                assignee_id=ctx.actor.employee_id,
            )
            return Page(items=items, total=total, page=paging.page, limit=paging.limit)

        return await self.pipeline.read_many(ctx, resource_type=_RESOURCE, load=load)

    async def get_task(self, ctx: OperationContext, task_id: str) -> OnboardingTaskResult:
        return await self.pipeline.read_one(
            ctx,
            resource_type=_RESOURCE,
            resource_id=task_id,
            load=self.task_repo.get_by_id,
            owners=self._owners(ctx),
        )

    async def create_task(self, ctx: OperationContext, data: OnboardingTaskCreate) -> OnboardingTaskResult:
        async def insert(_scope) -> OnboardingTaskResult:
            employee = await self.employee_repo.get_by_id(data.employee_id)
            if employee is None or employee.status not in ONBOARDABLE_STATUSES:
                raise DependencyNotFoundException(
                    ReasonCode.EMPLOYEE_NOT_FOUND,
                    "Employee not found or not eligible for onboarding",
                    data.employee_id,
                )
            if data.assignee_id:
                await self._check_assignee(data.assignee_id)
            self._check_due_date(data.due_date)
            await self._check_duplicate(data.employee_id, data.title)
            return await self.task_repo.create(data)

        return await self.pipeline.create(
            ctx, resource_type=_RESOURCE, insert=insert, allowed_roles=HR_ROLES
        )

    async def update_task(
        self, ctx: OperationContext, task_id: str, changes: dict[str, Any]
    ) -> OnboardingTaskResult:
        changes = dict(changes)
        reject_nulls(changes, NOT_NULL_FIELDS)
        if ctx.actor.role is Role.EMPLOYEE:
            restricted = sorted(set(changes) - EMPLOYEE_EDITABLE_FIELDS)
            if restricted:
                raise AccessDeniedException(
                    "Employees can only update status, notes, and completion date",
                    resource=_RESOURCE.value,
                    action="update",
                    reason=ReasonCode.INSUFFICIENT_PERMISSIONS,
                    fields=restricted,
                )
        completed = False

        async def apply(current: OnboardingTaskResult, _scope) -> OnboardingTaskResult:
            nonlocal completed
            await self._validate_changes(current, changes)
            if not changes:
                return current
            updated = await self.task_repo.update(task_id, changes)
            completed = (
                updated.status is OnboardingTaskStatus.COMPLETED
                and current.status is not OnboardingTaskStatus.COMPLETED
            )
            return updated

        updated = await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=task_id,
            load=self.task_repo.get_by_id,
            apply=apply,
            owners=self._owners(ctx),
        )
        if completed:
            await self._publish_completed(updated)
        return updated

    async def cancel_task(
        self, ctx: OperationContext, task_id: str, force: bool = False
    ) -> OnboardingTaskResult:
        """Delete by cancelling. Completed tasks are only cancelled with force."""

        async def apply(current: OnboardingTaskResult, _scope) -> OnboardingTaskResult:
            if current.status is OnboardingTaskStatus.CANCELLED:
                raise BusinessRuleException(ReasonCode.ALREADY_CANCELLED, "Task is already cancelled")
            if current.status is OnboardingTaskStatus.COMPLETED:
                if not force:
                    raise BusinessRuleException(
                        ReasonCode.CANNOT_DELETE_COMPLETED,
                        "Cannot delete completed task. Use force=true to override.",
                    )
            else:
                self.workflow.ensure_transition(
                    _RESOURCE, current.status, OnboardingTaskStatus.CANCELLED
                )
            now = utc_now()
            note = f"Task cancelled by {ctx.actor.id} on {now.date().isoformat()}"
            return await self.task_repo.update(
                task_id,
                {
                    "status": OnboardingTaskStatus.CANCELLED,
                    "completed_at": None,
                    "notes": f"{current.notes}\n\n{note}" if current.notes else note,
                },
            )

        return await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=task_id,
            load=self.task_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
            audit_action=AuditAction.DELETE,
        )

    async def bulk_update(
        self, ctx: OperationContext, task_ids: Iterable[str], changes: dict[str, Any]
    ) -> BulkUpdateResult:
        """Apply the same changes to several tasks; every task is validated before any is written."""
        ids = list(dict.fromkeys(task_ids))
        changes = {k: v for k, v in changes.items() if k in BULK_EDITABLE_FIELDS}
        reject_nulls(changes, NOT_NULL_FIELDS)
        scope = await self.pipeline.authorize(
            ctx, _RESOURCE, AuditAction.BULK_UPDATE, MANAGING_ROLES
        )
        tasks = await self.task_repo.get_by_ids(ids)
        found = {t.id for t in tasks}
        missing = [i for i in ids if i not in found]
        if missing:
            raise DependencyNotFoundException(
                ReasonCode.TASKS_NOT_FOUND, "Some tasks not found", missing_ids=missing
            )
        owners = self._owners(ctx)
        unauthorized = [t.id for t in tasks if not any(scope.allows(o) for o in owners(t))]
        if unauthorized:
            raise AccessDeniedException(
                "Access denied to some tasks",
                resource=_RESOURCE.value,
                action=AuditAction.BULK_UPDATE.value,
                unauthorized_ids=unauthorized,
            )

        plans: list[tuple[OnboardingTaskResult, dict[str, Any]]] = []
        for task in tasks:
            task_changes = dict(changes)
            await self._validate_changes(task, task_changes)
            plans.append((task, task_changes))

        updated: list[OnboardingTaskResult] = []
        for task, task_changes in plans:
            after = await self.task_repo.update(task.id, task_changes)
            await self.pipeline.record(
                ctx, AuditAction.BULK_UPDATE, _RESOURCE, task.id, task, after
            )
            updated.append(after)
            if after.status is OnboardingTaskStatus.COMPLETED and task.status is not after.status:
                await self._publish_completed(after)
        return BulkUpdateResult(updated=updated)

    async def employee_summary(self, ctx: OperationContext, employee_id: str) -> OnboardingSummary:
        scope = await self.pipeline.authorize(ctx, SUMMARY_RESOURCE, AuditAction.READ)
        self.pipeline.ensure_in_scope(
            scope, (employee_id,), resource_type=SUMMARY_RESOURCE, resource_id=employee_id
        )
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise ResourceNotFoundException(GovernedEntity.EMPLOYEE.value, employee_id)
        tasks = await self.task_repo.list_for_employee(employee_id)
        now = utc_now()
        counts = Counter(t.status.value for t in tasks)
        total = len(tasks)
        summary = OnboardingSummary(
            employee_id=employee_id,
            total=total,
            status_counts={s.value: counts.get(s.value, 0) for s in OnboardingTaskStatus},
            completion_percentage=(
                round(counts.get(OnboardingTaskStatus.COMPLETED.value, 0) / total * 100, 1)
                if total
                else 0.0
            ),
            overdue_count=sum(1 for t in tasks if t.is_overdue(now)),
            days_since_hire=(now.date() - employee.hire_date).days if employee.hire_date else None,
            recent_tasks=tasks[:RECENT_TASKS],
        )
        await self.pipeline.record(ctx, AuditAction.READ, SUMMARY_RESOURCE, employee_id)
        return summary

    # ---- validation ----

    async def _validate_changes(
        self, current: OnboardingTaskResult, changes: dict[str, Any]
    ) -> None:
        """Check changes against current and fill in completed_at (mutates changes)."""
        if "status" in changes:
            requested = changes["status"]
            self.workflow.ensure_transition(_RESOURCE, current.status, requested)
            changes["completed_at"] = self.workflow.completion_timestamp(
                current.status,
                requested,
                changes.get("completed_at") or current.completed_at,
                utc_now(),
            )
        if changes.get("due_date") is not None and changes["due_date"] != current.due_date:
            self._check_due_date(changes["due_date"])
        if changes.get("assignee_id") and changes["assignee_id"] != current.assignee_id:
            await self._check_assignee(changes["assignee_id"])
        title = changes.get("title")
        if title and title.strip().lower() != current.title.strip().lower():
            await self._check_duplicate(current.employee_id, title, exclude_id=current.id)

    async def _check_assignee(self, assignee_id: str) -> None:
        assignee = await self.employee_repo.get_by_id(assignee_id)
        if assignee is None or assignee.status is not EmployeeStatus.ACTIVE:
            raise DependencyNotFoundException(
                ReasonCode.ASSIGNEE_NOT_FOUND, "Assignee not found or inactive", assignee_id
            )

    @staticmethod
    def _check_due_date(due_date) -> None:
        if due_date <= utc_now():
            raise BusinessRuleException(ReasonCode.INVALID_DUE_DATE, "Due date must be in the future")

    async def _check_duplicate(
        self, employee_id: str, title: str, exclude_id: str | None = None
    ) -> None:
        existing = await self.task_repo.find_open_duplicate(employee_id, title, exclude_id)
        if existing is not None:
            raise BusinessRuleException(
                ReasonCode.DUPLICATE_TASK,
                "Similar task already exists for this employee",
                conflicting_ids=[existing.id],
            )

    async def _publish_completed(self, task: OnboardingTaskResult) -> None:
        await self.pipeline.publish(
            "onboarding_task.completed",
            {"task_id": task.id, "employee_id": task.employee_id, "title": task.title},
        )
