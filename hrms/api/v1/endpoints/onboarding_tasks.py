"""Onboarding task API: tasks, bulk updates and per-employee progress."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from hrms.api.v1.dependencies import OperationCtx, get_onboarding_task_service
from hrms.application.dtos.onboarding_task import OnboardingTaskCreate, OnboardingTaskFilters
from hrms.application.use_cases import OnboardingTaskService
from hrms.core.limiter import limit_writes
from hrms.domain.enums import OnboardingTaskStatus
from hrms.schemas.common import PageResponse, to_page_response
from hrms.schemas.onboarding_task import (
    OnboardingSummaryResponse,
    OnboardingTaskBulkUpdateRequest,
    OnboardingTaskBulkUpdateResponse,
    OnboardingTaskCreateRequest,
    OnboardingTaskResponse,
    OnboardingTaskUpdate,
)

router = APIRouter()

TaskSvc = Annotated[OnboardingTaskService, Depends(get_onboarding_task_service)]


@router.get("", response_model=PageResponse[OnboardingTaskResponse])
async def list_tasks(
    ctx: OperationCtx,
    svc: TaskSvc,
    page: int = 1,
    limit: int = 20,
    employee_id: str | None = None,
    assignee_id: str | None = None,
    status: OnboardingTaskStatus | None = None,
    category: str | None = None,
    overdue: bool = Query(False, description="Only open tasks past their due date"),
):
    filters = OnboardingTaskFilters(
        employee_id=employee_id,
        assignee_id=assignee_id,
        status=status,
        category=category,
        overdue=overdue,
    )
    return to_page_response(await svc.list_tasks(ctx, filters, page, limit), OnboardingTaskResponse)


@router.get("/employees/{employee_id}/summary", response_model=OnboardingSummaryResponse)
async def employee_summary(employee_id: str, ctx: OperationCtx, svc: TaskSvc):
    """Onboarding progress for one employee. Defined before /{task_id} for route precedence."""
    return await svc.employee_summary(ctx, employee_id)


@router.patch("/bulk", response_model=OnboardingTaskBulkUpdateResponse)
@limit_writes
async def bulk_update_tasks(
    request: Request,
    body: OnboardingTaskBulkUpdateRequest,
    ctx: OperationCtx,
    svc: TaskSvc,
):
    """Apply the same changes to many tasks; nothing is written unless every task passes."""
    changes = body.updates.model_dump(exclude_unset=True)
    result = await svc.bulk_update(ctx, body.task_ids, changes)
    return OnboardingTaskBulkUpdateResponse(
        updated_count=result.updated_count,
        updated=[OnboardingTaskResponse.model_validate(t) for t in result.updated],
    )


@router.get("/{task_id}", response_model=OnboardingTaskResponse)
async def get_task(task_id: str, ctx: OperationCtx, svc: TaskSvc):
    return await svc.get_task(ctx, task_id)


@router.post("", response_model=OnboardingTaskResponse, status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: OnboardingTaskCreateRequest,
    ctx: OperationCtx,
    svc: TaskSvc,
):
    return await svc.create_task(ctx, OnboardingTaskCreate(**body.model_dump()))


@router.patch("/{task_id}", response_model=OnboardingTaskResponse)
@limit_writes
async def update_task(
    request: Request,
    task_id: str,
    body: OnboardingTaskUpdate,
    ctx: OperationCtx,
    svc: TaskSvc,
):
    return await svc.update_task(ctx, task_id, body.model_dump(exclude_unset=True))


@router.delete("/{task_id}", response_model=OnboardingTaskResponse)
@limit_writes
async def cancel_task(
    request: Request,
    task_id: str,
    ctx: OperationCtx,
    svc: TaskSvc,
    force: bool = Query(False, description="Also cancel a COMPLETED task"),
):
    return await svc.cancel_task(ctx, task_id, force=force)
