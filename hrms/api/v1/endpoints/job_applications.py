"""Job application API (ADMIN/HR)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from hrms.api.v1.dependencies import OperationCtx, get_job_application_service
from hrms.application.dtos.job_posting import JobApplicationCreate, JobApplicationFilters
from hrms.application.use_cases import JobApplicationService
from hrms.core.limiter import limit_writes
from hrms.domain.enums import ApplicationStatus
from hrms.schemas.common import PageResponse, to_page_response
from hrms.schemas.job_application import (
    JobApplicationCreateRequest,
    JobApplicationResponse,
    JobApplicationStatusUpdate,
)

router = APIRouter()

ApplicationSvc = Annotated[JobApplicationService, Depends(get_job_application_service)]


@router.get("", response_model=PageResponse[JobApplicationResponse])
async def list_applications(
    ctx: OperationCtx,
    svc: ApplicationSvc,
    page: int = 1,
    limit: int = 20,
    job_posting_id: str | None = None,
    status: ApplicationStatus | None = None,
    search: str | None = None,
):
    filters = JobApplicationFilters(job_posting_id=job_posting_id, status=status, search=search)
    return to_page_response(
        await svc.list_applications(ctx, filters, page, limit), JobApplicationResponse
    )


@router.get("/{application_id}", response_model=JobApplicationResponse)
async def get_application(application_id: str, ctx: OperationCtx, svc: ApplicationSvc):
    return await svc.get_application(ctx, application_id)


@router.post("", response_model=JobApplicationResponse, status_code=201)
@limit_writes
async def submit_application(
    request: Request,
    body: JobApplicationCreateRequest,
    ctx: OperationCtx,
    svc: ApplicationSvc,
):
    """Record a candidate's application to an open posting."""
    return await svc.submit_application(ctx, JobApplicationCreate(**body.model_dump()))


@router.patch("/{application_id}/status", response_model=JobApplicationResponse)
@limit_writes
async def change_application_status(
    request: Request,
    application_id: str,
    body: JobApplicationStatusUpdate,
    ctx: OperationCtx,
    svc: ApplicationSvc,
):
    return await svc.change_status(ctx, application_id, body.status)
