"""Job posting API."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from hrms.api.v1.dependencies import OperationCtx, get_job_posting_service
from hrms.application.dtos.job_posting import JobPostingCreate, JobPostingFilters
from hrms.application.use_cases import JobPostingService
from hrms.core.limiter import limit_writes
from hrms.domain.enums import EmploymentType, JobPostingStatus
from hrms.schemas.common import PageResponse, to_page_response
from hrms.schemas.job_posting import (
    JobPostingCreateRequest,
    JobPostingDeleteResponse,
    JobPostingResponse,
    JobPostingUpdate,
)

router = APIRouter()

PostingSvc = Annotated[JobPostingService, Depends(get_job_posting_service)]


@router.get("", response_model=PageResponse[JobPostingResponse])
async def list_postings(
    ctx: OperationCtx,
    svc: PostingSvc,
    page: int = 1,
    limit: int = 20,
    search: str | None = None,
    status: JobPostingStatus | None = None,
    department_id: str | None = None,
    employment_type: EmploymentType | None = None,
):
    """List postings. Callers outside ADMIN/HR only ever see OPEN postings."""
    filters = JobPostingFilters(
        search=search,
        status=status,
        department_id=department_id,
        employment_type=employment_type,
    )
    return to_page_response(await svc.list_postings(ctx, filters, page, limit), JobPostingResponse)


@router.get("/{posting_id}", response_model=JobPostingResponse)
async def get_posting(posting_id: str, ctx: OperationCtx, svc: PostingSvc):
    return await svc.get_posting(ctx, posting_id)


@router.post("", response_model=JobPostingResponse, status_code=201)
@limit_writes
async def create_posting(
    request: Request,
    body: JobPostingCreateRequest,
    ctx: OperationCtx,
    svc: PostingSvc,
):
    data = JobPostingCreate(**body.model_dump(), created_by_id=ctx.actor.id)
    return await svc.create_posting(ctx, data)


@router.patch("/{posting_id}", response_model=JobPostingResponse)
@limit_writes
async def update_posting(
    request: Request,
    posting_id: str,
    body: JobPostingUpdate,
    ctx: OperationCtx,
    svc: PostingSvc,
):
    return await svc.update_posting(ctx, posting_id, body.model_dump(exclude_unset=True))


@router.delete("/{posting_id}", response_model=JobPostingDeleteResponse)
@limit_writes
async def delete_posting(
    request: Request,
    posting_id: str,
    ctx: OperationCtx,
    svc: PostingSvc,
):
    """Close a posting that has applications; remove one that has none."""
    closed = await svc.delete_posting(ctx, posting_id)
    if closed is None:
        return JobPostingDeleteResponse(deleted=True)
    return JobPostingDeleteResponse(deleted=False, posting=JobPostingResponse.model_validate(closed))
