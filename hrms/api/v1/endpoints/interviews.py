"""Interview API."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from hrms.api.v1.dependencies import OperationCtx, get_interview_service
from hrms.application.dtos.interview import InterviewCreate, InterviewFilters
from hrms.application.use_cases import InterviewService
from hrms.core.limiter import limit_writes
from hrms.domain.enums import InterviewStatus, InterviewType
from hrms.schemas.common import PageResponse, UtcDatetime, to_page_response
from hrms.schemas.interview import InterviewCreateRequest, InterviewResponse, InterviewUpdate

router = APIRouter()

InterviewSvc = Annotated[InterviewService, Depends(get_interview_service)]


@router.get("", response_model=PageResponse[InterviewResponse])
async def list_interviews(
    ctx: OperationCtx,
    svc: InterviewSvc,
    page: int = 1,
    limit: int = 20,
    application_id: str | None = None,
    status: InterviewStatus | None = None,
    interview_type: InterviewType | None = None,
    interviewer_id: str | None = None,
    scheduled_from: UtcDatetime | None = Query(None, description="From (inclusive) ISO8601"),
    scheduled_to: UtcDatetime | None = Query(None, description="To (inclusive) ISO8601"),
):
    filters = InterviewFilters(
        application_id=application_id,
        status=status,
        interview_type=interview_type,
        interviewer_id=interviewer_id,
        scheduled_from=scheduled_from,
        scheduled_to=scheduled_to,
    )
    return to_page_response(await svc.list_interviews(ctx, filters, page, limit), InterviewResponse)


@router.get("/{interview_id}", response_model=InterviewResponse)
async def get_interview(interview_id: str, ctx: OperationCtx, svc: InterviewSvc):
    return await svc.get_interview(ctx, interview_id)


@router.post("", response_model=InterviewResponse, status_code=201)
@limit_writes
async def schedule_interview(
    request: Request,
    body: InterviewCreateRequest,
    ctx: OperationCtx,
    svc: InterviewSvc,
):
    """Schedule an interview; the application moves to INTERVIEW_SCHEDULED."""
    data = InterviewCreate(
        application_id=body.application_id,
        scheduled_at=body.scheduled_at,
        interviewer_ids=tuple(body.interviewer_ids),
        interview_type=body.interview_type,
        duration_minutes=body.duration_minutes,
        location=body.location,
        meeting_link=body.meeting_link,
        notes=body.notes,
        created_by_id=ctx.actor.id,
    )
    return await svc.schedule_interview(ctx, data)


@router.patch("/{interview_id}", response_model=InterviewResponse)
@limit_writes
async def update_interview(
    request: Request,
    interview_id: str,
    body: InterviewUpdate,
    ctx: OperationCtx,
    svc: InterviewSvc,
):
    return await svc.update_interview(ctx, interview_id, body.model_dump(exclude_unset=True))


@router.delete("/{interview_id}", response_model=InterviewResponse)
@limit_writes
async def cancel_interview(
    request: Request,
    interview_id: str,
    ctx: OperationCtx,
    svc: InterviewSvc,
):
    """Cancel the interview (state-based delete)."""
    return await svc.cancel_interview(ctx, interview_id)
