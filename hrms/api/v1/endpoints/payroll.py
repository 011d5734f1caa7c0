"""Payroll API: records, process/pay actions and per-employee summaries."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from hrms.api.v1.dependencies import OperationCtx, get_payroll_service
from hrms.application.dtos.payroll import PayrollFilters
from hrms.application.use_cases import PayrollService
from hrms.core.limiter import limit_writes
from hrms.domain.enums import PayrollStatus
from hrms.schemas.common import PageResponse, to_page_response
from hrms.schemas.payroll import (
    PayrollRecordCreateRequest,
    PayrollRecordResponse,
    PayrollRecordUpdate,
    PayrollSummaryResponse,
)

router = APIRouter()

PayrollSvc = Annotated[PayrollService, Depends(get_payroll_service)]


@router.get("", response_model=PageResponse[PayrollRecordResponse])
async def list_records(
    ctx: OperationCtx,
    svc: PayrollSvc,
    page: int = 1,
    limit: int = 20,
    employee_id: str | None = None,
    status: PayrollStatus | None = None,
    period_from: date | None = None,
    period_to: date | None = None,
):
    filters = PayrollFilters(
        employee_id=employee_id,
        status=status,
        period_from=period_from,
        period_to=period_to,
    )
    return to_page_response(await svc.list_records(ctx, filters, page, limit), PayrollRecordResponse)


@router.get("/employees/{employee_id}/summary", response_model=PayrollSummaryResponse)
async def employee_summary(employee_id: str, ctx: OperationCtx, svc: PayrollSvc):
    return await svc.employee_summary(ctx, employee_id)


@router.get("/{record_id}", response_model=PayrollRecordResponse)
async def get_record(record_id: str, ctx: OperationCtx, svc: PayrollSvc):
    return await svc.get_record(ctx, record_id)


@router.post("", response_model=PayrollRecordResponse, status_code=201)
@limit_writes
async def create_record(
    request: Request,
    body: PayrollRecordCreateRequest,
    ctx: OperationCtx,
    svc: PayrollSvc,
):
    """Create a DRAFT record; gross and net pay are computed from the figures."""
    return await svc.create_record(
        ctx,
        employee_id=body.employee_id,
        pay_period_start=body.pay_period_start,
        pay_period_end=body.pay_period_end,
        figures=body.figures(),
        currency=body.currency,
        notes=body.notes,
    )


@router.patch("/{record_id}", response_model=PayrollRecordResponse)
@limit_writes
async def update_record(
    request: Request,
    record_id: str,
    body: PayrollRecordUpdate,
    ctx: OperationCtx,
    svc: PayrollSvc,
):
    return await svc.update_record(ctx, record_id, body.model_dump(exclude_unset=True))


@router.post("/{record_id}/process", response_model=PayrollRecordResponse)
@limit_writes
async def process_record(request: Request, record_id: str, ctx: OperationCtx, svc: PayrollSvc):
    return await svc.process_record(ctx, record_id)


@router.post("/{record_id}/pay", response_model=PayrollRecordResponse)
@limit_writes
async def pay_record(request: Request, record_id: str, ctx: OperationCtx, svc: PayrollSvc):
    return await svc.pay_record(ctx, record_id)


@router.delete("/{record_id}", response_model=PayrollRecordResponse)
@limit_writes
async def cancel_record(request: Request, record_id: str, ctx: OperationCtx, svc: PayrollSvc):
    """Cancel the record. PAID records cannot be cancelled."""
    return await svc.cancel_record(ctx, record_id)
