"""Audit log API: query, statistics and retention cleanup."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from hrms.api.v1.dependencies import OperationCtx, get_audit_log_service
from hrms.application.dtos.audit_log import AuditLogFilters
from hrms.application.use_cases import AuditLogService
from hrms.core.limiter import limit_audit_cleanup
from hrms.domain.enums import AuditAction
from hrms.schemas.audit_log import (
    AuditCleanupRequest,
    AuditCleanupResponse,
    AuditLogEntryResponse,
    AuditSummaryResponse,
)
from hrms.schemas.common import PageResponse, UtcDatetime, to_page_response

router = APIRouter()

AuditSvc = Annotated[AuditLogService, Depends(get_audit_log_service)]


@router.get("", response_model=PageResponse[AuditLogEntryResponse])
async def list_audit_logs(
    ctx: OperationCtx,
    svc: AuditSvc,
    page: int = 1,
    limit: int = 20,
    actor_id: str | None = Query(None, description="Filter by actor id"),
    action: AuditAction | None = None,
    resource_type: str | None = Query(None, description="Case-insensitive contains match"),
    resource_id: str | None = None,
    ip_address: str | None = Query(None, description="Contains match"),
    from_timestamp: UtcDatetime | None = Query(None, description="From (inclusive) ISO8601"),
    to_timestamp: UtcDatetime | None = Query(None, description="To (inclusive) ISO8601"),
):
    """List audit records, newest first."""
    filters = AuditLogFilters(
        actor_id=actor_id,
        action=action,
        resource_type=resource_type,
        resource_id=resource_id,
        ip_address=ip_address,
        timestamp_from=from_timestamp,
        timestamp_to=to_timestamp,
    )
    return to_page_response(await svc.list_logs(ctx, filters, page, limit), AuditLogEntryResponse)


@router.get("/stats/summary", response_model=AuditSummaryResponse)
async def audit_stats(
    ctx: OperationCtx,
    svc: AuditSvc,
    window_days: int | None = Query(None, ge=1, le=365),
    top_n: int | None = Query(None, ge=1, le=100),
):
    return await svc.stats(ctx, window_days, top_n)


@router.post("/cleanup", response_model=AuditCleanupResponse)
@limit_audit_cleanup
async def cleanup_audit_logs(
    request: Request,
    body: AuditCleanupRequest,
    ctx: OperationCtx,
    svc: AuditSvc,
):
    """Delete records older than the retention window (ADMIN only)."""
    return await svc.cleanup(ctx, body.retention_days)


@router.get("/{audit_id}", response_model=AuditLogEntryResponse)
async def get_audit_log(audit_id: str, ctx: OperationCtx, svc: AuditSvc):
    return await svc.get_log(ctx, audit_id)
