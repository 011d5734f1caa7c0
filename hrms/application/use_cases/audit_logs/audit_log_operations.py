"""Audit log API: query, lookup, activity summary and retention purge."""

from __future__ import annotations

from hrms.application.dtos.audit_log import (
    AuditLogFilters,
    AuditLogResult,
    AuditSummary,
    PurgeResult,
)
from hrms.application.dtos.common import Page
from hrms.application.dtos.context import OperationContext
from hrms.application.services.audit_trail_recorder import AuditTrailRecorder
from hrms.application.use_cases.pipeline import HR_ROLES, AccessScopedPipeline
from hrms.domain.enums import AuditAction, Role
from hrms.domain.exceptions import ResourceNotFoundException

AUDIT_RESOURCE = "audit_logs"
STATS_RESOURCE = "audit_logs_stats"
PURGE_ROLES = frozenset({Role.ADMIN})


class AuditLogService:
    """Reads are HR/ADMIN and are themselves audited; purge is ADMIN only."""

    def __init__(self, pipeline: AccessScopedPipeline, recorder: AuditTrailRecorder) -> None:
        self.pipeline = pipeline
        self.recorder = recorder

    async def list_logs(
        self,
        ctx: OperationContext,
        filters: AuditLogFilters,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[AuditLogResult]:
        return await self.pipeline.read_many(
            ctx,
            resource_type=AUDIT_RESOURCE,
            load=lambda _scope: self.recorder.query(filters, page, limit),
            allowed_roles=HR_ROLES,
        )

    async def get_log(self, ctx: OperationContext, audit_id: str) -> AuditLogResult:
        await self.pipeline.authorize(ctx, AUDIT_RESOURCE, AuditAction.READ, HR_ROLES)
        entry = await self.recorder.get(audit_id)
        if entry is None:
            raise ResourceNotFoundException("audit_log", audit_id)
        await self.pipeline.record(ctx, AuditAction.READ, AUDIT_RESOURCE, audit_id)
        return entry

    async def stats(
        self, ctx: OperationContext, window_days: int | None = None, top_n: int | None = None
    ) -> AuditSummary:
        return await self.pipeline.read_many(
            ctx,
            resource_type=STATS_RESOURCE,
            load=lambda _scope: self.recorder.summarize(window_days, top_n),
            allowed_roles=HR_ROLES,
        )

    async def cleanup(
        self, ctx: OperationContext, retention_days: int | None = None
    ) -> PurgeResult:
        await self.pipeline.authorize(ctx, AUDIT_RESOURCE, AuditAction.DELETE, PURGE_ROLES)
        return await self.recorder.purge(
            actor_id=ctx.actor.id, retention_days=retention_days, request=ctx.request
        )
