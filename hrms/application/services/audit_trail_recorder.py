"""Audit trail recorder: append, query, summarize and purge audit records.

Recording is best-effort. A failed append is logged once as a warning and
never reaches the caller, so it cannot undo a mutation that already
succeeded. Query, summarize and purge errors propagate normally.
"""

import logging
from datetime import datetime, timedelta
from typing import Any

from hrms.application.dtos.audit_log import (
    AuditLogEntryCreate,
    AuditLogFilters,
    AuditLogResult,
    AuditSummary,
    PurgeResult,
)
from hrms.application.dtos.common import Page, PageRequest
from hrms.application.dtos.context import RequestMeta
from hrms.application.interfaces.repositories import IAuditLogRepository
from hrms.domain.enums import AuditAction
from hrms.shared.telemetry.tracing import traced
from hrms.shared.utils.datetime import start_of_utc_day, utc_now
from hrms.shared.utils.snapshot import to_snapshot

logger = logging.getLogger(__name__)

MIN_RETENTION_DAYS = 30
MAX_RETENTION_DAYS = 3650
DEFAULT_RETENTION_DAYS = 365
PURGE_RESOURCE_TYPE = "audit_logs_cleanup"


def clamp_retention_days(retention_days: int | None, default: int = DEFAULT_RETENTION_DAYS) -> int:
    """Clamp retention to [MIN_RETENTION_DAYS, MAX_RETENTION_DAYS]."""
    days = default if retention_days is None else retention_days
    return max(MIN_RETENTION_DAYS, min(MAX_RETENTION_DAYS, days))


class AuditTrailRecorder:
    """Append-only audit ledger over an IAuditLogRepository."""

    def __init__(
        self,
        audit_repo: IAuditLogRepository,
        summary_window_days: int = 30,
        summary_top_n: int = 10,
        default_retention_days: int = DEFAULT_RETENTION_DAYS,
    ) -> None:
        self.audit_repo = audit_repo
        self.summary_window_days = summary_window_days
        self.summary_top_n = summary_top_n
        self.default_retention_days = default_retention_days

    async def record(
        self,
        *,
        actor_id: str,
        action: AuditAction,
        resource_type: str,
        resource_id: str | None = None,
        before: Any = None,
        after: Any = None,
        request: RequestMeta | None = None,
    ) -> AuditLogResult | None:
        """Append one record. Returns None (after logging a warning) when the write fails."""
        request = request or RequestMeta()
        try:
            entry = AuditLogEntryCreate(
                actor_id=actor_id,
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                before_snapshot=to_snapshot(before),
                after_snapshot=to_snapshot(after),
                ip_address=request.ip_address,
                user_agent=request.user_agent,
                request_id=request.request_id,
            )
            return await self.audit_repo.create(entry)
        except Exception as e:
            logger.warning(
                "Failed to write audit log (%s %s %s): %s",
                action.value,
                resource_type,
                resource_id,
                e,
                exc_info=True,
            )
            return None

    @traced("audit.query")
    async def query(
        self, filters: AuditLogFilters, page: int | None = None, limit: int | None = None
    ) -> Page[AuditLogResult]:
        """Return matching records (timestamp descending) with the total count."""
        paging = PageRequest.clamped(page, limit)
        items = await self.audit_repo.list_page(filters, paging.skip, paging.limit)
        total = await self.audit_repo.count(filters)
        return Page(items=items, total=total, page=paging.page, limit=paging.limit)

    async def get(self, audit_id: str) -> AuditLogResult | None:
        return await self.audit_repo.get_by_id(audit_id)

    @traced("audit.summarize")
    async def summarize(
        self,
        window_days: int | None = None,
        top_n: int | None = None,
        now: datetime | None = None,
    ) -> AuditSummary:
        """Counts by action (all time), per-day totals and top-N actors/resources over the window."""
        window_days = window_days or self.summary_window_days
        top_n = top_n or self.summary_top_n
        now = now or utc_now()
        # Whole days: the window starts at midnight, window_days - 1 days before today.
        since = start_of_utc_day(now) - timedelta(days=window_days - 1)
        return AuditSummary(
            total=await self.audit_repo.count(),
            window_days=window_days,
            by_action=await self.audit_repo.count_by_action(),
            per_day=await self.audit_repo.count_per_day(since),
            top_actors=await self.audit_repo.top_actors(since, top_n),
            top_resources=await self.audit_repo.top_resources(since, top_n),
        )

    @traced("audit.purge")
    async def purge(
        self,
        *,
        actor_id: str,
        retention_days: int | None = None,
        request: RequestMeta | None = None,
        now: datetime | None = None,
    ) -> PurgeResult:
        """Delete records older than now - retention_days (clamped) and audit the purge.

        When nothing is older than the cutoff, no delete is issued and no
        purge record is written, so repeated calls are idempotent.
        """
        retention_days = clamp_retention_days(retention_days, self.default_retention_days)
        cutoff = (now or utc_now()) - timedelta(days=retention_days)
        if await self.audit_repo.count_older_than(cutoff) == 0:
            return PurgeResult(deleted_count=0, cutoff=cutoff, retention_days=retention_days)

        deleted = await self.audit_repo.delete_older_than(cutoff)
        result = PurgeResult(deleted_count=deleted, cutoff=cutoff, retention_days=retention_days)
        logger.info("Purged %d audit records older than %s", deleted, cutoff.isoformat())
        await self.record(
            actor_id=actor_id,
            action=AuditAction.DELETE,
            resource_type=PURGE_RESOURCE_TYPE,
            after={
                "deletedCount": deleted,
                "cutoffDate": cutoff.isoformat(),
                "retentionDays": retention_days,
            },
            request=request,
        )
        return result
