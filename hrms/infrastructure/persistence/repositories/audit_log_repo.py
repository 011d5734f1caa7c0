"""Audit log repository. Append-only; implements IAuditLogRepository.

The only delete path is the retention purge, a bulk DELETE by timestamp.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Date, cast, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.application.dtos.audit_log import (
    ActivityCount,
    AuditLogEntryCreate,
    AuditLogFilters,
    AuditLogResult,
    DailyCount,
)
from hrms.domain.enums import AuditAction
from hrms.infrastructure.persistence.models.audit_log import AuditLog
from hrms.shared.utils.generators import generate_cuid


def _orm_to_result(row: AuditLog) -> AuditLogResult:
    """Map ORM to application DTO."""
    return AuditLogResult(
        id=row.id,
        actor_id=row.actor_id,
        action=AuditAction(row.action),
        resource_type=row.resource_type,
        resource_id=row.resource_id,
        before_snapshot=row.before_snapshot,
        after_snapshot=row.after_snapshot,
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        request_id=row.request_id,
        timestamp=row.timestamp,
    )


def _conditions(filters: AuditLogFilters | None) -> list:
    if filters is None:
        return []
    conditions = []
    if filters.actor_id:
        conditions.append(AuditLog.actor_id == filters.actor_id)
    if filters.action is not None:
        conditions.append(AuditLog.action == filters.action.value)
    if filters.resource_type:
        conditions.append(AuditLog.resource_type.ilike(f"%{filters.resource_type}%"))
    if filters.resource_id:
        conditions.append(AuditLog.resource_id == filters.resource_id)
    if filters.ip_address:
        conditions.append(AuditLog.ip_address.contains(filters.ip_address))
    if filters.timestamp_from is not None:
        conditions.append(AuditLog.timestamp >= filters.timestamp_from)
    if filters.timestamp_to is not None:
        conditions.append(AuditLog.timestamp <= filters.timestamp_to)
    return conditions


class AuditLogRepository:
    """Append-only audit log repository. No update; bulk purge only."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one entry in a SAVEPOINT so a failed insert leaves the caller's transaction usable."""
        row = AuditLog(
            id=generate_cuid(),
            actor_id=entry.actor_id,
            action=entry.action.value,
            resource_type=entry.resource_type,
            resource_id=entry.resource_id,
            before_snapshot=entry.before_snapshot,
            after_snapshot=entry.after_snapshot,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            request_id=entry.request_id,
        )
        async with self.db.begin_nested():
            self.db.add(row)
            await self.db.flush()
        await self.db.refresh(row)
        return _orm_to_result(row)

    async def get_by_id(self, audit_id: str) -> AuditLogResult | None:
        result = await self.db.execute(select(AuditLog).where(AuditLog.id == audit_id))
        row = result.scalar_one_or_none()
        return _orm_to_result(row) if row else None

    async def list_page(
        self, filters: AuditLogFilters, skip: int, limit: int
    ) -> list[AuditLogResult]:
        stmt = (
            select(AuditLog)
            .where(*_conditions(filters))
            .order_by(AuditLog.timestamp.desc(), AuditLog.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [_orm_to_result(r) for r in result.scalars().all()]

    async def count(self, filters: AuditLogFilters | None = None) -> int:
        stmt = select(func.count(AuditLog.id)).where(*_conditions(filters))
        return await self.db.scalar(stmt) or 0

    async def count_by_action(self) -> dict[str, int]:
        result = await self.db.execute(
            select(AuditLog.action, func.count(AuditLog.id)).group_by(AuditLog.action)
        )
        return {action: count for action, count in result.all()}

    async def count_per_day(self, since: datetime) -> list[DailyCount]:
        day = cast(func.timezone("UTC", AuditLog.timestamp), Date).label("day")
        result = await self.db.execute(
            select(day, func.count(AuditLog.id))
            .where(AuditLog.timestamp >= since)
            .group_by(day)
            .order_by(day)
        )
        return [DailyCount(day=d, count=c) for d, c in result.all()]

    async def top_actors(self, since: datetime, limit: int) -> list[ActivityCount]:
        count = func.count(AuditLog.id).label("n")
        result = await self.db.execute(
            select(AuditLog.actor_id, count)
            .where(AuditLog.timestamp >= since, AuditLog.actor_id.is_not(None))
            .group_by(AuditLog.actor_id)
            .order_by(count.desc(), AuditLog.actor_id)
            .limit(limit)
        )
        return [ActivityCount(key=k, count=c) for k, c in result.all()]

    async def top_resources(self, since: datetime, limit: int) -> list[ActivityCount]:
        count = func.count(AuditLog.id).label("n")
        result = await self.db.execute(
            select(AuditLog.resource_type, count)
            .where(AuditLog.timestamp >= since)
            .group_by(AuditLog.resource_type)
            .order_by(count.desc(), AuditLog.resource_type)
            .limit(limit)
        )
        return [ActivityCount(key=k, count=c) for k, c in result.all()]

    async def count_older_than(self, cutoff: datetime) -> int:
        return await self.db.scalar(
            select(func.count(AuditLog.id)).where(AuditLog.timestamp < cutoff)
        ) or 0

    async def delete_older_than(self, cutoff: datetime) -> int:
        result = await self.db.execute(
            delete(AuditLog)
            .where(AuditLog.timestamp < cutoff)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
