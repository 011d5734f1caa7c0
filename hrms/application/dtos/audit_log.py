"""DTOs for the audit trail."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from hrms.domain.enums import AuditAction


@dataclass(frozen=True)
class AuditLogEntryCreate:
    """Input for appending one audit record. Append-only; no update."""

    actor_id: str
    action: AuditAction
    resource_type: str
    resource_id: str | None
    before_snapshot: dict[str, Any] | None
    after_snapshot: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    request_id: str | None


@dataclass(frozen=True)
class AuditLogResult:
    id: str
    actor_id: str | None
    action: AuditAction
    resource_type: str
    resource_id: str | None
    before_snapshot: dict[str, Any] | None
    after_snapshot: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    request_id: str | None
    timestamp: datetime


@dataclass(frozen=True)
class AuditLogFilters:
    """Query filters. Timestamp bounds are inclusive on both ends."""

    actor_id: str | None = None
    action: AuditAction | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    ip_address: str | None = None
    timestamp_from: datetime | None = None
    timestamp_to: datetime | None = None


@dataclass(frozen=True)
class ActivityCount:
    key: str
    count: int


@dataclass(frozen=True)
class DailyCount:
    day: date
    count: int


@dataclass(frozen=True)
class AuditSummary:
    total: int
    window_days: int
    by_action: dict[str, int]
    per_day: list[DailyCount] = field(default_factory=list)
    top_actors: list[ActivityCount] = field(default_factory=list)
    top_resources: list[ActivityCount] = field(default_factory=list)


@dataclass(frozen=True)
class PurgeResult:
    deleted_count: int
    cutoff: datetime
    retention_days: int
