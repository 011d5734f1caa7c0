"""Request/response schemas for audit log API."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from hrms.domain.enums import AuditAction


class AuditLogEntryResponse(BaseModel):
    """Single audit log entry (read)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    actor_id: str | None
    action: AuditAction
    resource_type: str
    resource_id: str | None = None
    before_snapshot: dict[str, Any] | None = None
    after_snapshot: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None
    timestamp: datetime


class DailyCountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: date
    count: int


class ActivityCountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    count: int


class AuditSummaryResponse(BaseModel):
    """Audit statistics: totals by action (all time) and activity over the trailing window."""

    model_config = ConfigDict(from_attributes=True)

    total: int
    window_days: int
    by_action: dict[str, int]
    per_day: list[DailyCountResponse] = Field(default_factory=list)
    top_actors: list[ActivityCountResponse] = Field(default_factory=list)
    top_resources: list[ActivityCountResponse] = Field(default_factory=list)


class AuditCleanupRequest(BaseModel):
    """Retention is clamped to 30..3650 days; omitted means the configured default."""

    retention_days: int | None = None


class AuditCleanupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    deleted_count: int
    cutoff: datetime
    retention_days: int
