"""Core service dependencies: hierarchy resolver, audit recorder, workflow and pipeline.

All share the request's transactional session, so governed mutations and
their audit records commit together.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.application.services import (
    AuditTrailRecorder,
    OrgHierarchyResolver,
    WorkflowStateMachine,
)
from hrms.application.use_cases.pipeline import AccessScopedPipeline
from hrms.core.config import get_settings
from hrms.infrastructure.persistence.database import get_db_transactional
from hrms.infrastructure.persistence.repositories import (
    AuditLogRepository,
    EmployeeRepository,
)

DbSession = Annotated[AsyncSession, Depends(get_db_transactional)]


def get_workflow() -> WorkflowStateMachine:
    return WorkflowStateMachine(payroll_max_period_days=get_settings().payroll_max_period_days)


async def get_audit_recorder(db: DbSession) -> AuditTrailRecorder:
    settings = get_settings()
    return AuditTrailRecorder(
        AuditLogRepository(db),
        summary_window_days=settings.audit_summary_window_days,
        summary_top_n=settings.audit_summary_top_n,
        default_retention_days=settings.audit_retention_default_days,
    )


async def get_hierarchy_resolver(db: DbSession) -> OrgHierarchyResolver:
    return OrgHierarchyResolver(EmployeeRepository(db))


async def get_pipeline(
    request: Request,
    hierarchy: Annotated[OrgHierarchyResolver, Depends(get_hierarchy_resolver)],
    recorder: Annotated[AuditTrailRecorder, Depends(get_audit_recorder)],
) -> AccessScopedPipeline:
    """Pipeline with the cascade event publisher installed at startup (None before lifespan runs)."""
    events = getattr(request.app.state, "event_publisher", None)
    return AccessScopedPipeline(hierarchy, recorder, events=events)


Pipeline = Annotated[AccessScopedPipeline, Depends(get_pipeline)]
Workflow = Annotated[WorkflowStateMachine, Depends(get_workflow)]
