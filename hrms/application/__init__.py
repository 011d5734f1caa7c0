"""Application layer: ports, core services and use cases.

Depends only on the domain and protocol definitions.
Infrastructure implements the ports (repositories, storage, event publisher).
"""

from hrms.application.services import (
    AuditTrailRecorder,
    OrgHierarchyResolver,
    WorkflowStateMachine,
)
from hrms.application.use_cases.pipeline import AccessScopedPipeline

__all__ = [
    "AccessScopedPipeline",
    "AuditTrailRecorder",
    "OrgHierarchyResolver",
    "WorkflowStateMachine",
]
