"""Core services: hierarchy scoping, workflow rules and the audit trail."""

from hrms.application.services.audit_trail_recorder import AuditTrailRecorder
from hrms.application.services.org_hierarchy_resolver import OrgHierarchyResolver
from hrms.application.services.workflow_state_machine import (
    TransitionContext,
    TransitionDecision,
    WorkflowStateMachine,
)

__all__ = [
    "AuditTrailRecorder",
    "OrgHierarchyResolver",
    "TransitionContext",
    "TransitionDecision",
    "WorkflowStateMachine",
]
