"""Presentation-layer dependency injection (composition root)."""

from hrms.api.v1.dependencies.auth import (
    OperationCtx,
    get_actor,
    get_operation_context,
    get_request_meta,
)
from hrms.api.v1.dependencies.core import (
    get_audit_recorder,
    get_hierarchy_resolver,
    get_pipeline,
    get_workflow,
)
from hrms.api.v1.dependencies.services import (
    get_audit_log_service,
    get_document_service,
    get_employee_service,
    get_interview_service,
    get_job_application_service,
    get_job_posting_service,
    get_onboarding_task_service,
    get_org_structure_service,
    get_payroll_service,
)

__all__ = [
    "OperationCtx",
    "get_actor",
    "get_audit_log_service",
    "get_audit_recorder",
    "get_document_service",
    "get_employee_service",
    "get_hierarchy_resolver",
    "get_interview_service",
    "get_job_application_service",
    "get_job_posting_service",
    "get_onboarding_task_service",
    "get_operation_context",
    "get_org_structure_service",
    "get_payroll_service",
    "get_pipeline",
    "get_request_meta",
    "get_workflow",
]
