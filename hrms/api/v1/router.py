"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from hrms.api.v1.dependencies.
"""

from fastapi import APIRouter

from hrms.api.v1.endpoints import (
    audit_logs,
    documents,
    employees,
    health,
    interviews,
    job_applications,
    job_postings,
    onboarding_tasks,
    org_structure,
    payroll,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(job_postings.router, prefix="/job-postings", tags=["job-postings"])
api_router.include_router(
    job_applications.router, prefix="/job-applications", tags=["job-applications"]
)
api_router.include_router(org_structure.departments, prefix="/departments", tags=["departments"])
api_router.include_router(org_structure.positions, prefix="/positions", tags=["positions"])
api_router.include_router(interviews.router, prefix="/interviews", tags=["interviews"])
api_router.include_router(
    onboarding_tasks.router, prefix="/onboarding-tasks", tags=["onboarding-tasks"]
)
api_router.include_router(payroll.router, prefix="/payroll", tags=["payroll"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["audit-logs"])
