"""Application use cases: one service per governed entity, all running through the pipeline."""

from hrms.application.use_cases.audit_logs import AuditLogService
from hrms.application.use_cases.documents import DocumentService
from hrms.application.use_cases.employees import EmployeeService
from hrms.application.use_cases.interviews import InterviewService
from hrms.application.use_cases.job_applications import JobApplicationService
from hrms.application.use_cases.job_postings import JobPostingService
from hrms.application.use_cases.onboarding_tasks import OnboardingTaskService
from hrms.application.use_cases.org_structure import OrgStructureService
from hrms.application.use_cases.payroll import PayrollService
from hrms.application.use_cases.pipeline import AccessScopedPipeline

__all__ = [
    "AccessScopedPipeline",
    "AuditLogService",
    "DocumentService",
    "EmployeeService",
    "InterviewService",
    "JobApplicationService",
    "JobPostingService",
    "OnboardingTaskService",
    "OrgStructureService",
    "PayrollService",
]
