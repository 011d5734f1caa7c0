"""SQL repositories implementing the application ports."""

from hrms.infrastructure.persistence.repositories.audit_log_repo import AuditLogRepository
from hrms.infrastructure.persistence.repositories.document_repo import DocumentRepository
from hrms.infrastructure.persistence.repositories.employee_repo import EmployeeRepository
from hrms.infrastructure.persistence.repositories.interview_repo import InterviewRepository
from hrms.infrastructure.persistence.repositories.job_posting_repo import (
    JobApplicationRepository,
    JobPostingRepository,
)
from hrms.infrastructure.persistence.repositories.onboarding_task_repo import (
    OnboardingTaskRepository,
)
from hrms.infrastructure.persistence.repositories.org_repo import (
    DepartmentRepository,
    OrgReferenceRepository,
    PositionRepository,
    UserAccountRepository,
)
from hrms.infrastructure.persistence.repositories.payroll_repo import PayrollRepository

__all__ = [
    "AuditLogRepository",
    "DepartmentRepository",
    "DocumentRepository",
    "EmployeeRepository",
    "InterviewRepository",
    "JobApplicationRepository",
    "JobPostingRepository",
    "OnboardingTaskRepository",
    "OrgReferenceRepository",
    "PayrollRepository",
    "PositionRepository",
    "UserAccountRepository",
]
