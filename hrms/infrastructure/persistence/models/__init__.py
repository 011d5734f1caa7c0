"""Persistence models: ORM entities and mixins."""

from hrms.infrastructure.persistence.models.audit_log import AuditLog
from hrms.infrastructure.persistence.models.department import Department, Position
from hrms.infrastructure.persistence.models.document import Document
from hrms.infrastructure.persistence.models.employee import Employee
from hrms.infrastructure.persistence.models.interview import Interview
from hrms.infrastructure.persistence.models.job_posting import JobApplication, JobPosting
from hrms.infrastructure.persistence.models.mixins import EntityModel
from hrms.infrastructure.persistence.models.onboarding_task import OnboardingTask
from hrms.infrastructure.persistence.models.payroll_record import PayrollRecord
from hrms.infrastructure.persistence.models.user_account import UserAccount

__all__ = [
    "AuditLog",
    "Department",
    "Document",
    "Employee",
    "EntityModel",
    "Interview",
    "JobApplication",
    "JobPosting",
    "OnboardingTask",
    "PayrollRecord",
    "Position",
    "UserAccount",
]
