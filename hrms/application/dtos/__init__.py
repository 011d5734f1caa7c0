"""Application DTOs (no ORM dependency)."""

from hrms.application.dtos.audit_log import (
    ActivityCount,
    AuditLogEntryCreate,
    AuditLogFilters,
    AuditLogResult,
    AuditSummary,
    DailyCount,
    PurgeResult,
)
from hrms.application.dtos.common import Page, PageRequest
from hrms.application.dtos.context import Actor, OperationContext, RequestMeta
from hrms.application.dtos.document import DocumentCreate, DocumentFilters, DocumentResult
from hrms.application.dtos.employee import EmployeeCreate, EmployeeFilters, EmployeeResult
from hrms.application.dtos.interview import InterviewCreate, InterviewFilters, InterviewResult
from hrms.application.dtos.job_posting import (
    JobApplicationCreate,
    JobApplicationFilters,
    JobApplicationResult,
    JobPostingCreate,
    JobPostingFilters,
    JobPostingResult,
)
from hrms.application.dtos.org import (
    DepartmentCreate,
    DepartmentFilters,
    DepartmentResult,
    PositionCreate,
    PositionFilters,
    PositionResult,
)
from hrms.application.dtos.onboarding_task import (
    BulkUpdateResult,
    OnboardingSummary,
    OnboardingTaskCreate,
    OnboardingTaskFilters,
    OnboardingTaskResult,
)
from hrms.application.dtos.payroll import (
    PayrollFilters,
    PayrollRecordCreate,
    PayrollRecordResult,
    PayrollSummary,
    PayTotals,
)

__all__ = [
    "ActivityCount",
    "Actor",
    "AuditLogEntryCreate",
    "AuditLogFilters",
    "AuditLogResult",
    "AuditSummary",
    "BulkUpdateResult",
    "DailyCount",
    "DepartmentCreate",
    "DepartmentFilters",
    "DepartmentResult",
    "DocumentCreate",
    "DocumentFilters",
    "DocumentResult",
    "EmployeeCreate",
    "EmployeeFilters",
    "EmployeeResult",
    "InterviewCreate",
    "InterviewFilters",
    "InterviewResult",
    "JobApplicationCreate",
    "JobApplicationFilters",
    "JobApplicationResult",
    "JobPostingCreate",
    "JobPostingFilters",
    "JobPostingResult",
    "OnboardingSummary",
    "OnboardingTaskCreate",
    "OnboardingTaskFilters",
    "OnboardingTaskResult",
    "OperationContext",
    "Page",
    "PageRequest",
    "PayTotals",
    "PayrollFilters",
    "PayrollRecordCreate",
    "PayrollRecordResult",
    "PayrollSummary",
    "PositionCreate",
    "PositionFilters",
    "PositionResult",
    "PurgeResult",
    "RequestMeta",
]
