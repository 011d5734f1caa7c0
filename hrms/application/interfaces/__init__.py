"""Application interfaces (ports): repository, service and storage protocols.

No runtime imports from hrms.infrastructure or hrms.api.
"""

from hrms.application.interfaces.repositories import (
    IAuditLogRepository,
    IDepartmentRepository,
    IDocumentRepository,
    IEmployeeRepository,
    IInterviewRepository,
    IJobApplicationRepository,
    IJobPostingRepository,
    IOnboardingTaskRepository,
    IOrgHierarchyRepository,
    IOrgReferenceRepository,
    IPayrollRepository,
    IPositionRepository,
    IUserAccountRepository,
)
from hrms.application.interfaces.services import AfterCommit, ICascadeEventPublisher
from hrms.application.interfaces.storage import IDocumentStorage

__all__ = [
    "AfterCommit",
    "IAuditLogRepository",
    "ICascadeEventPublisher",
    "IDepartmentRepository",
    "IDocumentRepository",
    "IDocumentStorage",
    "IEmployeeRepository",
    "IInterviewRepository",
    "IJobApplicationRepository",
    "IJobPostingRepository",
    "IOnboardingTaskRepository",
    "IOrgHierarchyRepository",
    "IOrgReferenceRepository",
    "IPayrollRepository",
    "IPositionRepository",
    "IUserAccountRepository",
]
