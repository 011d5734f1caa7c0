"""Domain enumerations for the HR core.

Roles and per-entity statuses are closed sets. Transition tables and scope
resolution match on them exhaustively, so a new member has to be wired into
every table that mentions its entity.
"""

from enum import Enum


class _ValuesMixin:
    @classmethod
    def values(cls) -> list[str]:
        """Return all member values as strings (e.g. for validation or docs)."""
        return [member.value for member in cls]  # type: ignore[attr-defined]


class Role(_ValuesMixin, str, Enum):
    """Actor role carried in the access token."""

    ADMIN = "ADMIN"
    HR = "HR"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class GovernedEntity(_ValuesMixin, str, Enum):
    """Entity types whose operations run through the access pipeline.

    Values double as the audit record resource_type.
    """

    EMPLOYEE = "employee"
    INTERVIEW = "interview"
    ONBOARDING_TASK = "onboarding_task"
    PAYROLL_RECORD = "payroll_record"
    DOCUMENT = "document"
    JOB_POSTING = "job_posting"


class EmployeeStatus(_ValuesMixin, str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    TERMINATED = "TERMINATED"
    ON_LEAVE = "ON_LEAVE"
    PROBATION = "PROBATION"


class EmploymentType(_ValuesMixin, str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERN = "INTERN"
    CONSULTANT = "CONSULTANT"


class JobPostingStatus(_ValuesMixin, str, Enum):
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    CLOSED = "CLOSED"
    CANCELLED = "CANCELLED"

    @property
    def accepts_interviews(self) -> bool:
        return self in (JobPostingStatus.OPEN, JobPostingStatus.IN_PROGRESS)


class ApplicationStatus(_ValuesMixin, str, Enum):
    APPLIED = "APPLIED"
    UNDER_REVIEW = "UNDER_REVIEW"
    SHORTLISTED = "SHORTLISTED"
    INTERVIEW_SCHEDULED = "INTERVIEW_SCHEDULED"
    OFFERED = "OFFERED"
    HIRED = "HIRED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


class InterviewStatus(_ValuesMixin, str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    RESCHEDULED = "RESCHEDULED"
    NO_SHOW = "NO_SHOW"


class InterviewType(_ValuesMixin, str, Enum):
    PHONE = "PHONE"
    VIDEO = "VIDEO"
    IN_PERSON = "IN_PERSON"
    PANEL = "PANEL"
    TECHNICAL = "TECHNICAL"
    BEHAVIORAL = "BEHAVIORAL"


class OnboardingTaskStatus(_ValuesMixin, str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class PayrollStatus(_ValuesMixin, str, Enum):
    DRAFT = "DRAFT"
    PROCESSED = "PROCESSED"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class PayrollAction(_ValuesMixin, str, Enum):
    """Explicit payroll actions; each one is the only route to its target status."""

    PROCESS = "process"
    PAY = "pay"
    CANCEL = "cancel"


class DocumentType(_ValuesMixin, str, Enum):
    RESUME = "RESUME"
    ID_CARD = "ID_CARD"
    PASSPORT = "PASSPORT"
    DRIVING_LICENSE = "DRIVING_LICENSE"
    EDUCATION_CERTIFICATE = "EDUCATION_CERTIFICATE"
    EXPERIENCE_LETTER = "EXPERIENCE_LETTER"
    SALARY_SLIP = "SALARY_SLIP"
    BANK_STATEMENT = "BANK_STATEMENT"
    CONTRACT = "CONTRACT"
    POLICY = "POLICY"
    OTHER = "OTHER"


class DocumentStatus(_ValuesMixin, str, Enum):
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class AuditAction(_ValuesMixin, str, Enum):
    """Action recorded on an audit log entry."""

    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    DOWNLOAD = "DOWNLOAD"
    VIEW = "VIEW"
    BULK_UPDATE = "BULK_UPDATE"


class ReasonCode(_ValuesMixin, str, Enum):
    """Stable machine-readable rejection reasons returned to API callers."""

    # workflow
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    FEEDBACK_REQUIRED = "FEEDBACK_REQUIRED"
    RATING_REQUIRED = "RATING_REQUIRED"
    CALCULATION_ERROR = "CALCULATION_ERROR"
    OVERLAPPING_PAY_PERIOD = "OVERLAPPING_PAY_PERIOD"
    EMPLOYEE_INACTIVE = "EMPLOYEE_INACTIVE"

    # access
    ACCESS_DENIED = "ACCESS_DENIED"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"

    # referenced records
    EMPLOYEE_NOT_FOUND = "EMPLOYEE_NOT_FOUND"
    DEPARTMENT_NOT_FOUND = "DEPARTMENT_NOT_FOUND"
    POSITION_NOT_FOUND = "POSITION_NOT_FOUND"
    MANAGER_NOT_FOUND = "MANAGER_NOT_FOUND"
    ASSIGNEE_NOT_FOUND = "ASSIGNEE_NOT_FOUND"
    APPLICATION_NOT_FOUND = "APPLICATION_NOT_FOUND"
    JOB_POSTING_NOT_FOUND = "JOB_POSTING_NOT_FOUND"
    TASKS_NOT_FOUND = "TASKS_NOT_FOUND"

    # business rules
    DUPLICATE_EMPLOYEE_ID = "DUPLICATE_EMPLOYEE_ID"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    DUPLICATE_TASK = "DUPLICATE_TASK"
    INVALID_MANAGER = "INVALID_MANAGER"
    ALREADY_TERMINATED = "ALREADY_TERMINATED"
    HAS_ACTIVE_SUBORDINATES = "HAS_ACTIVE_SUBORDINATES"
    INVALID_SALARY_RANGE = "INVALID_SALARY_RANGE"
    INVALID_EXPIRATION_DATE = "INVALID_EXPIRATION_DATE"
    INACTIVE_JOB_POSTING = "INACTIVE_JOB_POSTING"
    JOB_POSTING_EXPIRED = "JOB_POSTING_EXPIRED"
    DUPLICATE_APPLICATION = "DUPLICATE_APPLICATION"
    DUPLICATE_DEPARTMENT_NAME = "DUPLICATE_DEPARTMENT_NAME"
    ALREADY_INACTIVE = "ALREADY_INACTIVE"
    HAS_ACTIVE_EMPLOYEES = "HAS_ACTIVE_EMPLOYEES"
    HAS_ACTIVE_POSITIONS = "HAS_ACTIVE_POSITIONS"
    INVALID_APPLICATION_STATUS = "INVALID_APPLICATION_STATUS"
    INVALID_SCHEDULE_TIME = "INVALID_SCHEDULE_TIME"
    INVALID_INTERVIEWERS = "INVALID_INTERVIEWERS"
    INVALID_DUE_DATE = "INVALID_DUE_DATE"
    ALREADY_CANCELLED = "ALREADY_CANCELLED"
    CANNOT_DELETE_COMPLETED = "CANNOT_DELETE_COMPLETED"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    RECORD_NOT_EDITABLE = "RECORD_NOT_EDITABLE"
