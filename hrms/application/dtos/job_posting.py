"""DTOs for job postings and applications."""

from dataclasses import dataclass
from datetime import datetime

from hrms.domain.enums import ApplicationStatus, EmploymentType, JobPostingStatus


@dataclass(frozen=True)
class JobPostingCreate:
    title: str
    description: str
    department_id: str
    position_id: str
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    location: str | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    expires_at: datetime | None = None
    status: JobPostingStatus = JobPostingStatus.OPEN
    created_by_id: str | None = None


@dataclass(frozen=True)
class JobPostingResult:
    id: str
    title: str
    description: str
    department_id: str
    position_id: str
    employment_type: EmploymentType
    status: JobPostingStatus
    location: str | None
    salary_min: float | None
    salary_max: float | None
    expires_at: datetime | None
    closed_at: datetime | None
    created_by_id: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def owner_id(self) -> None:
        return None


@dataclass(frozen=True)
class JobPostingFilters:
    search: str | None = None
    status: JobPostingStatus | None = None
    department_id: str | None = None
    employment_type: EmploymentType | None = None


@dataclass(frozen=True)
class JobApplicationResult:
    id: str
    job_posting_id: str
    candidate_name: str
    candidate_email: str
    status: ApplicationStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def owner_id(self) -> None:
        return None


@dataclass(frozen=True)
class JobApplicationCreate:
    job_posting_id: str
    candidate_name: str
    candidate_email: str
    status: ApplicationStatus = ApplicationStatus.APPLIED


@dataclass(frozen=True)
class JobApplicationFilters:
    job_posting_id: str | None = None
    status: ApplicationStatus | None = None
    search: str | None = None
