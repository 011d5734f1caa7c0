"""Job posting API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hrms.domain.enums import EmploymentType, JobPostingStatus
from hrms.schemas.common import PartialUpdate, UtcDatetime


class JobPostingCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    department_id: str = Field(..., min_length=1)
    position_id: str = Field(..., min_length=1)
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    location: str | None = Field(default=None, max_length=200)
    salary_min: float | None = Field(default=None, ge=0)
    salary_max: float | None = Field(default=None, ge=0)
    expires_at: UtcDatetime | None = None


class JobPostingUpdate(PartialUpdate):
    """Request body for updating a posting (partial). Setting status CLOSED stamps closed_at."""

    not_nullable = frozenset(
        {"title", "description", "department_id", "position_id", "employment_type", "status"}
    )

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    department_id: str | None = None
    position_id: str | None = None
    employment_type: EmploymentType | None = None
    location: str | None = Field(default=None, max_length=200)
    salary_min: float | None = Field(default=None, ge=0)
    salary_max: float | None = Field(default=None, ge=0)
    expires_at: UtcDatetime | None = None
    status: JobPostingStatus | None = None


class JobPostingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    department_id: str
    position_id: str
    employment_type: EmploymentType
    status: JobPostingStatus
    location: str | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    expires_at: datetime | None = None
    closed_at: datetime | None = None
    created_by_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class JobPostingDeleteResponse(BaseModel):
    """deleted is True for a physical delete; otherwise the posting was closed and is returned."""

    deleted: bool
    posting: JobPostingResponse | None = None
