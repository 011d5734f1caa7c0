"""Job application API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from hrms.domain.enums import ApplicationStatus


class JobApplicationCreateRequest(BaseModel):
    job_posting_id: str = Field(..., min_length=1)
    candidate_name: str = Field(..., min_length=1, max_length=200)
    candidate_email: EmailStr


class JobApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class JobApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_posting_id: str
    candidate_name: str
    candidate_email: str
    status: ApplicationStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
