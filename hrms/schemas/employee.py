"""Employee API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from hrms.domain.enums import EmployeeStatus, EmploymentType
from hrms.schemas.common import PartialUpdate


class EmployeeCreateRequest(BaseModel):
    """Request body for creating an employee."""

    employee_code: str = Field(..., min_length=1, max_length=32)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    hire_date: date
    department_id: str = Field(..., min_length=1)
    position_id: str = Field(..., min_length=1)
    manager_id: str | None = None
    phone: str | None = Field(default=None, max_length=32)
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    salary: float | None = Field(default=None, ge=0)


class EmployeeUpdate(PartialUpdate):
    """Request body for updating an employee (partial). Termination goes through DELETE."""

    not_nullable = frozenset({
        "first_name",
        "last_name",
        "email",
        "department_id",
        "position_id",
        "employment_type",
        "status",
    })

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=32)
    department_id: str | None = None
    position_id: str | None = None
    manager_id: str | None = None
    employment_type: EmploymentType | None = None
    status: EmployeeStatus | None = None
    salary: float | None = Field(default=None, ge=0)


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    employee_code: str
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    department_id: str
    position_id: str
    manager_id: str | None = None
    status: EmployeeStatus
    employment_type: EmploymentType
    hire_date: date
    termination_date: date | None = None
    salary: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
