"""DTOs for employees and the reference data they point at."""

from dataclasses import dataclass
from datetime import date, datetime

from hrms.domain.enums import EmployeeStatus, EmploymentType


@dataclass(frozen=True)
class EmployeeCreate:
    employee_code: str
    first_name: str
    last_name: str
    email: str
    hire_date: date
    department_id: str
    position_id: str
    manager_id: str | None = None
    phone: str | None = None
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    salary: float | None = None


@dataclass(frozen=True)
class EmployeeResult:
    """Employee read-model. The employee is its own owner for scope checks."""

    id: str
    employee_code: str
    first_name: str
    last_name: str
    email: str
    phone: str | None
    department_id: str
    position_id: str
    manager_id: str | None
    status: EmployeeStatus
    employment_type: EmploymentType
    hire_date: date
    termination_date: date | None
    salary: float | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def owner_id(self) -> str:
        return self.id

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self) -> bool:
        return self.status is EmployeeStatus.ACTIVE


@dataclass(frozen=True)
class EmployeeFilters:
    search: str | None = None
    status: EmployeeStatus | None = None
    department_id: str | None = None
    manager_id: str | None = None
    employment_type: EmploymentType | None = None
