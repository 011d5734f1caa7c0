"""DTOs for departments and positions."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DepartmentCreate:
    name: str
    code: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class DepartmentResult:
    id: str
    name: str
    code: str | None
    description: str | None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def owner_id(self) -> None:
        return None


@dataclass(frozen=True)
class DepartmentFilters:
    search: str | None = None
    is_active: bool | None = None


@dataclass(frozen=True)
class PositionCreate:
    title: str
    department_id: str | None = None


@dataclass(frozen=True)
class PositionResult:
    id: str
    title: str
    department_id: str | None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def owner_id(self) -> None:
        return None


@dataclass(frozen=True)
class PositionFilters:
    department_id: str | None = None
    is_active: bool | None = None
