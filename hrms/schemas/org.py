"""Department and position API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hrms.schemas.common import PartialUpdate


class DepartmentCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    code: str | None = Field(default=None, max_length=32)
    description: str | None = Field(default=None, max_length=500)


class DepartmentUpdate(PartialUpdate):
    """Deactivating through is_active=false applies the same checks as DELETE."""

    not_nullable = frozenset({"name", "is_active"})

    name: str | None = Field(default=None, min_length=1, max_length=100)
    code: str | None = Field(default=None, max_length=32)
    description: str | None = Field(default=None, max_length=500)
    is_active: bool | None = None


class DepartmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    code: str | None = None
    description: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PositionCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    department_id: str | None = None


class PositionUpdate(PartialUpdate):
    not_nullable = frozenset({"title", "is_active"})

    title: str | None = Field(default=None, min_length=1, max_length=100)
    department_id: str | None = None
    is_active: bool | None = None


class PositionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    department_id: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
