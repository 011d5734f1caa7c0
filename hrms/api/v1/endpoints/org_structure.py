"""Department and position API. DELETE deactivates."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from hrms.api.v1.dependencies import OperationCtx, get_org_structure_service
from hrms.application.dtos.org import (
    DepartmentCreate,
    DepartmentFilters,
    PositionCreate,
    PositionFilters,
)
from hrms.application.use_cases import OrgStructureService
from hrms.core.limiter import limit_writes
from hrms.schemas.common import PageResponse, to_page_response
from hrms.schemas.org import (
    DepartmentCreateRequest,
    DepartmentResponse,
    DepartmentUpdate,
    PositionCreateRequest,
    PositionResponse,
    PositionUpdate,
)

departments = APIRouter()
positions = APIRouter()

OrgSvc = Annotated[OrgStructureService, Depends(get_org_structure_service)]


@departments.get("", response_model=PageResponse[DepartmentResponse])
async def list_departments(
    ctx: OperationCtx,
    svc: OrgSvc,
    page: int = 1,
    limit: int = 20,
    search: str | None = None,
    is_active: bool | None = None,
):
    filters = DepartmentFilters(search=search, is_active=is_active)
    return to_page_response(await svc.list_departments(ctx, filters, page, limit), DepartmentResponse)


@departments.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(department_id: str, ctx: OperationCtx, svc: OrgSvc):
    return await svc.get_department(ctx, department_id)


@departments.post("", response_model=DepartmentResponse, status_code=201)
@limit_writes
async def create_department(
    request: Request, body: DepartmentCreateRequest, ctx: OperationCtx, svc: OrgSvc
):
    data = DepartmentCreate(
        name=body.name.strip(), code=body.code, description=body.description
    )
    return await svc.create_department(ctx, data)


@departments.patch("/{department_id}", response_model=DepartmentResponse)
@limit_writes
async def update_department(
    request: Request,
    department_id: str,
    body: DepartmentUpdate,
    ctx: OperationCtx,
    svc: OrgSvc,
):
    return await svc.update_department(ctx, department_id, body.model_dump(exclude_unset=True))


@departments.delete("/{department_id}", response_model=DepartmentResponse)
@limit_writes
async def deactivate_department(
    request: Request, department_id: str, ctx: OperationCtx, svc: OrgSvc
):
    return await svc.deactivate_department(ctx, department_id)


@positions.get("", response_model=PageResponse[PositionResponse])
async def list_positions(
    ctx: OperationCtx,
    svc: OrgSvc,
    page: int = 1,
    limit: int = 20,
    department_id: str | None = None,
    is_active: bool | None = None,
):
    filters = PositionFilters(department_id=department_id, is_active=is_active)
    return to_page_response(await svc.list_positions(ctx, filters, page, limit), PositionResponse)


@positions.get("/{position_id}", response_model=PositionResponse)
async def get_position(position_id: str, ctx: OperationCtx, svc: OrgSvc):
    return await svc.get_position(ctx, position_id)


@positions.post("", response_model=PositionResponse, status_code=201)
@limit_writes
async def create_position(
    request: Request, body: PositionCreateRequest, ctx: OperationCtx, svc: OrgSvc
):
    data = PositionCreate(title=body.title.strip(), department_id=body.department_id)
    return await svc.create_position(ctx, data)


@positions.patch("/{position_id}", response_model=PositionResponse)
@limit_writes
async def update_position(
    request: Request,
    position_id: str,
    body: PositionUpdate,
    ctx: OperationCtx,
    svc: OrgSvc,
):
    return await svc.update_position(ctx, position_id, body.model_dump(exclude_unset=True))


@positions.delete("/{position_id}", response_model=PositionResponse)
@limit_writes
async def deactivate_position(request: Request, position_id: str, ctx: OperationCtx, svc: OrgSvc):
    return await svc.deactivate_position(ctx, position_id)
