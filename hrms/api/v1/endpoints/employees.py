"""Employee API: thin routes delegating to EmployeeService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from hrms.api.v1.dependencies import OperationCtx, get_employee_service
from hrms.application.dtos.employee import EmployeeCreate, EmployeeFilters
from hrms.application.use_cases import EmployeeService
from hrms.core.limiter import limit_writes
from hrms.domain.enums import EmployeeStatus, EmploymentType
from hrms.schemas.common import PageResponse, to_page_response
from hrms.schemas.employee import EmployeeCreateRequest, EmployeeResponse, EmployeeUpdate

router = APIRouter()

EmployeeSvc = Annotated[EmployeeService, Depends(get_employee_service)]


@router.get("", response_model=PageResponse[EmployeeResponse])
async def list_employees(
    ctx: OperationCtx,
    svc: EmployeeSvc,
    page: int = 1,
    limit: int = 20,
    search: str | None = Query(None, description="Matches name, email or employee code"),
    status: EmployeeStatus | None = None,
    department_id: str | None = None,
    manager_id: str | None = None,
    employment_type: EmploymentType | None = None,
):
    """List employees visible to the caller (managers see themselves and direct reports)."""
    filters = EmployeeFilters(
        search=search,
        status=status,
        department_id=department_id,
        manager_id=manager_id,
        employment_type=employment_type,
    )
    result = await svc.list_employees(ctx, filters, page, limit)
    return to_page_response(result, EmployeeResponse)


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(employee_id: str, ctx: OperationCtx, svc: EmployeeSvc):
    return await svc.get_employee(ctx, employee_id)


@router.post("", response_model=EmployeeResponse, status_code=201)
@limit_writes
async def create_employee(
    request: Request,
    body: EmployeeCreateRequest,
    ctx: OperationCtx,
    svc: EmployeeSvc,
):
    return await svc.create_employee(ctx, EmployeeCreate(**body.model_dump()))


@router.patch("/{employee_id}", response_model=EmployeeResponse)
@limit_writes
async def update_employee(
    request: Request,
    employee_id: str,
    body: EmployeeUpdate,
    ctx: OperationCtx,
    svc: EmployeeSvc,
):
    return await svc.update_employee(ctx, employee_id, body.model_dump(exclude_unset=True))


@router.delete("/{employee_id}", response_model=EmployeeResponse)
@limit_writes
async def terminate_employee(
    request: Request,
    employee_id: str,
    ctx: OperationCtx,
    svc: EmployeeSvc,
):
    """Soft delete: the employee is TERMINATED and linked user accounts are deactivated."""
    return await svc.terminate_employee(ctx, employee_id)
