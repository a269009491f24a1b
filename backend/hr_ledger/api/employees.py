from __future__ import annotations

from fastapi import APIRouter, status

from hr_ledger.api.deps import AdminDep, AuthDep
from hr_ledger.db import SessionDep
from hr_ledger.schemas.common import SuccessResponse
from hr_ledger.schemas.employee import (
    CreateEmployeeRequest,
    EmployeeListResponse,
    EmployeeResponse,
    UpdateEmployeeRequest,
)
from hr_ledger.services import employee as employee_service

employees_router = APIRouter(prefix="/employees", tags=["employees"])


@employees_router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: CreateEmployeeRequest,
    session: SessionDep,
    auth: AdminDep,
) -> EmployeeResponse:
    """Create an employee (admin only)."""
    return await employee_service.create_employee(session, payload)


@employees_router.get("", response_model=EmployeeListResponse)
async def list_employees(
    session: SessionDep,
    auth: AuthDep,
) -> EmployeeListResponse:
    """List all employees."""
    return await employee_service.list_employees(session)


@employees_router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: str,
    session: SessionDep,
    auth: AuthDep,
) -> EmployeeResponse:
    """Get a single employee."""
    return await employee_service.get_employee(session, employee_id)


@employees_router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: str,
    payload: UpdateEmployeeRequest,
    session: SessionDep,
    auth: AdminDep,
) -> EmployeeResponse:
    """Update profile, balance or payroll fields (admin only)."""
    return await employee_service.update_employee(session, employee_id, payload)


@employees_router.delete("/{employee_id}", response_model=SuccessResponse)
async def delete_employee(
    employee_id: str,
    session: SessionDep,
    auth: AdminDep,
) -> SuccessResponse:
    """Delete an employee and their dependent records (admin only)."""
    await employee_service.delete_employee(session, employee_id)
    return SuccessResponse()
