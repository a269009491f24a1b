from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from hr_ledger.exceptions import ConflictError, NotFoundError
from hr_ledger.models.attendance import AttendanceEntry
from hr_ledger.models.employee import Employee
from hr_ledger.models.leave import LeaveRequest
from hr_ledger.models.loan import LoanRequest
from hr_ledger.schemas.employee import EmployeeListResponse, EmployeeResponse
from hr_ledger.services import store
from hr_ledger.services.notification import notify

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_ledger.schemas.employee import CreateEmployeeRequest, UpdateEmployeeRequest

logger = logging.getLogger(__name__)


def _build_employee_response(employee: Employee) -> EmployeeResponse:
    """Map an employee model to its response schema."""
    return EmployeeResponse.model_validate(employee.model_dump())


async def _get_employee_or_404(session: AsyncSession, employee_id: str) -> Employee:
    employee = await store.get_employee(session, employee_id)
    if employee is None:
        raise NotFoundError(f"Employee {employee_id} not found")
    return employee


async def create_employee(session: AsyncSession, payload: CreateEmployeeRequest) -> EmployeeResponse:
    """Create an employee under a caller-assigned id and send a welcome note."""
    async with store.unit_of_work(session, f"creating employee {payload.id}"):
        if await store.get_employee(session, payload.id) is not None:
            raise ConflictError(f"Employee {payload.id} already exists")
        employee = Employee(**payload.model_dump(mode="python"))
        try:
            await store.insert(session, employee)
        except IntegrityError as exc:
            raise ConflictError(f"Employee {payload.id} already exists") from exc
        response = _build_employee_response(employee)

    logger.info("Employee %s created", response.id)
    notify(
        response.email,
        "Your LSAF HR Account Access",
        f"Welcome to the team, {response.name}! Your account has been created.\nLogin ID: {response.id}",
    )
    return response


async def get_employee(session: AsyncSession, employee_id: str) -> EmployeeResponse:
    """Get a single employee."""
    return _build_employee_response(await _get_employee_or_404(session, employee_id))


async def list_employees(session: AsyncSession) -> EmployeeListResponse:
    """List all employees ordered by id."""
    result = await session.execute(
        select(Employee).order_by(col(Employee.id).asc()).execution_options(populate_existing=True)
    )
    items = [_build_employee_response(e) for e in result.scalars().all()]
    return EmployeeListResponse(items=items, total=len(items))


async def update_employee(
    session: AsyncSession,
    employee_id: str,
    payload: UpdateEmployeeRequest,
) -> EmployeeResponse:
    """Apply the fields present in the payload. The id never changes."""
    values = payload.changed_fields()
    async with store.unit_of_work(session, f"updating employee {employee_id}"):
        if values:
            affected = await store.update_where(session, Employee, employee_id, values=values)
            if affected == 0:
                raise NotFoundError(f"Employee {employee_id} not found")
        response = _build_employee_response(await _get_employee_or_404(session, employee_id))

    if values:
        logger.info("Employee %s updated: %s", employee_id, ", ".join(sorted(values)))
    return response


async def delete_employee(session: AsyncSession, employee_id: str) -> None:
    """Delete an employee together with their leave, loan and attendance rows."""
    async with store.unit_of_work(session, f"deleting employee {employee_id}"):
        await _get_employee_or_404(session, employee_id)
        for model in (LeaveRequest, LoanRequest, AttendanceEntry):
            await store.delete_where(session, model, col(model.employee_id) == employee_id)
        await store.delete_where(session, Employee, col(Employee.id) == employee_id)

    logger.info("Employee %s deleted", employee_id)
