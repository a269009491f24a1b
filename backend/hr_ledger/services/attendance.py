from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from hr_ledger.exceptions import NotFoundError
from hr_ledger.models.attendance import AttendanceEntry
from hr_ledger.schemas.attendance import AttendanceResponse
from hr_ledger.services import store
from hr_ledger.services.notification import notify

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_ledger.schemas.attendance import RecordAttendancePayload

logger = logging.getLogger(__name__)


def _build_attendance_response(entry: AttendanceEntry) -> AttendanceResponse:
    return AttendanceResponse.model_validate(entry.model_dump())


async def record_attendance(session: AsyncSession, payload: RecordAttendancePayload) -> AttendanceResponse:
    """Store a check-in/out and confirm it to the employee by mail."""
    async with store.unit_of_work(session, f"recording attendance for {payload.employee_id}"):
        employee = await store.get_employee(session, payload.employee_id)
        if employee is None:
            raise NotFoundError(f"Employee {payload.employee_id} not found")
        entry = AttendanceEntry(**payload.model_dump())
        await store.insert(session, entry)
        response = _build_attendance_response(entry)
        employee_name, employee_email = employee.name, employee.email

    logger.info("Attendance %s recorded for %s (%s)", response.id, response.employee_id, response.type)
    notify(
        employee_email,
        f"Attendance Alert: {response.type}",
        f"Hello {employee_name}, your {response.type} at {response.time_str} on {response.date_str} "
        "has been successfully recorded in the system.",
    )
    return response


async def list_attendance(session: AsyncSession, employee_id: str) -> list[AttendanceResponse]:
    """An employee's attendance history, newest first."""
    result = await session.execute(
        select(AttendanceEntry)
        .where(col(AttendanceEntry.employee_id) == employee_id)
        .order_by(col(AttendanceEntry.id).desc())
    )
    return [_build_attendance_response(e) for e in result.scalars().all()]
