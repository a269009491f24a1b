from __future__ import annotations

from fastapi import APIRouter, status

from hr_ledger.api.deps import AuthDep
from hr_ledger.db import SessionDep
from hr_ledger.schemas.attendance import AttendanceResponse, RecordAttendancePayload
from hr_ledger.services import attendance as attendance_service

attendance_router = APIRouter(prefix="/attendance", tags=["attendance"])


@attendance_router.post("", response_model=AttendanceResponse, status_code=status.HTTP_201_CREATED)
async def record_attendance(
    payload: RecordAttendancePayload,
    session: SessionDep,
    auth: AuthDep,
) -> AttendanceResponse:
    """Record a check-in or check-out."""
    return await attendance_service.record_attendance(session, payload)


@attendance_router.get("/{employee_id}", response_model=list[AttendanceResponse])
async def list_attendance(
    employee_id: str,
    session: SessionDep,
    auth: AuthDep,
) -> list[AttendanceResponse]:
    """An employee's attendance history, newest first."""
    return await attendance_service.list_attendance(session, employee_id)
