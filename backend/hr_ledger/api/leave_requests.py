from __future__ import annotations

from fastapi import APIRouter, status

from hr_ledger.api.deps import AdminDep, AuthDep
from hr_ledger.db import SessionDep
from hr_ledger.schemas.leave import (
    AdminLeaveRequestResponse,
    DecisionPayload,
    DecisionResponse,
    LeaveRequestResponse,
    SubmitLeavePayload,
)
from hr_ledger.services import ledger

leave_requests_router = APIRouter(prefix="/leave-requests", tags=["leave-requests"])
admin_leave_requests_router = APIRouter(prefix="/admin/leave-requests", tags=["admin"])


@leave_requests_router.post("", response_model=LeaveRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_leave_request(
    payload: SubmitLeavePayload,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveRequestResponse:
    """Apply for leave. The request starts Pending."""
    return await ledger.submit_leave_request(session, payload)


@leave_requests_router.get("/detail/{request_id}", response_model=LeaveRequestResponse)
async def get_leave_request(
    request_id: int,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveRequestResponse:
    """Get a single leave request."""
    return await ledger.get_leave_request(session, request_id)


@leave_requests_router.get("/{employee_id}", response_model=list[LeaveRequestResponse])
async def list_leave_requests(
    employee_id: str,
    session: SessionDep,
    auth: AuthDep,
) -> list[LeaveRequestResponse]:
    """List an employee's leave requests, newest first."""
    return await ledger.list_leave_requests(session, employee_id)


@leave_requests_router.put("/{request_id}", response_model=DecisionResponse)
async def decide_leave_request(
    request_id: int,
    payload: DecisionPayload,
    session: SessionDep,
    auth: AdminDep,
) -> DecisionResponse:
    """Approve or reject a pending leave request (admin only)."""
    return await ledger.decide_leave_request(session, request_id, payload)


@admin_leave_requests_router.get("", response_model=list[AdminLeaveRequestResponse])
async def list_all_leave_requests(
    session: SessionDep,
    auth: AdminDep,
) -> list[AdminLeaveRequestResponse]:
    """List every leave request with employee names and balances (admin only)."""
    return await ledger.list_all_leave_requests(session)
