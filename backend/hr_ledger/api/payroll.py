from __future__ import annotations

from fastapi import APIRouter, Path, status

from hr_ledger.api.deps import AdminDep, AuthDep
from hr_ledger.db import SessionDep
from hr_ledger.schemas.common import SuccessResponse
from hr_ledger.schemas.payroll import PayrollPostResponse, PostPayrollPayload
from hr_ledger.services import payroll as payroll_service

payroll_router = APIRouter(prefix="/payroll-posts", tags=["payroll"])


@payroll_router.get("", response_model=list[str])
async def list_posted_months(
    session: SessionDep,
    auth: AuthDep,
) -> list[str]:
    """Months whose payroll has been posted."""
    return await payroll_service.list_posted_months(session)


@payroll_router.post("", response_model=PayrollPostResponse, status_code=status.HTTP_201_CREATED)
async def post_payroll(
    payload: PostPayrollPayload,
    session: SessionDep,
    auth: AdminDep,
) -> PayrollPostResponse:
    """Mark a payroll month as posted (admin only)."""
    month = await payroll_service.post_payroll(session, payload.month)
    return PayrollPostResponse(month=month)


@payroll_router.delete("/{month}", response_model=SuccessResponse)
async def unpost_payroll(
    session: SessionDep,
    auth: AdminDep,
    month: str = Path(max_length=10),
) -> SuccessResponse:
    """Clear a month's posted flag (admin only)."""
    await payroll_service.unpost_payroll(session, month)
    return SuccessResponse()
