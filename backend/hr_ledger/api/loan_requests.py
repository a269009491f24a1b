from __future__ import annotations

from fastapi import APIRouter, status

from hr_ledger.api.deps import AdminDep, AuthDep
from hr_ledger.db import SessionDep
from hr_ledger.schemas.leave import DecisionPayload, DecisionResponse
from hr_ledger.schemas.loan import AdminLoanRequestResponse, LoanRequestResponse, SubmitLoanPayload
from hr_ledger.services import ledger

loan_requests_router = APIRouter(prefix="/loan-requests", tags=["loan-requests"])
admin_loan_requests_router = APIRouter(prefix="/admin/loan-requests", tags=["admin"])


@loan_requests_router.post("", response_model=LoanRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_loan_request(
    payload: SubmitLoanPayload,
    session: SessionDep,
    auth: AuthDep,
) -> LoanRequestResponse:
    """Apply for a loan. The request starts Pending."""
    return await ledger.submit_loan_request(session, payload)


@loan_requests_router.get("/detail/{request_id}", response_model=LoanRequestResponse)
async def get_loan_request(
    request_id: int,
    session: SessionDep,
    auth: AuthDep,
) -> LoanRequestResponse:
    """Get a single loan request."""
    return await ledger.get_loan_request(session, request_id)


@loan_requests_router.get("/{employee_id}", response_model=list[LoanRequestResponse])
async def list_loan_requests(
    employee_id: str,
    session: SessionDep,
    auth: AuthDep,
) -> list[LoanRequestResponse]:
    """List an employee's loan requests, newest first."""
    return await ledger.list_loan_requests(session, employee_id)


@loan_requests_router.put("/{request_id}", response_model=DecisionResponse)
async def decide_loan_request(
    request_id: int,
    payload: DecisionPayload,
    session: SessionDep,
    auth: AdminDep,
) -> DecisionResponse:
    """Approve or reject a pending loan request (admin only)."""
    return await ledger.decide_loan_request(session, request_id, payload)


@admin_loan_requests_router.get("", response_model=list[AdminLoanRequestResponse])
async def list_all_loan_requests(
    session: SessionDep,
    auth: AdminDep,
) -> list[AdminLoanRequestResponse]:
    """List every loan request with employee names (admin only)."""
    return await ledger.list_all_loan_requests(session)
