# ruff: noqa: TC003
"""Approval workflow for leave and loan requests.

Both request kinds share one state machine: a request is created Pending and
moves exactly once, to Approved or Rejected. The move is a conditional write
(``WHERE status = 'Pending'``), so of two concurrent decisions on the same
request only one can affect a row. Approving leave also subtracts the
requested days from the employee's balance in the same transaction, as an
arithmetic update evaluated by the database.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, NoReturn

from sqlalchemy import select
from sqlmodel import col

from hr_ledger.config import get_settings
from hr_ledger.exceptions import InsufficientBalanceError, InvalidStateError, NotFoundError
from hr_ledger.models.base import MAX_INT_ID
from hr_ledger.models.employee import Employee
from hr_ledger.models.enums import Decision, RequestStatus, balance_column_for
from hr_ledger.models.leave import LeaveRequest
from hr_ledger.models.loan import LoanRequest
from hr_ledger.schemas.leave import AdminLeaveRequestResponse, DecisionResponse, LeaveRequestResponse
from hr_ledger.schemas.loan import AdminLoanRequestResponse, LoanRequestResponse
from hr_ledger.services import store
from hr_ledger.services.notification import notify

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_ledger.schemas.leave import DecisionPayload, SubmitLeavePayload
    from hr_ledger.schemas.loan import SubmitLoanPayload

logger = logging.getLogger(__name__)

RequestModel = type[LeaveRequest] | type[LoanRequest]

_LABELS: dict[type, str] = {LeaveRequest: "Leave request", LoanRequest: "Loan request"}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_leave_response(leave: LeaveRequest) -> LeaveRequestResponse:
    """Map a leave model to its response schema."""
    return LeaveRequestResponse(
        id=leave.id,  # type: ignore[arg-type]
        employee_id=leave.employee_id,
        leave_type=leave.leave_type,
        start_date=leave.start_date,
        days=leave.days,
        reason=leave.reason,
        status=RequestStatus(leave.status),
        applied_at=leave.applied_at,
        decided_at=leave.decided_at,
    )


def _build_loan_response(loan: LoanRequest) -> LoanRequestResponse:
    """Map a loan model to its response schema."""
    return LoanRequestResponse(
        id=loan.id,  # type: ignore[arg-type]
        employee_id=loan.employee_id,
        amount=loan.amount,
        reason=loan.reason,
        status=RequestStatus(loan.status),
        applied_at=loan.applied_at,
        decided_at=loan.decided_at,
    )


async def _require_employee(session: AsyncSession, employee_id: str) -> Employee:
    employee = await store.get_employee(session, employee_id)
    if employee is None:
        raise NotFoundError(f"Employee {employee_id} not found")
    return employee


def _check_request_id(model: RequestModel, request_id: int) -> None:
    """Ids the store can never have assigned are simply not found."""
    if not 0 < request_id <= MAX_INT_ID:
        raise NotFoundError(f"{_LABELS[model]} {request_id} not found")


async def _load_request(session: AsyncSession, model: RequestModel, request_id: int) -> LeaveRequest | LoanRequest:
    """Fetch a request by id. Raises 404 if not found."""
    _check_request_id(model, request_id)
    result = await session.execute(
        select(model).where(col(model.id) == request_id).execution_options(populate_existing=True)
    )
    request = result.scalar_one_or_none()
    if request is None:
        raise NotFoundError(f"{_LABELS[model]} {request_id} not found")
    return request


async def _raise_not_pending(session: AsyncSession, model: RequestModel, request_id: int) -> NoReturn:
    """Explain why a conditional transition touched no row."""
    result = await session.execute(select(model.status).where(col(model.id) == request_id))
    current = result.scalar_one_or_none()
    if current is None:
        raise NotFoundError(f"{_LABELS[model]} {request_id} not found")
    raise InvalidStateError(f"{_LABELS[model]} {request_id} is already {current}")


async def _transition(
    session: AsyncSession,
    model: RequestModel,
    request_id: int,
    decision: Decision,
    decided_at: datetime,
) -> None:
    """Move a request out of Pending, or fail without writing anything."""
    _check_request_id(model, request_id)
    affected = await store.update_where(
        session,
        model,
        request_id,
        col(model.status) == RequestStatus.PENDING.value,
        values={"status": decision.value, "decided_at": decided_at},
    )
    if affected == 0:
        await _raise_not_pending(session, model, request_id)


# ---------------------------------------------------------------------------
# Leave requests
# ---------------------------------------------------------------------------


async def submit_leave_request(session: AsyncSession, payload: SubmitLeavePayload) -> LeaveRequestResponse:
    """Record a leave application as Pending. Balances are not checked or touched here."""
    async with store.unit_of_work(session, "submitting leave request"):
        employee = await _require_employee(session, payload.employee_id)
        leave = LeaveRequest(
            employee_id=payload.employee_id,
            leave_type=payload.leave_type.value,
            start_date=payload.start_date,
            days=payload.days,
            reason=payload.reason,
            status=RequestStatus.PENDING.value,
        )
        await store.insert(session, leave)
        response = _build_leave_response(leave)
        employee_name, employee_email = employee.name, employee.email

    logger.info(
        "Leave request %s submitted: employee=%s type=%s days=%d",
        response.id,
        response.employee_id,
        response.leave_type,
        response.days,
    )
    start = response.start_date.isoformat()
    notify(
        employee_email,
        "Leave Application Received",
        f"Dear {employee_name}, your {response.leave_type} request for {response.days} day(s) "
        f"starting {start} has been received and is pending review.",
    )
    notify(
        get_settings().admin_email,
        f"New Leave Request: {response.employee_id}",
        f"Employee {response.employee_id} ({employee_name}) has applied for {response.days} day(s) "
        f"of {response.leave_type} starting {start}.\nReason: {response.reason or '-'}",
    )
    return response


async def decide_leave_request(
    session: AsyncSession,
    request_id: int,
    payload: DecisionPayload,
) -> DecisionResponse:
    """Approve or reject a pending leave request.

    On approval the matching balance column is reduced by the requested days
    in the same transaction as the status change. With a configured floor,
    an approval that would cross it is refused and nothing is written.
    """
    floor = get_settings().leave_balance_floor
    decision = payload.status
    remaining: int | None = None

    async with store.unit_of_work(session, f"deciding leave request {request_id}"):
        await _transition(session, LeaveRequest, request_id, decision, datetime.now(UTC))
        leave = _build_leave_response(await _load_request(session, LeaveRequest, request_id))  # type: ignore[arg-type]
        column = balance_column_for(leave.leave_type)

        if decision is Decision.APPROVED:
            affected = await store.decrement_column(
                session, Employee, leave.employee_id, column.value, leave.days, floor=floor
            )
            if affected == 0:
                await _require_employee(session, leave.employee_id)
                raise InsufficientBalanceError(
                    f"Approving {leave.days} day(s) would take {column.value} of employee "
                    f"{leave.employee_id} below {floor}"
                )

        employee = await store.get_employee(session, leave.employee_id)
        if employee is not None and decision is Decision.APPROVED:
            remaining = getattr(employee, column.value)
        employee_name = employee.name if employee else leave.employee_id
        employee_email = employee.email if employee else None

    if decision is Decision.APPROVED:
        logger.info(
            "Leave request %s approved: %s of employee %s reduced by %d to %s",
            request_id,
            column.value,
            leave.employee_id,
            leave.days,
            remaining,
        )
    else:
        logger.info("Leave request %s rejected", request_id)

    body = f"Dear {employee_name}, your {leave.leave_type} request for {leave.days} day(s) has been {decision.value}."
    if remaining is not None:
        body += f" Remaining balance: {remaining} day(s)."
    notify(employee_email, "Leave Application Update", body)

    return DecisionResponse(id=request_id, status=RequestStatus(decision.value), remaining_balance=remaining)


async def get_leave_request(session: AsyncSession, request_id: int) -> LeaveRequestResponse:
    """Get a single leave request by id."""
    leave = await _load_request(session, LeaveRequest, request_id)
    return _build_leave_response(leave)  # type: ignore[arg-type]


async def list_leave_requests(session: AsyncSession, employee_id: str) -> list[LeaveRequestResponse]:
    """An employee's leave requests, newest first."""
    result = await session.execute(
        select(LeaveRequest)
        .where(col(LeaveRequest.employee_id) == employee_id)
        .order_by(col(LeaveRequest.applied_at).desc(), col(LeaveRequest.id).desc())
        .execution_options(populate_existing=True)
    )
    return [_build_leave_response(leave) for leave in result.scalars().all()]


async def list_all_leave_requests(session: AsyncSession) -> list[AdminLeaveRequestResponse]:
    """Every leave request with the applicant's name and current balances, newest first."""
    result = await session.execute(
        select(LeaveRequest, Employee.name, Employee.leave_annual, Employee.leave_casual)
        .join(Employee, col(Employee.id) == col(LeaveRequest.employee_id))
        .order_by(col(LeaveRequest.applied_at).desc(), col(LeaveRequest.id).desc())
        .execution_options(populate_existing=True)
    )
    return [
        AdminLeaveRequestResponse(
            **_build_leave_response(leave).model_dump(),
            employee_name=name,
            leave_annual=leave_annual,
            leave_casual=leave_casual,
        )
        for leave, name, leave_annual, leave_casual in result.all()
    ]


# ---------------------------------------------------------------------------
# Loan requests
# ---------------------------------------------------------------------------


async def submit_loan_request(session: AsyncSession, payload: SubmitLoanPayload) -> LoanRequestResponse:
    """Record a loan application as Pending."""
    async with store.unit_of_work(session, "submitting loan request"):
        employee = await _require_employee(session, payload.employee_id)
        loan = LoanRequest(
            employee_id=payload.employee_id,
            amount=payload.amount,
            reason=payload.reason,
            status=RequestStatus.PENDING.value,
        )
        await store.insert(session, loan)
        response = _build_loan_response(loan)
        employee_name, employee_email = employee.name, employee.email

    logger.info(
        "Loan request %s submitted: employee=%s amount=%s", response.id, response.employee_id, response.amount
    )
    notify(
        get_settings().admin_email,
        f"New Loan Request: {response.employee_id}",
        f"Employee {response.employee_id} ({employee_name}) has requested a loan of Rs. {response.amount}.\n"
        f"Reason: {response.reason or '-'}",
    )
    notify(
        employee_email,
        "Loan Application Received",
        f"Dear {employee_name}, your loan request for Rs. {response.amount} has been received "
        "and is pending review.",
    )
    return response


async def decide_loan_request(
    session: AsyncSession,
    request_id: int,
    payload: DecisionPayload,
) -> DecisionResponse:
    """Approve or reject a pending loan request. No balance is affected."""
    decision = payload.status

    async with store.unit_of_work(session, f"deciding loan request {request_id}"):
        await _transition(session, LoanRequest, request_id, decision, datetime.now(UTC))
        loan = _build_loan_response(await _load_request(session, LoanRequest, request_id))  # type: ignore[arg-type]
        employee = await store.get_employee(session, loan.employee_id)
        employee_name = employee.name if employee else loan.employee_id
        employee_email = employee.email if employee else None

    logger.info("Loan request %s %s", request_id, decision.value.lower())
    notify(
        employee_email,
        "Loan Application Update",
        f"Dear {employee_name}, your loan request for Rs. {loan.amount} has been {decision.value}.",
    )
    return DecisionResponse(id=request_id, status=RequestStatus(decision.value))


async def get_loan_request(session: AsyncSession, request_id: int) -> LoanRequestResponse:
    """Get a single loan request by id."""
    loan = await _load_request(session, LoanRequest, request_id)
    return _build_loan_response(loan)  # type: ignore[arg-type]


async def list_loan_requests(session: AsyncSession, employee_id: str) -> list[LoanRequestResponse]:
    """An employee's loan requests, newest first."""
    result = await session.execute(
        select(LoanRequest)
        .where(col(LoanRequest.employee_id) == employee_id)
        .order_by(col(LoanRequest.applied_at).desc(), col(LoanRequest.id).desc())
        .execution_options(populate_existing=True)
    )
    return [_build_loan_response(loan) for loan in result.scalars().all()]


async def list_all_loan_requests(session: AsyncSession) -> list[AdminLoanRequestResponse]:
    """Every loan request with the applicant's name, newest first."""
    result = await session.execute(
        select(LoanRequest, Employee.name)
        .join(Employee, col(Employee.id) == col(LoanRequest.employee_id))
        .order_by(col(LoanRequest.applied_at).desc(), col(LoanRequest.id).desc())
        .execution_options(populate_existing=True)
    )
    return [
        AdminLoanRequestResponse(**_build_loan_response(loan).model_dump(), employee_name=name)
        for loan, name in result.all()
    ]
