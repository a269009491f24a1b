# ruff: noqa: TC001, TC003
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from hr_ledger.models.enums import RequestStatus


class SubmitLoanPayload(BaseModel):
    """Request body for applying for a loan."""

    model_config = ConfigDict(populate_by_name=True)

    employee_id: str = Field(alias="employeeId", min_length=1, max_length=50)
    amount: Decimal = Field(gt=0, max_digits=15, decimal_places=2)
    reason: str | None = Field(default=None, max_length=2000)


class LoanRequestResponse(BaseModel):
    """Response schema for a single loan request."""

    id: int
    employee_id: str
    amount: Decimal
    reason: str | None
    status: RequestStatus
    applied_at: datetime
    decided_at: datetime | None


class AdminLoanRequestResponse(LoanRequestResponse):
    """Loan request with the applicant's name."""

    employee_name: str
