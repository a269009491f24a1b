# ruff: noqa: TC003
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from hr_ledger.models.enums import EmployeeRole

# Leave balances are stored in 32-bit INTEGER columns.
_BALANCE = {"ge": -(2**31), "le": 2**31 - 1}


class PayrollFields(BaseModel):
    """Payroll matrix columns."""

    basic_salary: Decimal = Field(default=Decimal(0), max_digits=15, decimal_places=2)
    invigilation: Decimal = Field(default=Decimal(0), max_digits=15, decimal_places=2)
    t_payment: Decimal = Field(default=Decimal(0), max_digits=15, decimal_places=2)
    increment: Decimal = Field(default=Decimal(0), max_digits=15, decimal_places=2)
    eidi: Decimal = Field(default=Decimal(0), max_digits=15, decimal_places=2)
    tax: Decimal = Field(default=Decimal(0), max_digits=15, decimal_places=2)
    loan_deduction: Decimal = Field(default=Decimal(0), max_digits=15, decimal_places=2)
    insurance: Decimal = Field(default=Decimal(0), max_digits=15, decimal_places=2)
    others_deduction: Decimal = Field(default=Decimal(0), max_digits=15, decimal_places=2)
    extra_leaves_deduction: Decimal = Field(default=Decimal(0), max_digits=15, decimal_places=2)
    loan_opening_balance: Decimal = Field(default=Decimal(0), max_digits=15, decimal_places=2)


class CreateEmployeeRequest(PayrollFields):
    """Request body for creating an employee. The id is assigned by the caller."""

    id: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    role: EmployeeRole = EmployeeRole.EMPLOYEE
    leave_annual: int = Field(default=14, **_BALANCE)
    leave_casual: int = Field(default=10, **_BALANCE)


class UpdateEmployeeRequest(BaseModel):
    """Partial update. Only fields present in the body are written; id is ignored."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    role: EmployeeRole | None = None
    leave_annual: int | None = Field(default=None, **_BALANCE)
    leave_casual: int | None = Field(default=None, **_BALANCE)
    basic_salary: Decimal | None = Field(default=None, max_digits=15, decimal_places=2)
    invigilation: Decimal | None = Field(default=None, max_digits=15, decimal_places=2)
    t_payment: Decimal | None = Field(default=None, max_digits=15, decimal_places=2)
    increment: Decimal | None = Field(default=None, max_digits=15, decimal_places=2)
    eidi: Decimal | None = Field(default=None, max_digits=15, decimal_places=2)
    tax: Decimal | None = Field(default=None, max_digits=15, decimal_places=2)
    loan_deduction: Decimal | None = Field(default=None, max_digits=15, decimal_places=2)
    insurance: Decimal | None = Field(default=None, max_digits=15, decimal_places=2)
    others_deduction: Decimal | None = Field(default=None, max_digits=15, decimal_places=2)
    extra_leaves_deduction: Decimal | None = Field(default=None, max_digits=15, decimal_places=2)
    loan_opening_balance: Decimal | None = Field(default=None, max_digits=15, decimal_places=2)

    def changed_fields(self) -> dict[str, object]:
        """Fields explicitly sent by the client, excluding nulls for non-nullable columns."""
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if v is not None or k == "email"}


class EmployeeResponse(PayrollFields):
    """Response schema for an employee."""

    id: str
    name: str
    email: str | None
    role: str
    leave_annual: int
    leave_casual: int


class EmployeeListResponse(BaseModel):
    """List of employees."""

    items: list[EmployeeResponse]
    total: int
