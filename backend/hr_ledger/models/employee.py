from __future__ import annotations

from decimal import Decimal

from sqlmodel import Field, SQLModel

from hr_ledger.models.enums import EmployeeRole

_MONEY = {"max_digits": 15, "decimal_places": 2}


class Employee(SQLModel, table=True):
    """Staff record. Leave balances are decremented by leave approvals."""

    __tablename__ = "employees"

    id: str = Field(primary_key=True, max_length=50)
    name: str = Field(max_length=255)
    email: str | None = Field(default=None, max_length=255)
    role: str = Field(default=EmployeeRole.EMPLOYEE, max_length=50, sa_column_kwargs={"server_default": "employee"})

    leave_annual: int = Field(default=14, sa_column_kwargs={"server_default": "14"})
    leave_casual: int = Field(default=10, sa_column_kwargs={"server_default": "10"})

    # Payroll matrix, stored and returned as-is.
    basic_salary: Decimal = Field(default=Decimal(0), **_MONEY)
    invigilation: Decimal = Field(default=Decimal(0), **_MONEY)
    t_payment: Decimal = Field(default=Decimal(0), **_MONEY)
    increment: Decimal = Field(default=Decimal(0), **_MONEY)
    eidi: Decimal = Field(default=Decimal(0), **_MONEY)
    tax: Decimal = Field(default=Decimal(0), **_MONEY)
    loan_deduction: Decimal = Field(default=Decimal(0), **_MONEY)
    insurance: Decimal = Field(default=Decimal(0), **_MONEY)
    others_deduction: Decimal = Field(default=Decimal(0), **_MONEY)
    extra_leaves_deduction: Decimal = Field(default=Decimal(0), **_MONEY)
    loan_opening_balance: Decimal = Field(default=Decimal(0), **_MONEY)
