from sqlmodel import SQLModel

from hr_ledger.models.attendance import AttendanceEntry
from hr_ledger.models.base import AppliedAtMixin, IntIdBase, TimestampMixin
from hr_ledger.models.employee import Employee
from hr_ledger.models.enums import (
    BalanceColumn,
    Decision,
    EmployeeRole,
    LeaveType,
    RequestStatus,
)
from hr_ledger.models.leave import LeaveRequest
from hr_ledger.models.loan import LoanRequest
from hr_ledger.models.payroll import PayrollPost

__all__ = [
    "AppliedAtMixin",
    "AttendanceEntry",
    "BalanceColumn",
    "Decision",
    "Employee",
    "EmployeeRole",
    "IntIdBase",
    "LeaveRequest",
    "LeaveType",
    "LoanRequest",
    "PayrollPost",
    "RequestStatus",
    "SQLModel",
    "TimestampMixin",
]
