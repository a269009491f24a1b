from __future__ import annotations

import enum


class RequestStatus(enum.StrEnum):
    """State machine shared by leave and loan requests."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Decision(enum.StrEnum):
    """Outcome an administrator may apply to a pending request."""

    APPROVED = "Approved"
    REJECTED = "Rejected"


class LeaveType(enum.StrEnum):
    """Kind of leave requested."""

    ANNUAL = "AnnualLeave"
    CASUAL = "Casual"
    SICK = "Sick"
    OTHER = "Other"


class BalanceColumn(enum.StrEnum):
    """Employee columns holding a leave entitlement."""

    ANNUAL = "leave_annual"
    CASUAL = "leave_casual"


class EmployeeRole(enum.StrEnum):
    """Role recorded on an employee profile."""

    EMPLOYEE = "employee"
    ADMIN = "admin"


def balance_column_for(leave_type: str) -> BalanceColumn:
    """Annual leave draws on the annual balance; everything else on casual."""
    if leave_type == LeaveType.ANNUAL:
        return BalanceColumn.ANNUAL
    return BalanceColumn.CASUAL
