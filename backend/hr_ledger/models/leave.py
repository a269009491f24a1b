# ruff: noqa: TC003
from __future__ import annotations

from datetime import date, datetime

import sqlalchemy as sa
from sqlmodel import Field

from hr_ledger.models.base import AppliedAtMixin, IntIdBase
from hr_ledger.models.enums import RequestStatus


class LeaveRequest(IntIdBase, AppliedAtMixin, table=True):
    """An employee's leave application and its approval state."""

    __tablename__ = "leaves"
    __table_args__ = (sa.Index("ix_leaves_employee_status", "employee_id", "status"),)

    employee_id: str = Field(
        sa_column=sa.Column(
            sa.String(50), sa.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
        ),
    )
    leave_type: str = Field(max_length=50)
    start_date: date
    days: int
    reason: str | None = None
    status: str = Field(
        default=RequestStatus.PENDING, max_length=20, index=True, sa_column_kwargs={"server_default": "Pending"}
    )
    decided_at: datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
