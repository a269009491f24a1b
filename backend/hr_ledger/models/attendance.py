# ruff: noqa: TC003
from __future__ import annotations

from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from hr_ledger.models.base import IntIdBase, TimestampMixin


class AttendanceEntry(IntIdBase, TimestampMixin, table=True):
    """A check-in or check-out with the device's reported position."""

    __tablename__ = "attendance"

    employee_id: str = Field(
        sa_column=sa.Column(
            sa.String(50), sa.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
        ),
    )
    type: str = Field(max_length=50)
    date_str: str = Field(max_length=20)
    time_str: str = Field(max_length=20)
    latitude: Decimal | None = Field(default=None, max_digits=10, decimal_places=8)
    longitude: Decimal | None = Field(default=None, max_digits=11, decimal_places=8)
