# ruff: noqa: TC003
from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field

from hr_ledger.models.base import IntIdBase, _now_utc


class PayrollPost(IntIdBase, table=True):
    """Marks a payroll month as posted."""

    __tablename__ = "payroll_posts"

    month_year: str = Field(max_length=10, sa_column_kwargs={"unique": True})
    posted_at: datetime = Field(
        default_factory=_now_utc,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )
