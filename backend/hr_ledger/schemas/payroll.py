from __future__ import annotations

from pydantic import BaseModel, Field


class PostPayrollPayload(BaseModel):
    """Request body for marking a payroll month as posted."""

    month: str = Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")


class PayrollPostResponse(BaseModel):
    """A posted payroll month."""

    month: str
