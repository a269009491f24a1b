# ruff: noqa: TC003
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class RecordAttendancePayload(BaseModel):
    """Request body for a check-in or check-out."""

    model_config = ConfigDict(populate_by_name=True)

    employee_id: str = Field(alias="employeeId", min_length=1, max_length=50)
    type: str = Field(min_length=1, max_length=50)
    date_str: str = Field(min_length=1, max_length=20)
    time_str: str = Field(min_length=1, max_length=20)
    latitude: Decimal | None = Field(default=None, ge=-90, le=90)
    longitude: Decimal | None = Field(default=None, ge=-180, le=180)


class AttendanceResponse(BaseModel):
    """Response schema for an attendance entry."""

    id: int
    employee_id: str
    type: str
    date_str: str
    time_str: str
    latitude: Decimal | None
    longitude: Decimal | None
    created_at: datetime
