# ruff: noqa: TC001, TC003
from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hr_ledger.models.enums import Decision, LeaveType, RequestStatus

# One leave application covers at most a year.
MAX_LEAVE_DAYS = 366

# Spelling used by older clients.
_LEGACY_LEAVE_TYPES = {"Annual Leave": LeaveType.ANNUAL}

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class SubmitLeavePayload(BaseModel):
    """Request body for applying for leave. Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(populate_by_name=True)

    employee_id: str = Field(alias="employeeId", min_length=1, max_length=50)
    leave_type: LeaveType = Field(alias="type")
    start_date: date = Field(alias="startDate")
    days: int = Field(gt=0, le=MAX_LEAVE_DAYS)
    reason: str | None = Field(default=None, max_length=2000)

    @field_validator("leave_type", mode="before")
    @classmethod
    def _normalize_legacy_type(cls, value: Any) -> Any:
        return _LEGACY_LEAVE_TYPES.get(value, value) if isinstance(value, str) else value


class DecisionPayload(BaseModel):
    """Request body for an administrator's decision."""

    status: Decision


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class LeaveRequestResponse(BaseModel):
    """Response schema for a single leave request."""

    id: int
    employee_id: str
    leave_type: str
    start_date: date
    days: int
    reason: str | None
    status: RequestStatus
    applied_at: datetime
    decided_at: datetime | None


class AdminLeaveRequestResponse(LeaveRequestResponse):
    """Leave request with the applicant's name and current balances."""

    employee_name: str
    leave_annual: int
    leave_casual: int


class DecisionResponse(BaseModel):
    """Outcome of a decision. remaining_balance is set for approved leave."""

    success: bool = True
    id: int
    status: RequestStatus
    remaining_balance: int | None = None
