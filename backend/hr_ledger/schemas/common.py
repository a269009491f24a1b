from __future__ import annotations

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Acknowledgment for writes that return no record."""

    success: bool = True
