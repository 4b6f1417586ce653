"""Common schemas (errors, confirmation prompts)."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(..., description="Error message")
    code: Optional[str] = Field(None, description="Optional error code")
    extra: Optional[Dict[str, Any]] = Field(None, description="Extra context")


class ImpactOut(BaseModel):
    """What a destructive change would remove; sent with code=requires_confirmation."""

    destructive: bool
    plant_count: int = 0
    cell_count: int = 0
    reason: Optional[str] = None
