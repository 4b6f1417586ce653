"""Schemas for analytics events."""
from datetime import datetime
from typing import Any, Dict, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

AnalyticsEventType = Literal["plan_created", "grid_saved", "area_typed", "plant_confirmed"]


class AnalyticsEventCreate(BaseModel):
    """Body POST /api/analytics/events. A plan_id must name one of the caller's plans."""

    model_config = {"extra": "forbid"}

    event_type: AnalyticsEventType
    plan_id: Optional[UUID] = None
    attributes: Optional[Dict[str, Any]] = None

    @field_validator("attributes")
    @classmethod
    def attributes_default_empty(cls, v: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return v if v is not None else {}


class AnalyticsEventOut(BaseModel):
    id: UUID
    owner_id: UUID
    plan_id: Optional[UUID] = None
    event_type: str
    attributes: Dict[str, Any]
    created_at: datetime

    model_config = {"from_attributes": True}
