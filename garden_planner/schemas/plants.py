"""Schemas for plant placements."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class PlantPlacementUpsert(BaseModel):
    """Body PUT /api/plans/{id}/plants/{x}/{y}. Scores are 1-5 or null."""

    model_config = {"extra": "forbid"}

    plant_name: str = Field(..., min_length=1, max_length=100)
    sunlight_score: Optional[int] = Field(None, ge=1, le=5)
    humidity_score: Optional[int] = Field(None, ge=1, le=5)
    precip_score: Optional[int] = Field(None, ge=1, le=5)
    temperature_score: Optional[int] = Field(None, ge=1, le=5)
    overall_score: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("plant_name")
    @classmethod
    def plant_name_trimmed(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("plant_name must not be blank")
        return v


class PlantPlacementOut(BaseModel):
    plan_id: UUID
    x: int
    y: int
    plant_name: str
    sunlight_score: Optional[int] = None
    humidity_score: Optional[int] = None
    precip_score: Optional[int] = None
    temperature_score: Optional[int] = None
    overall_score: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PlantPlacementListResponse(BaseModel):
    """GET /api/plans/{id}/plants."""

    items: List[PlantPlacementOut]
    next_cursor: Optional[str] = None
