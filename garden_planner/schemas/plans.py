"""Schemas for plans and grid metadata."""
from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

Hemisphere = Literal["northern", "southern"]


class PlanCreate(BaseModel):
    """Body POST /api/plans. Geometry rules (cell size, divisibility, grid range) are checked by the service."""

    model_config = {"extra": "forbid"}

    name: str = Field(..., min_length=1, max_length=255)
    width_cm: int = Field(..., gt=0)
    height_cm: int = Field(..., gt=0)
    cell_size_cm: int = Field(..., gt=0)
    orientation: int = Field(0, ge=0, le=359, description="Degrees clockwise from north")
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    hemisphere: Optional[Hemisphere] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class PlanUpdate(BaseModel):
    """Body PATCH /api/plans/{id}. At least one field; geometry changes may need confirm_regenerate."""

    model_config = {"extra": "forbid"}

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    width_cm: Optional[int] = Field(None, gt=0)
    height_cm: Optional[int] = Field(None, gt=0)
    cell_size_cm: Optional[int] = Field(None, gt=0)
    orientation: Optional[int] = Field(None, ge=0, le=359)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    hemisphere: Optional[Hemisphere] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @model_validator(mode="after")
    def at_least_one_field(self) -> "PlanUpdate":
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided")
        for f in ("name", "width_cm", "height_cm", "cell_size_cm", "orientation"):
            if f in self.model_fields_set and getattr(self, f) is None:
                raise ValueError(f"{f} cannot be null")
        return self


class PlanOut(BaseModel):
    """Plan as returned by the API; grid_width/grid_height are derived from the geometry."""

    id: UUID
    owner_id: UUID
    name: str
    width_cm: int
    height_cm: int
    cell_size_cm: int
    grid_width: int
    grid_height: int
    orientation: int
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    hemisphere: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PlanListResponse(BaseModel):
    """GET /api/plans."""

    items: List[PlanOut]
    next_cursor: Optional[str] = None


class GridMetadataOut(BaseModel):
    """GET /api/plans/{id}/grid."""

    plan_id: UUID
    grid_width: int
    grid_height: int
    cell_size_cm: int
    cell_count: int
