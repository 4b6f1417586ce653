"""Schemas for grid cells and area reclassification."""
from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel

CellType = Literal["soil", "path", "water", "building", "blocked"]


class GridCellOut(BaseModel):
    plan_id: UUID
    x: int
    y: int
    type: str
    updated_at: datetime

    model_config = {"from_attributes": True}


class GridCellListResponse(BaseModel):
    """GET /api/plans/{id}/grid/cells."""

    items: List[GridCellOut]
    next_cursor: Optional[str] = None


class GridCellUpdate(BaseModel):
    """Body PUT /api/plans/{id}/grid/cells/{x}/{y}."""

    model_config = {"extra": "forbid"}

    type: CellType


class AreaTypeRequest(BaseModel):
    """
    Body POST /api/plans/{id}/grid/area-type. Rectangle is inclusive on both corners.
    confirm_plant_removal must be true to retype cells that hold plants to a non-soil type.
    """

    model_config = {"extra": "forbid"}

    x1: int
    y1: int
    x2: int
    y2: int
    type: CellType
    confirm_plant_removal: bool = False


class AreaTypeResult(BaseModel):
    affected_cells: int
    removed_plants: int
