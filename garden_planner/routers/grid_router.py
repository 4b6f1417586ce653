"""Grid API: list cells, set one cell's type, reclassify a rectangle."""
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from garden_planner.config import get_settings
from garden_planner.db import get_db
from garden_planner.deps import get_owner_id
from garden_planner.routers.confirmation import confirmation_required
from garden_planner.schemas.common import ErrorResponse
from garden_planner.schemas.grid import (
    AreaTypeRequest,
    AreaTypeResult,
    CellType,
    GridCellListResponse,
    GridCellOut,
    GridCellUpdate,
)
from garden_planner.services import area_type_service, grid_cells_service
from garden_planner.services.confirmation_gate import RequiresConfirmation
from garden_planner.services.grid_cells_service import GridCellFilters
from garden_planner.utils.query_params import ensure_bool_query

router = APIRouter(prefix="/api/plans/{plan_id}/grid", tags=["grid"])
settings = get_settings()

_GATED_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse, "description": "requires_confirmation"},
    422: {"model": ErrorResponse},
}


@router.get("/cells", response_model=GridCellListResponse, responses={400: {"model": ErrorResponse}})
async def list_cells(
    plan_id: UUID,
    owner_id: UUID = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
    type: CellType | None = Query(None),
    x: int | None = Query(None, description="Single point filter; requires y"),
    y: int | None = Query(None, description="Single point filter; requires x"),
    bbox: str | None = Query(None, description="x1,y1,x2,y2 inclusive; not combined with x/y"),
    sort: Literal["updated_at", "x"] = Query("updated_at"),
    order: Literal["asc", "desc"] = Query("desc"),
    limit: int = Query(settings.grid_cells_page_size, ge=1, le=settings.max_page_size),
    cursor: str | None = Query(None),
) -> GridCellListResponse:
    page = await grid_cells_service.list_grid_cells(
        db,
        owner_id,
        plan_id,
        GridCellFilters(type=type, x=x, y=y, bbox=bbox),
        limit=limit,
        cursor=cursor,
        sort=sort,
        order=order,
    )
    return GridCellListResponse(
        items=[GridCellOut.model_validate(c) for c in page.items],
        next_cursor=page.next_cursor,
    )


@router.put("/cells/{x}/{y}", response_model=GridCellOut, responses=_GATED_RESPONSES)
async def put_cell(
    plan_id: UUID,
    payload: GridCellUpdate,
    x: int,
    y: int,
    owner_id: UUID = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
    confirm_plant_removal: str | None = Query(None, description="true to remove a plant from a cell leaving soil"),
):
    outcome = await area_type_service.set_cell_type(
        db, owner_id, plan_id, x, y, payload.type,
        confirmed=ensure_bool_query(confirm_plant_removal),
    )
    if isinstance(outcome, RequiresConfirmation):
        return confirmation_required(outcome, "confirm_plant_removal")
    return GridCellOut.model_validate(outcome.result)


@router.post("/area-type", response_model=AreaTypeResult, responses=_GATED_RESPONSES)
async def post_area_type(
    plan_id: UUID,
    payload: AreaTypeRequest,
    owner_id: UUID = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Retype the inclusive rectangle. Removing plants (non-soil target over planted cells)
    returns 409 requires_confirmation unless confirm_plant_removal is true.
    """
    outcome = await area_type_service.set_area_type(
        db,
        owner_id,
        plan_id,
        payload.x1,
        payload.y1,
        payload.x2,
        payload.y2,
        payload.type,
        confirmed=payload.confirm_plant_removal,
    )
    if isinstance(outcome, RequiresConfirmation):
        return confirmation_required(outcome, "confirm_plant_removal")
    return AreaTypeResult(
        affected_cells=outcome.result.affected_cells,
        removed_plants=outcome.result.removed_plants,
    )
