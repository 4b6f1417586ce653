"""Plant placements API."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from garden_planner.config import get_settings
from garden_planner.db import get_db
from garden_planner.deps import get_owner_id
from garden_planner.schemas.common import ErrorResponse
from garden_planner.schemas.plants import (
    PlantPlacementListResponse,
    PlantPlacementOut,
    PlantPlacementUpsert,
)
from garden_planner.services import plant_placements_service

router = APIRouter(prefix="/api/plans/{plan_id}/plants", tags=["plants"])
settings = get_settings()


@router.get("", response_model=PlantPlacementListResponse, responses={400: {"model": ErrorResponse}})
async def list_plants(
    plan_id: UUID,
    owner_id: UUID = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
    limit: int = Query(settings.plants_page_size, ge=1, le=settings.max_page_size),
    cursor: str | None = Query(None),
    name: str | None = Query(None, max_length=100, description="Case-insensitive plant name prefix"),
) -> PlantPlacementListResponse:
    page = await plant_placements_service.list_plant_placements(
        db, owner_id, plan_id, limit=limit, cursor=cursor, name=name
    )
    return PlantPlacementListResponse(
        items=[PlantPlacementOut.model_validate(p) for p in page.items],
        next_cursor=page.next_cursor,
    )


@router.put(
    "/{x}/{y}",
    response_model=PlantPlacementOut,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def put_plant(
    plan_id: UUID,
    payload: PlantPlacementUpsert,
    x: int,
    y: int,
    owner_id: UUID = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> PlantPlacementOut:
    """Place or replace the plant on a soil cell."""
    placement = await plant_placements_service.upsert_plant_placement(db, owner_id, plan_id, x, y, payload)
    return PlantPlacementOut.model_validate(placement)


@router.delete("/{x}/{y}", status_code=status.HTTP_204_NO_CONTENT, responses={404: {"model": ErrorResponse}})
async def delete_plant(
    plan_id: UUID,
    x: int,
    y: int,
    owner_id: UUID = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> Response:
    await plant_placements_service.delete_plant_placement(db, owner_id, plan_id, x, y)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
