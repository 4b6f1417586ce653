"""Plans API: list/create/get/update/delete, grid metadata."""
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from garden_planner.config import get_settings
from garden_planner.db import get_db
from garden_planner.deps import get_owner_id
from garden_planner.routers.confirmation import confirmation_required
from garden_planner.schemas.common import ErrorResponse
from garden_planner.schemas.plans import (
    GridMetadataOut,
    PlanCreate,
    PlanListResponse,
    PlanOut,
    PlanUpdate,
)
from garden_planner.services import plans_service
from garden_planner.services.confirmation_gate import RequiresConfirmation
from garden_planner.services.plan_dimensions_service import update_plan_with_geometry
from garden_planner.utils.query_params import ensure_bool_query

router = APIRouter(prefix="/api/plans", tags=["plans"])
settings = get_settings()


@router.get("", response_model=PlanListResponse)
async def list_plans(
    owner_id: UUID = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
    limit: int = Query(settings.plans_page_size, ge=1, le=settings.max_page_size),
    cursor: str | None = Query(None, description="next_cursor from the previous page"),
    order: Literal["asc", "desc"] = Query("desc", description="By updated_at, then id"),
) -> PlanListResponse:
    page = await plans_service.list_plans(db, owner_id, limit=limit, cursor=cursor, order=order)
    return PlanListResponse(
        items=[PlanOut.model_validate(p) for p in page.items],
        next_cursor=page.next_cursor,
    )


@router.post(
    "",
    response_model=PlanOut,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_plan(
    payload: PlanCreate,
    owner_id: UUID = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> PlanOut:
    """Create plan; its grid is materialized as soil."""
    plan = await plans_service.create_plan(db, owner_id, payload)
    return PlanOut.model_validate(plan)


@router.get("/{plan_id}", response_model=PlanOut, responses={404: {"model": ErrorResponse}})
async def get_plan(
    plan_id: UUID,
    owner_id: UUID = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> PlanOut:
    plan = await plans_service.get_plan(db, owner_id, plan_id)
    return PlanOut.model_validate(plan)


@router.patch(
    "/{plan_id}",
    response_model=PlanOut,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def update_plan(
    plan_id: UUID,
    payload: PlanUpdate,
    owner_id: UUID = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
    confirm_regenerate: str | None = Query(
        None,
        description="Required (true) when the change alters grid dimensions; the grid is regenerated",
    ),
):
    """
    Update plan. A change of grid dimensions returns 409 requires_confirmation until repeated
    with confirm_regenerate=true; then all cells reset to soil and all plants are removed.
    """
    outcome = await update_plan_with_geometry(
        db, owner_id, plan_id, payload, confirmed=ensure_bool_query(confirm_regenerate)
    )
    if isinstance(outcome, RequiresConfirmation):
        return confirmation_required(outcome, "confirm_regenerate")
    return PlanOut.model_validate(outcome.result)


@router.delete(
    "/{plan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_plan(
    plan_id: UUID,
    owner_id: UUID = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> Response:
    await plans_service.delete_plan(db, owner_id, plan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{plan_id}/grid", response_model=GridMetadataOut, responses={404: {"model": ErrorResponse}})
async def get_grid_metadata(
    plan_id: UUID,
    owner_id: UUID = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> GridMetadataOut:
    meta = await plans_service.get_grid_metadata(db, owner_id, plan_id)
    return GridMetadataOut(**meta)
