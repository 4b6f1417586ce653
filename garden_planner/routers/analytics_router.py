"""Analytics events API."""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from garden_planner.db import get_db
from garden_planner.deps import get_owner_id
from garden_planner.schemas.analytics import AnalyticsEventCreate, AnalyticsEventOut
from garden_planner.schemas.common import ErrorResponse
from garden_planner.services import analytics_events_service

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.post(
    "/events",
    response_model=AnalyticsEventOut,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def post_event(
    payload: AnalyticsEventCreate,
    owner_id: UUID = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> AnalyticsEventOut:
    event = await analytics_events_service.create_analytics_event(db, owner_id, payload)
    return AnalyticsEventOut.model_validate(event)
