"""Analytics events: record editor milestones for the calling owner."""
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from garden_planner.logging_config import get_logger
from garden_planner.models import AnalyticsEvent
from garden_planner.schemas.analytics import AnalyticsEventCreate
from garden_planner.services.plans_service import get_plan

logger = get_logger(__name__)


async def create_analytics_event(
    db: AsyncSession, owner_id: UUID, payload: AnalyticsEventCreate
) -> AnalyticsEvent:
    """Insert one event. A plan_id the owner cannot see raises NotFoundError."""
    if payload.plan_id is not None:
        await get_plan(db, owner_id, payload.plan_id)
    event = AnalyticsEvent(
        owner_id=owner_id,
        plan_id=payload.plan_id,
        event_type=payload.event_type,
        attributes=payload.attributes or {},
    )
    db.add(event)
    await db.flush()
    await db.refresh(event)
    logger.info(
        "analytics.event_recorded",
        event_id=str(event.id),
        event_type=event.event_type,
        plan_id=str(event.plan_id) if event.plan_id else None,
    )
    return event
