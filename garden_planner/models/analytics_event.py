"""Analytics event model: append-only log of editor milestones per user."""
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, String, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from garden_planner.db import Base
from garden_planner.utils.timestamps import utcnow

ANALYTICS_EVENT_TYPES = ("plan_created", "grid_saved", "area_typed", "plant_confirmed")


class AnalyticsEvent(Base):
    """
    One recorded event. plan_id is optional; deleting the plan keeps the event
    with plan_id cleared.
    """

    __tablename__ = "analytics_events"
    __table_args__ = (
        CheckConstraint(
            "event_type IN ('plan_created', 'grid_saved', 'area_typed', 'plant_confirmed')",
            name="ck_analytics_events_type",
        ),
        Index("ix_analytics_events_owner_created", "owner_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    plan_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("plans.id", ondelete="SET NULL"),
        nullable=True,
    )
    event_type: Mapped[str] = mapped_column(String(32), nullable=False)
    attributes: Mapped[Dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
