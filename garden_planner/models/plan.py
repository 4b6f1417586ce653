"""Plan model: rectangular garden plot owned by one user."""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Float, Index, Integer, String, UniqueConstraint, Uuid, func
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column, relationship

from garden_planner.db import Base
from garden_planner.utils.timestamps import utcnow


class Plan(Base):
    """
    Garden plan: physical size in cm + cell size.
    grid_width / grid_height are derived (width_cm / cell_size_cm) and recomputed on every read;
    they are never stored, so they cannot drift from the physical size.
    """

    __tablename__ = "plans"
    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_plans_owner_name"),
        CheckConstraint("cell_size_cm IN (10, 25, 50, 100)", name="ck_plans_cell_size"),
        CheckConstraint("orientation >= 0 AND orientation <= 359", name="ck_plans_orientation"),
        CheckConstraint("width_cm > 0 AND height_cm > 0", name="ck_plans_size_positive"),
        Index("ix_plans_owner_updated_id", "owner_id", "updated_at", "id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    hemisphere: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)  # northern | southern
    width_cm: Mapped[int] = mapped_column(Integer, nullable=False)
    height_cm: Mapped[int] = mapped_column(Integer, nullable=False)
    cell_size_cm: Mapped[int] = mapped_column(Integer, nullable=False)
    orientation: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    grid_cells = relationship(
        "GridCell",
        back_populates="plan",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @hybrid_property
    def grid_width(self) -> int:
        return self.width_cm // self.cell_size_cm

    @hybrid_property
    def grid_height(self) -> int:
        return self.height_cm // self.cell_size_cm
