"""Grid cell model: one row per (plan_id, x, y)."""
import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from garden_planner.db import Base
from garden_planner.utils.timestamps import utcnow

GRID_CELL_TYPES = ("soil", "path", "water", "building", "blocked")
SOIL = "soil"


class GridCell(Base):
    """
    Grid cell. Materialized as soil for every in-bounds coordinate when a plan is created
    or its grid regenerated. type: soil | path | water | building | blocked.
    """

    __tablename__ = "grid_cells"
    __table_args__ = (
        CheckConstraint("x >= 0 AND y >= 0", name="ck_grid_cells_coords"),
        CheckConstraint(
            "type IN ('soil', 'path', 'water', 'building', 'blocked')",
            name="ck_grid_cells_type",
        ),
        Index("ix_grid_cells_plan_updated_xy", "plan_id", "updated_at", "x", "y"),
    )

    plan_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("plans.id", ondelete="CASCADE"),
        primary_key=True,
    )
    x: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    y: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False, default=SOIL)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    plan = relationship("Plan", back_populates="grid_cells")
    plant_placement = relationship(
        "PlantPlacement",
        back_populates="cell",
        uselist=False,
        passive_deletes=True,
    )
