"""Plant placement model: at most one plant per soil cell."""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKeyConstraint,
    Index,
    Integer,
    SmallInteger,
    String,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from garden_planner.db import Base
from garden_planner.utils.timestamps import utcnow

SCORE_COLUMNS = (
    "sunlight_score",
    "humidity_score",
    "precip_score",
    "temperature_score",
    "overall_score",
)


class PlantPlacement(Base):
    """
    Plant in a grid cell. Key (plan_id, x, y) references grid_cells, so deleting
    the cell (grid regeneration, plan delete) cascades to the placement.
    Scores are computed elsewhere (AI fit); stored as 1-5 or null.
    """

    __tablename__ = "plant_placements"
    __table_args__ = (
        ForeignKeyConstraint(
            ["plan_id", "x", "y"],
            ["grid_cells.plan_id", "grid_cells.x", "grid_cells.y"],
            ondelete="CASCADE",
        ),
        *(
            CheckConstraint(f"{col} IS NULL OR ({col} >= 1 AND {col} <= 5)", name=f"ck_plant_placements_{col}")
            for col in SCORE_COLUMNS
        ),
        Index("ix_plant_placements_plan_name_xy", "plan_id", "plant_name", "x", "y"),
    )

    plan_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    x: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    y: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    plant_name: Mapped[str] = mapped_column(String(100), nullable=False)
    sunlight_score: Mapped[Optional[int]] = mapped_column(SmallInteger, nullable=True)
    humidity_score: Mapped[Optional[int]] = mapped_column(SmallInteger, nullable=True)
    precip_score: Mapped[Optional[int]] = mapped_column(SmallInteger, nullable=True)
    temperature_score: Mapped[Optional[int]] = mapped_column(SmallInteger, nullable=True)
    overall_score: Mapped[Optional[int]] = mapped_column(SmallInteger, nullable=True)
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

    cell = relationship("GridCell", back_populates="plant_placement")
