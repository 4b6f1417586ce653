"""initial: plans, grid_cells, plant_placements

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SCORE_COLUMNS = (
    "sunlight_score",
    "humidity_score",
    "precip_score",
    "temperature_score",
    "overall_score",
)


def upgrade() -> None:
    op.create_table(
        "plans",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("hemisphere", sa.String(16), nullable=True),
        sa.Column("width_cm", sa.Integer(), nullable=False),
        sa.Column("height_cm", sa.Integer(), nullable=False),
        sa.Column("cell_size_cm", sa.Integer(), nullable=False),
        sa.Column("orientation", sa.Integer(), server_default="0", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("owner_id", "name", name="uq_plans_owner_name"),
        sa.CheckConstraint("cell_size_cm IN (10, 25, 50, 100)", name="ck_plans_cell_size"),
        sa.CheckConstraint("orientation >= 0 AND orientation <= 359", name="ck_plans_orientation"),
        sa.CheckConstraint("width_cm > 0 AND height_cm > 0", name="ck_plans_size_positive"),
    )
    # Keyset listing: WHERE owner_id = ? ORDER BY updated_at, id
    op.create_index("ix_plans_owner_updated_id", "plans", ["owner_id", "updated_at", "id"])

    op.create_table(
        "grid_cells",
        sa.Column("plan_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("x", sa.Integer(), nullable=False),
        sa.Column("y", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(16), server_default="soil", nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["plan_id"], ["plans.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("plan_id", "x", "y"),
        sa.CheckConstraint("x >= 0 AND y >= 0", name="ck_grid_cells_coords"),
        sa.CheckConstraint(
            "type IN ('soil', 'path', 'water', 'building', 'blocked')",
            name="ck_grid_cells_type",
        ),
    )
    op.create_index("ix_grid_cells_plan_updated_xy", "grid_cells", ["plan_id", "updated_at", "x", "y"])

    op.create_table(
        "plant_placements",
        sa.Column("plan_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("x", sa.Integer(), nullable=False),
        sa.Column("y", sa.Integer(), nullable=False),
        sa.Column("plant_name", sa.String(100), nullable=False),
        *[sa.Column(col, sa.SmallInteger(), nullable=True) for col in SCORE_COLUMNS],
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(
            ["plan_id", "x", "y"],
            ["grid_cells.plan_id", "grid_cells.x", "grid_cells.y"],
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("plan_id", "x", "y"),
        *[
            sa.CheckConstraint(f"{col} IS NULL OR ({col} >= 1 AND {col} <= 5)", name=f"ck_plant_placements_{col}")
            for col in SCORE_COLUMNS
        ],
    )
    op.create_index(
        "ix_plant_placements_plan_name_xy",
        "plant_placements",
        ["plan_id", "plant_name", "x", "y"],
    )


def downgrade() -> None:
    op.drop_index("ix_plant_placements_plan_name_xy", table_name="plant_placements")
    op.drop_table("plant_placements")
    op.drop_index("ix_grid_cells_plan_updated_xy", table_name="grid_cells")
    op.drop_table("grid_cells")
    op.drop_index("ix_plans_owner_updated_id", table_name="plans")
    op.drop_table("plans")
