"""
Plant placements repository. A placement may only sit on a soil cell.
"""
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from garden_planner.errors import CellNotSoilError, NotFoundError
from garden_planner.logging_config import get_logger
from garden_planner.models import SCORE_COLUMNS, SOIL, GridCell, PlantPlacement
from garden_planner.schemas.plants import PlantPlacementUpsert
from garden_planner.services.cursor_codec import PLANT_PLACEMENT_CURSOR
from garden_planner.services.grid_validation import validate_coordinate
from garden_planner.services.keyset_pagination import ASC, KeysetOrder, Page, paginate
from garden_planner.services.plans_service import get_plan
from garden_planner.utils.timestamps import utcnow

logger = get_logger(__name__)

LIKE_ESCAPE = "\\"

PLANT_PLACEMENT_ORDER = KeysetOrder(
    columns=[
        ("plant_name", PlantPlacement.plant_name),
        ("x", PlantPlacement.x),
        ("y", PlantPlacement.y),
    ],
    direction=ASC,
    codec=PLANT_PLACEMENT_CURSOR,
    row_key=lambda p: {"plant_name": p.plant_name, "x": p.x, "y": p.y},
)


def escape_like(value: str) -> str:
    """Escape LIKE metacharacters so user input matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


async def get_plant_placement(
    db: AsyncSession, owner_id: UUID, plan_id: UUID, x: int, y: int
) -> PlantPlacement:
    plan = await get_plan(db, owner_id, plan_id)
    validate_coordinate(plan, x, y)
    placement = await db.get(PlantPlacement, (plan.id, x, y))
    if not placement:
        raise NotFoundError("Plant placement not found", field="x,y")
    return placement


async def upsert_plant_placement(
    db: AsyncSession,
    owner_id: UUID,
    plan_id: UUID,
    x: int,
    y: int,
    payload: PlantPlacementUpsert,
) -> PlantPlacement:
    """
    Place or replace the plant at (x, y). Rejects out-of-bounds coordinates and non-soil cells.
    """
    plan = await get_plan(db, owner_id, plan_id)
    validate_coordinate(plan, x, y)
    cell = await db.get(GridCell, (plan.id, x, y))
    if not cell:
        raise NotFoundError("Grid cell not found", field="x,y")
    if cell.type != SOIL:
        raise CellNotSoilError(
            f"Plants can only be placed on soil cells (cell is {cell.type})",
            field="x,y",
            extra={"x": x, "y": y, "cell_type": cell.type},
        )

    values = {"plant_name": payload.plant_name}
    for col in SCORE_COLUMNS:
        values[col] = getattr(payload, col)

    placement = await db.get(PlantPlacement, (plan.id, x, y))
    if placement is None:
        placement = PlantPlacement(plan_id=plan.id, x=x, y=y, **values)
        db.add(placement)
        created = True
    else:
        for k, v in values.items():
            setattr(placement, k, v)
        placement.updated_at = utcnow()
        created = False
    await db.flush()
    await db.refresh(placement)
    logger.info(
        "plants.upserted",
        plan_id=str(plan.id),
        x=x,
        y=y,
        plant_name=placement.plant_name,
        created=created,
    )
    return placement


async def delete_plant_placement(db: AsyncSession, owner_id: UUID, plan_id: UUID, x: int, y: int) -> None:
    plan = await get_plan(db, owner_id, plan_id)
    validate_coordinate(plan, x, y)
    r = await db.execute(
        delete(PlantPlacement).where(
            PlantPlacement.plan_id == plan.id,
            PlantPlacement.x == x,
            PlantPlacement.y == y,
        )
    )
    if r.rowcount == 0:
        raise NotFoundError("Plant placement not found", field="x,y")
    logger.info("plants.deleted", plan_id=str(plan.id), x=x, y=y)


async def list_plant_placements(
    db: AsyncSession,
    owner_id: UUID,
    plan_id: UUID,
    limit: int,
    cursor: Optional[str] = None,
    name: Optional[str] = None,
) -> Page[PlantPlacement]:
    """Placements ordered by (plant_name, x, y). name: case-insensitive literal prefix."""
    plan = await get_plan(db, owner_id, plan_id)
    q = select(PlantPlacement).where(PlantPlacement.plan_id == plan.id)
    if name:
        q = q.where(PlantPlacement.plant_name.ilike(escape_like(name) + "%", escape=LIKE_ESCAPE))
    return await paginate(db, q, PLANT_PLACEMENT_ORDER, limit=limit, cursor=cursor)


def _in_area(plan_id: UUID, x1: int, y1: int, x2: int, y2: int):
    return (
        PlantPlacement.plan_id == plan_id,
        PlantPlacement.x >= x1,
        PlantPlacement.x <= x2,
        PlantPlacement.y >= y1,
        PlantPlacement.y <= y2,
    )


async def count_placements_in_area(db: AsyncSession, plan_id: UUID, x1: int, y1: int, x2: int, y2: int) -> int:
    r = await db.execute(
        select(func.count()).select_from(PlantPlacement).where(*_in_area(plan_id, x1, y1, x2, y2))
    )
    return r.scalar_one()


async def delete_placements_in_area(db: AsyncSession, plan_id: UUID, x1: int, y1: int, x2: int, y2: int) -> int:
    """Returns number of placements removed."""
    r = await db.execute(delete(PlantPlacement).where(*_in_area(plan_id, x1, y1, x2, y2)))
    return r.rowcount


async def count_placements(db: AsyncSession, plan_id: UUID) -> int:
    r = await db.execute(
        select(func.count()).select_from(PlantPlacement).where(PlantPlacement.plan_id == plan_id)
    )
    return r.scalar_one()
