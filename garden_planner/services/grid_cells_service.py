"""
Grid cells repository. Cells are materialized for every in-bounds coordinate, so reads
and writes here address existing rows; coordinates are checked against the plan first.
"""
from dataclasses import dataclass
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from garden_planner.errors import InvalidQueryError, NotFoundError
from garden_planner.logging_config import get_logger
from garden_planner.models import GRID_CELL_TYPES, SOIL, GridCell, Plan, PlantPlacement
from garden_planner.services.cursor_codec import GRID_CELL_CURSOR
from garden_planner.services.grid_validation import validate_coordinate, validate_rectangle
from garden_planner.services.keyset_pagination import DESC, KeysetOrder, Page, paginate
from garden_planner.services.plans_service import get_plan
from garden_planner.utils.timestamps import utcnow

logger = get_logger(__name__)

SORT_UPDATED_AT = "updated_at"
SORT_X = "x"
SORT_OPTIONS = (SORT_UPDATED_AT, SORT_X)


@dataclass(frozen=True)
class GridCellFilters:
    """Raw list filters as they arrive from the query string."""

    type: Optional[str] = None
    x: Optional[int] = None
    y: Optional[int] = None
    bbox: Optional[str] = None


def grid_cell_order(sort: str = SORT_UPDATED_AT, direction: str = DESC) -> KeysetOrder:
    if sort == SORT_X:
        columns = [("x", GridCell.x), ("y", GridCell.y)]
    else:
        columns = [("updated_at", GridCell.updated_at), ("x", GridCell.x), ("y", GridCell.y)]
    return KeysetOrder(
        columns=columns,
        direction=direction,
        codec=GRID_CELL_CURSOR,
        row_key=lambda c: {"updated_at": c.updated_at, "x": c.x, "y": c.y},
    )


def parse_bbox(raw: str) -> Tuple[int, int, int, int]:
    """'x1,y1,x2,y2' -> ints. Raises InvalidQueryError."""
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 4:
        raise InvalidQueryError("bbox must be 'x1,y1,x2,y2'", field="bbox")
    try:
        x1, y1, x2, y2 = (int(p) for p in parts)
    except ValueError:
        raise InvalidQueryError("bbox coordinates must be integers", field="bbox")
    return x1, y1, x2, y2


def check_cell_type(cell_type: str) -> None:
    if cell_type not in GRID_CELL_TYPES:
        raise InvalidQueryError(
            f"type must be one of: {', '.join(GRID_CELL_TYPES)}",
            field="type",
        )


async def get_grid_cell(db: AsyncSession, owner_id: UUID, plan_id: UUID, x: int, y: int) -> GridCell:
    plan = await get_plan(db, owner_id, plan_id)
    validate_coordinate(plan, x, y)
    cell = await db.get(GridCell, (plan.id, x, y))
    if not cell:
        raise NotFoundError("Grid cell not found", field="x,y")
    return cell


async def upsert_grid_cell(db: AsyncSession, plan: Plan, x: int, y: int, cell_type: str) -> GridCell:
    """
    Write one cell's type. A non-soil type removes the placement on that cell.
    plan must be freshly loaded in the current request.
    """
    check_cell_type(cell_type)
    validate_coordinate(plan, x, y)
    cell = await db.get(GridCell, (plan.id, x, y))
    if cell is None:
        cell = GridCell(plan_id=plan.id, x=x, y=y, type=cell_type, updated_at=utcnow())
        db.add(cell)
    else:
        cell.type = cell_type
        cell.updated_at = utcnow()
    await db.flush()
    if cell_type != SOIL:
        await db.execute(
            delete(PlantPlacement).where(
                PlantPlacement.plan_id == plan.id,
                PlantPlacement.x == x,
                PlantPlacement.y == y,
            )
        )
    return cell


async def update_area_cells(
    db: AsyncSession,
    plan_id: UUID,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    cell_type: str,
) -> int:
    """Bulk retype of every cell in the inclusive rectangle. Returns rows updated."""
    check_cell_type(cell_type)
    r = await db.execute(
        update(GridCell)
        .where(
            GridCell.plan_id == plan_id,
            GridCell.x >= x1,
            GridCell.x <= x2,
            GridCell.y >= y1,
            GridCell.y <= y2,
        )
        .values(type=cell_type, updated_at=utcnow())
    )
    return r.rowcount


async def list_grid_cells(
    db: AsyncSession,
    owner_id: UUID,
    plan_id: UUID,
    filters: GridCellFilters,
    limit: int,
    cursor: Optional[str] = None,
    sort: str = SORT_UPDATED_AT,
    order: str = DESC,
) -> Page[GridCell]:
    """
    Cells of an owned plan. Filters: type, single point (x and y together) or bbox, never both.
    """
    if sort not in SORT_OPTIONS:
        raise InvalidQueryError(f"sort must be one of: {', '.join(SORT_OPTIONS)}", field="sort")
    if (filters.x is None) != (filters.y is None):
        raise InvalidQueryError("x and y must be provided together", field="x,y")
    has_point = filters.x is not None
    if has_point and filters.bbox:
        raise InvalidQueryError("Use either a single point (x, y) or bbox, not both", field="bbox")
    if filters.type is not None:
        check_cell_type(filters.type)
    bbox = parse_bbox(filters.bbox) if filters.bbox else None

    plan = await get_plan(db, owner_id, plan_id)
    q = select(GridCell).where(GridCell.plan_id == plan.id)
    if filters.type is not None:
        q = q.where(GridCell.type == filters.type)
    if has_point:
        validate_coordinate(plan, filters.x, filters.y)
        q = q.where(GridCell.x == filters.x, GridCell.y == filters.y)
    if bbox:
        x1, y1, x2, y2 = bbox
        validate_rectangle(plan, x1, y1, x2, y2)
        q = q.where(
            GridCell.x >= x1,
            GridCell.x <= x2,
            GridCell.y >= y1,
            GridCell.y <= y2,
        )
    return await paginate(db, q, grid_cell_order(sort, order), limit=limit, cursor=cursor)
