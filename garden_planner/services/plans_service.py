"""
Plans repository: owner-scoped CRUD, keyset listing, grid materialization.
Every call re-checks ownership with (id, owner_id); a plan owned by someone else is NotFound.
"""
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from garden_planner.errors import ConflictError, NotFoundError
from garden_planner.logging_config import get_logger
from garden_planner.models import SOIL, GridCell, Plan, PlantPlacement
from garden_planner.schemas.plans import PlanCreate
from garden_planner.services.cursor_codec import PLAN_CURSOR
from garden_planner.services.grid_validation import GridDimensions, validate_grid_geometry
from garden_planner.services.keyset_pagination import DESC, KeysetOrder, Page, paginate
from garden_planner.utils.timestamps import utcnow

logger = get_logger(__name__)


def plan_order(direction: str = DESC) -> KeysetOrder:
    """Plans sort by (updated_at, id); id breaks ties between plans touched in the same instant."""
    return KeysetOrder(
        columns=[("updated_at", Plan.updated_at), ("id", Plan.id)],
        direction=direction,
        codec=PLAN_CURSOR,
        row_key=lambda p: {"updated_at": p.updated_at, "id": p.id},
    )


async def get_plan(db: AsyncSession, owner_id: UUID, plan_id: UUID) -> Plan:
    """Load plan scoped to owner. Raises NotFoundError."""
    r = await db.execute(
        select(Plan).where(
            Plan.id == plan_id,
            Plan.owner_id == owner_id,
        )
    )
    plan = r.scalar_one_or_none()
    if not plan:
        raise NotFoundError("Plan not found", field="plan_id")
    return plan


async def _ensure_name_free(
    db: AsyncSession,
    owner_id: UUID,
    name: str,
    exclude_plan_id: Optional[UUID] = None,
) -> None:
    q = select(Plan.id).where(Plan.owner_id == owner_id, Plan.name == name)
    if exclude_plan_id is not None:
        q = q.where(Plan.id != exclude_plan_id)
    r = await db.execute(q.limit(1))
    if r.scalar_one_or_none() is not None:
        raise ConflictError("Plan with this name already exists.", field="name")


async def materialize_grid(db: AsyncSession, plan_id: UUID, dims: GridDimensions) -> int:
    """Insert one soil cell per in-bounds coordinate. Returns number of cells created."""
    now = utcnow()
    rows = [
        {"plan_id": plan_id, "x": x, "y": y, "type": SOIL, "updated_at": now}
        for y in range(dims.height)
        for x in range(dims.width)
    ]
    await db.execute(insert(GridCell), rows)
    return len(rows)


async def create_plan(db: AsyncSession, owner_id: UUID, payload: PlanCreate) -> Plan:
    """
    Create plan for owner and materialize its grid (all soil).
    Geometry is validated before any write; duplicate name -> ConflictError.
    """
    dims = validate_grid_geometry(payload.width_cm, payload.height_cm, payload.cell_size_cm)
    name = payload.name.strip()
    await _ensure_name_free(db, owner_id, name)

    plan = Plan(
        owner_id=owner_id,
        name=name,
        width_cm=payload.width_cm,
        height_cm=payload.height_cm,
        cell_size_cm=payload.cell_size_cm,
        orientation=payload.orientation,
        latitude=payload.latitude,
        longitude=payload.longitude,
        hemisphere=payload.hemisphere,
    )
    db.add(plan)
    try:
        await db.flush()
    except IntegrityError as e:
        logger.warning("plans.create_conflict", owner_id=str(owner_id), error=str(e.orig))
        raise ConflictError("Plan with this name already exists.", field="name")

    cell_count = await materialize_grid(db, plan.id, dims)
    await db.refresh(plan)
    logger.info(
        "plans.created",
        plan_id=str(plan.id),
        owner_id=str(owner_id),
        grid_width=dims.width,
        grid_height=dims.height,
        cells=cell_count,
    )
    return plan


async def update_plan(
    db: AsyncSession,
    owner_id: UUID,
    plan_id: UUID,
    values: Dict[str, Any],
) -> Plan:
    """
    Scoped conditional update (WHERE id AND owner_id). Zero rows affected means the plan
    vanished or changed hands since it was read -> ConflictError.
    Geometry consistency is the caller's job (plan_dimensions_service).
    """
    values = dict(values)
    if "name" in values and values["name"] is not None:
        values["name"] = values["name"].strip()
        await _ensure_name_free(db, owner_id, values["name"], exclude_plan_id=plan_id)
    values["updated_at"] = utcnow()

    try:
        r = await db.execute(
            update(Plan)
            .where(Plan.id == plan_id, Plan.owner_id == owner_id)
            .values(**values)
        )
    except IntegrityError as e:
        logger.warning("plans.update_conflict", plan_id=str(plan_id), error=str(e.orig))
        raise ConflictError("Plan with this name already exists.", field="name")
    if r.rowcount != 1:
        raise ConflictError(
            "Plan was modified or removed concurrently",
            field="plan_id",
            extra={"rows_affected": r.rowcount},
        )

    plan = await get_plan(db, owner_id, plan_id)
    await db.refresh(plan)
    logger.info("plans.updated", plan_id=str(plan_id), fields=sorted(values.keys()))
    return plan


async def regenerate_grid(db: AsyncSession, plan: Plan) -> int:
    """
    Full regeneration after a geometry change: drop every placement and cell of the plan,
    then materialize the new soil grid. Runs inside the request transaction.
    """
    await db.execute(delete(PlantPlacement).where(PlantPlacement.plan_id == plan.id))
    await db.execute(delete(GridCell).where(GridCell.plan_id == plan.id))
    dims = GridDimensions(width=plan.grid_width, height=plan.grid_height)
    created = await materialize_grid(db, plan.id, dims)
    logger.info(
        "plans.grid_regenerated",
        plan_id=str(plan.id),
        grid_width=dims.width,
        grid_height=dims.height,
        cells=created,
    )
    return created


async def delete_plan(db: AsyncSession, owner_id: UUID, plan_id: UUID) -> None:
    """Delete plan; cells and placements go with it (ON DELETE CASCADE)."""
    r = await db.execute(
        delete(Plan).where(
            Plan.id == plan_id,
            Plan.owner_id == owner_id,
        )
    )
    if r.rowcount == 0:
        raise NotFoundError("Plan not found", field="plan_id")
    logger.info("plans.deleted", plan_id=str(plan_id), owner_id=str(owner_id))


async def list_plans(
    db: AsyncSession,
    owner_id: UUID,
    limit: int,
    cursor: Optional[str] = None,
    order: str = DESC,
) -> Page[Plan]:
    """Owner's plans, keyset-paginated by (updated_at, id)."""
    q = select(Plan).where(Plan.owner_id == owner_id)
    return await paginate(db, q, plan_order(order), limit=limit, cursor=cursor)


async def count_plan_cells(db: AsyncSession, plan_id: UUID) -> int:
    """Number of materialized cells of a plan."""
    r = await db.execute(select(func.count()).select_from(GridCell).where(GridCell.plan_id == plan_id))
    return r.scalar_one()


async def get_grid_metadata(db: AsyncSession, owner_id: UUID, plan_id: UUID) -> Dict[str, Any]:
    """Grid dimensions and cell size of an owned plan."""
    plan = await get_plan(db, owner_id, plan_id)
    return {
        "plan_id": plan.id,
        "grid_width": plan.grid_width,
        "grid_height": plan.grid_height,
        "cell_size_cm": plan.cell_size_cm,
        "cell_count": await count_plan_cells(db, plan.id),
    }
