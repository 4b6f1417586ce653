"""
Area reclassification: retype a rectangle of cells, removing plants from cells that stop being soil.
Destructive retypes go through the confirmation gate.
"""
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from garden_planner.logging_config import get_logger
from garden_planner.models import SOIL, GridCell
from garden_planner.services import grid_cells_service, plant_placements_service
from garden_planner.services.confirmation_gate import ImpactReport, Outcome, attempt
from garden_planner.services.grid_validation import validate_rectangle, validate_rectangle_order
from garden_planner.services.plans_service import get_plan

logger = get_logger(__name__)


@dataclass(frozen=True)
class AreaTypeResult:
    affected_cells: int
    removed_plants: int


async def set_area_type(
    db: AsyncSession,
    owner_id: UUID,
    plan_id: UUID,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    cell_type: str,
    confirmed: bool,
) -> Outcome:
    """
    Retype every cell in the inclusive rectangle (x1, y1)-(x2, y2).
    Applied result: AreaTypeResult. Cells are updated before placements are deleted.
    """
    grid_cells_service.check_cell_type(cell_type)
    validate_rectangle_order(x1, y1, x2, y2)
    plan = await get_plan(db, owner_id, plan_id)
    validate_rectangle(plan, x1, y1, x2, y2)
    area = (x2 - x1 + 1) * (y2 - y1 + 1)

    async def probe() -> ImpactReport:
        if cell_type == SOIL:
            return ImpactReport(destructive=False, cell_count=area)
        plants = await plant_placements_service.count_placements_in_area(db, plan.id, x1, y1, x2, y2)
        return ImpactReport(
            destructive=plants > 0,
            plant_count=plants,
            cell_count=area,
            reason=f"{plants} plant(s) will be removed from cells changed to {cell_type}" if plants else None,
        )

    async def apply() -> AreaTypeResult:
        await grid_cells_service.update_area_cells(db, plan.id, x1, y1, x2, y2, cell_type)
        removed = 0
        if cell_type != SOIL:
            removed = await plant_placements_service.delete_placements_in_area(db, plan.id, x1, y1, x2, y2)
        logger.info(
            "grid.area_type_set",
            plan_id=str(plan.id),
            rect=[x1, y1, x2, y2],
            type=cell_type,
            affected_cells=area,
            removed_plants=removed,
        )
        return AreaTypeResult(affected_cells=area, removed_plants=removed)

    return await attempt(apply, probe, confirmed)


async def set_cell_type(
    db: AsyncSession,
    owner_id: UUID,
    plan_id: UUID,
    x: int,
    y: int,
    cell_type: str,
    confirmed: bool,
) -> Outcome:
    """Single-cell variant of set_area_type. Applied result: the updated GridCell."""
    grid_cells_service.check_cell_type(cell_type)
    plan = await get_plan(db, owner_id, plan_id)
    validate_rectangle(plan, x, y, x, y)

    async def probe() -> ImpactReport:
        if cell_type == SOIL:
            return ImpactReport(destructive=False, cell_count=1)
        plants = await plant_placements_service.count_placements_in_area(db, plan.id, x, y, x, y)
        return ImpactReport(
            destructive=plants > 0,
            plant_count=plants,
            cell_count=1,
            reason=f"Plant at ({x}, {y}) will be removed" if plants else None,
        )

    async def apply() -> GridCell:
        cell = await grid_cells_service.upsert_grid_cell(db, plan, x, y, cell_type)
        logger.info("grid.cell_type_set", plan_id=str(plan.id), x=x, y=y, type=cell_type)
        return cell

    return await attempt(apply, probe, confirmed)
