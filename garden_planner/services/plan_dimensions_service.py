"""
Plan updates that may change geometry.

Any change to the effective grid dimensions regenerates the grid from scratch (all cells
back to soil, all plants removed), so it always needs confirmation, even on an empty plan.
Renames, location and orientation edits apply directly.
"""
from typing import Any, Dict
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from garden_planner.logging_config import get_logger
from garden_planner.models import Plan
from garden_planner.schemas.plans import PlanUpdate
from garden_planner.services import plans_service, plant_placements_service
from garden_planner.services.confirmation_gate import Applied, ImpactReport, Outcome, attempt
from garden_planner.services.grid_validation import validate_grid_geometry

logger = get_logger(__name__)

GEOMETRY_FIELDS = ("width_cm", "height_cm", "cell_size_cm")


async def update_plan_with_geometry(
    db: AsyncSession,
    owner_id: UUID,
    plan_id: UUID,
    payload: PlanUpdate,
    confirmed: bool,
) -> Outcome:
    """Applied result: the updated Plan."""
    plan = await plans_service.get_plan(db, owner_id, plan_id)
    changes: Dict[str, Any] = payload.model_dump(exclude_unset=True)

    merged = {f: changes.get(f, getattr(plan, f)) for f in GEOMETRY_FIELDS}
    new_dims = validate_grid_geometry(merged["width_cm"], merged["height_cm"], merged["cell_size_cm"])
    old_width, old_height = plan.grid_width, plan.grid_height
    dims_changed = (new_dims.width, new_dims.height) != (old_width, old_height)

    async def probe() -> ImpactReport:
        if not dims_changed:
            return ImpactReport(destructive=False)
        plants = await plant_placements_service.count_placements(db, plan.id)
        cells = await plans_service.count_plan_cells(db, plan.id)
        return ImpactReport(
            destructive=True,
            plant_count=plants,
            cell_count=cells,
            reason=(
                f"Grid changes from {old_width}x{old_height} to {new_dims.width}x{new_dims.height}; "
                "all cells reset to soil and all plants removed"
            ),
        )

    async def apply() -> Plan:
        updated = await plans_service.update_plan(db, owner_id, plan.id, changes)
        if dims_changed:
            await plans_service.regenerate_grid(db, updated)
        return updated

    outcome = await attempt(apply, probe, confirmed)
    logger.info(
        "plans.update_attempted",
        plan_id=str(plan.id),
        fields=sorted(changes.keys()),
        dims_changed=dims_changed,
        applied=isinstance(outcome, Applied),
    )
    return outcome
