"""Plan updates: renames apply directly, grid dimension changes need confirmation and regenerate the grid."""
import pytest
from sqlalchemy import func, select

from garden_planner.errors import InvalidGeometryError
from garden_planner.models import GridCell, PlantPlacement
from garden_planner.schemas.plans import PlanUpdate
from garden_planner.schemas.plants import PlantPlacementUpsert
from garden_planner.services import area_type_service, plant_placements_service
from garden_planner.services.confirmation_gate import Applied, RequiresConfirmation
from garden_planner.services.plan_dimensions_service import update_plan_with_geometry


async def _count(db, model, plan_id) -> int:
    r = await db.execute(select(func.count()).select_from(model).where(model.plan_id == plan_id))
    return r.scalar_one()


@pytest.mark.asyncio
async def test_rename_never_requires_confirmation(db, owner_id, small_plan) -> None:
    await plant_placements_service.upsert_plant_placement(
        db, owner_id, small_plan.id, 0, 0, PlantPlacementUpsert(plant_name="Leek")
    )
    outcome = await update_plan_with_geometry(
        db, owner_id, small_plan.id, PlanUpdate(name="Renamed", orientation=180, latitude=51.5), confirmed=False
    )
    assert isinstance(outcome, Applied)
    assert outcome.result.name == "Renamed"
    assert outcome.result.orientation == 180
    assert await _count(db, PlantPlacement, small_plan.id) == 1


@pytest.mark.asyncio
async def test_same_dimensions_different_units_is_not_destructive(db, owner_id, small_plan) -> None:
    # 100x75 @ 25 -> 4x3; 200x150 @ 50 -> still 4x3
    outcome = await update_plan_with_geometry(
        db,
        owner_id,
        small_plan.id,
        PlanUpdate(width_cm=200, height_cm=150, cell_size_cm=50),
        confirmed=False,
    )
    assert isinstance(outcome, Applied)
    assert (outcome.result.grid_width, outcome.result.grid_height) == (4, 3)
    assert await _count(db, GridCell, small_plan.id) == 12


@pytest.mark.asyncio
async def test_dimension_change_on_empty_plan_still_requires_confirmation(db, owner_id, small_plan) -> None:
    outcome = await update_plan_with_geometry(
        db, owner_id, small_plan.id, PlanUpdate(width_cm=150), confirmed=False
    )
    assert isinstance(outcome, RequiresConfirmation)
    assert outcome.impact.destructive is True
    assert outcome.impact.plant_count == 0
    assert outcome.impact.cell_count == 12
    assert small_plan.width_cm == 100


@pytest.mark.asyncio
async def test_confirmed_dimension_change_regenerates(db, owner_id, small_plan) -> None:
    await plant_placements_service.upsert_plant_placement(
        db, owner_id, small_plan.id, 1, 1, PlantPlacementUpsert(plant_name="Squash")
    )
    await area_type_service.set_area_type(db, owner_id, small_plan.id, 3, 0, 3, 2, "path", confirmed=True)
    await db.commit()

    pending = await update_plan_with_geometry(
        db, owner_id, small_plan.id, PlanUpdate(width_cm=150, height_cm=50), confirmed=False
    )
    assert isinstance(pending, RequiresConfirmation)
    assert pending.impact.plant_count == 1

    outcome = await update_plan_with_geometry(
        db, owner_id, small_plan.id, PlanUpdate(width_cm=150, height_cm=50), confirmed=True
    )
    assert isinstance(outcome, Applied)
    plan = outcome.result
    assert (plan.grid_width, plan.grid_height) == (6, 2)
    assert await _count(db, PlantPlacement, plan.id) == 0
    assert await _count(db, GridCell, plan.id) == 12
    r = await db.execute(select(func.count()).select_from(GridCell).where(GridCell.plan_id == plan.id, GridCell.type != "soil"))
    assert r.scalar_one() == 0


@pytest.mark.asyncio
async def test_invalid_merged_geometry_rejected_before_writes(db, owner_id, small_plan) -> None:
    with pytest.raises(InvalidGeometryError):
        await update_plan_with_geometry(
            db, owner_id, small_plan.id, PlanUpdate(cell_size_cm=50), confirmed=True
        )
    assert small_plan.cell_size_cm == 25
    assert await _count(db, GridCell, small_plan.id) == 12
