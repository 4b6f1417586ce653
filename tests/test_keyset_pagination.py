"""
Following next_cursor visits every row exactly once, in order, including rows that tie
on the leading sort column (all cells of a fresh grid share one updated_at).
"""
from datetime import datetime, timezone

import pytest
from sqlalchemy import update

from garden_planner.errors import InvalidCursorError
from garden_planner.models import Plan
from garden_planner.schemas.plans import PlanCreate
from garden_planner.schemas.plants import PlantPlacementUpsert
from garden_planner.services import grid_cells_service, plans_service, plant_placements_service
from garden_planner.services.grid_cells_service import GridCellFilters


async def _walk_cells(db, owner_id, plan_id, limit, **kwargs):
    seen, cursor, pages = [], None, 0
    while True:
        page = await grid_cells_service.list_grid_cells(
            db, owner_id, plan_id, GridCellFilters(), limit=limit, cursor=cursor, **kwargs
        )
        pages += 1
        assert len(page.items) <= limit
        seen.extend((c.x, c.y) for c in page.items)
        if page.next_cursor is None:
            return seen, pages
        cursor = page.next_cursor


@pytest.mark.asyncio
async def test_grid_cells_desc_with_ties(db, owner_id, small_plan) -> None:
    seen, pages = await _walk_cells(db, owner_id, small_plan.id, limit=5)
    expected = sorted(((x, y) for x in range(4) for y in range(3)), reverse=True)
    assert seen == expected
    assert pages == 3


@pytest.mark.asyncio
async def test_grid_cells_asc_with_ties(db, owner_id, small_plan) -> None:
    seen, _ = await _walk_cells(db, owner_id, small_plan.id, limit=4, order="asc")
    assert seen == sorted((x, y) for x in range(4) for y in range(3))


@pytest.mark.asyncio
async def test_grid_cells_sort_by_x(db, owner_id, small_plan) -> None:
    seen, _ = await _walk_cells(db, owner_id, small_plan.id, limit=7, sort="x", order="asc")
    assert seen == sorted((x, y) for x in range(4) for y in range(3))


@pytest.mark.asyncio
async def test_exact_multiple_of_limit_has_no_empty_trailing_page(db, owner_id, small_plan) -> None:
    seen, pages = await _walk_cells(db, owner_id, small_plan.id, limit=6)
    assert len(seen) == 12
    assert pages == 2


@pytest.mark.asyncio
async def test_plans_with_identical_updated_at(db, owner_id) -> None:
    for i in range(5):
        await plans_service.create_plan(
            db, owner_id, PlanCreate(name=f"Plot {i}", width_cm=100, height_cm=100, cell_size_cm=50)
        )
    fixed = datetime(2026, 5, 1, 8, 0, tzinfo=timezone.utc)
    await db.execute(update(Plan).where(Plan.owner_id == owner_id).values(updated_at=fixed))
    await db.commit()

    for order in ("desc", "asc"):
        ids, cursor = [], None
        while True:
            page = await plans_service.list_plans(db, owner_id, limit=2, cursor=cursor, order=order)
            ids.extend(p.id for p in page.items)
            if page.next_cursor is None:
                break
            cursor = page.next_cursor
        assert len(ids) == 5
        assert ids == sorted(ids, reverse=(order == "desc"))


@pytest.mark.asyncio
async def test_plants_tie_on_name(db, owner_id, small_plan) -> None:
    cells = [(3, 0), (0, 2), (1, 1), (0, 0)]
    for x, y in cells:
        await plant_placements_service.upsert_plant_placement(
            db, owner_id, small_plan.id, x, y, PlantPlacementUpsert(plant_name="Basil")
        )
    await plant_placements_service.upsert_plant_placement(
        db, owner_id, small_plan.id, 2, 2, PlantPlacementUpsert(plant_name="Arugula")
    )
    await db.commit()

    seen, cursor = [], None
    while True:
        page = await plant_placements_service.list_plant_placements(
            db, owner_id, small_plan.id, limit=2, cursor=cursor
        )
        seen.extend((p.plant_name, p.x, p.y) for p in page.items)
        if page.next_cursor is None:
            break
        cursor = page.next_cursor
    assert seen == [("Arugula", 2, 2)] + sorted(("Basil", x, y) for x, y in cells)


@pytest.mark.asyncio
async def test_cursor_of_other_resource_rejected(db, owner_id, small_plan) -> None:
    await plans_service.create_plan(
        db, owner_id, PlanCreate(name="Second", width_cm=100, height_cm=100, cell_size_cm=50)
    )
    page = await plans_service.list_plans(db, owner_id, limit=1)
    assert page.next_cursor is not None
    with pytest.raises(InvalidCursorError):
        await plant_placements_service.list_plant_placements(
            db, owner_id, small_plan.id, limit=10, cursor=page.next_cursor
        )
