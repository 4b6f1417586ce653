"""Coordinate, rectangle and geometry checks."""
from types import SimpleNamespace

import pytest

from garden_planner.errors import InvalidGeometryError, InvalidQueryError, OutOfBoundsError
from garden_planner.services.grid_validation import (
    GridDimensions,
    validate_coordinate,
    validate_grid_geometry,
    validate_rectangle,
)

PLAN = SimpleNamespace(grid_width=20, grid_height=16)


def test_origin_and_far_corner_are_in_bounds() -> None:
    validate_coordinate(PLAN, 0, 0)
    validate_coordinate(PLAN, 19, 15)


@pytest.mark.parametrize("x,y", [(20, 0), (0, 16), (-1, 0), (0, -1)])
def test_coordinate_out_of_bounds(x: int, y: int) -> None:
    with pytest.raises(OutOfBoundsError) as exc:
        validate_coordinate(PLAN, x, y)
    assert exc.value.code == "out_of_bounds"
    assert exc.value.extra["grid_width"] == 20


def test_coordinate_rejects_bool_and_float() -> None:
    with pytest.raises(OutOfBoundsError):
        validate_coordinate(PLAN, True, 0)
    with pytest.raises(OutOfBoundsError):
        validate_coordinate(PLAN, 1.0, 0)


def test_rectangle_order_checked_before_bounds() -> None:
    with pytest.raises(InvalidQueryError):
        validate_rectangle(PLAN, 5, 0, 2, 0)
    with pytest.raises(InvalidQueryError):
        validate_rectangle(PLAN, 0, 50, 0, 40)


def test_rectangle_corner_out_of_bounds() -> None:
    with pytest.raises(OutOfBoundsError):
        validate_rectangle(PLAN, 0, 0, 20, 3)


def test_geometry_ok() -> None:
    assert validate_grid_geometry(500, 400, 25) == GridDimensions(width=20, height=16)
    assert validate_grid_geometry(10, 10, 10) == GridDimensions(width=1, height=1)
    assert validate_grid_geometry(20000, 20000, 100) == GridDimensions(width=200, height=200)


def test_geometry_not_divisible() -> None:
    with pytest.raises(InvalidGeometryError) as exc:
        validate_grid_geometry(510, 400, 25)
    assert exc.value.field == "width_cm"


def test_geometry_bad_cell_size() -> None:
    with pytest.raises(InvalidGeometryError) as exc:
        validate_grid_geometry(300, 300, 30)
    assert exc.value.field == "cell_size_cm"


def test_geometry_grid_too_large() -> None:
    with pytest.raises(InvalidGeometryError) as exc:
        validate_grid_geometry(2010, 100, 10)
    assert exc.value.extra["grid_width"] == 201


def test_geometry_non_positive() -> None:
    with pytest.raises(InvalidGeometryError):
        validate_grid_geometry(0, 100, 10)
