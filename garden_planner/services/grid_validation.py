"""
Coordinate and grid geometry validation. Pure functions, no I/O.
Bounds always come from the plan record the caller just loaded; never from request input.
"""
from dataclasses import dataclass
from typing import Any

from garden_planner.errors import InvalidGeometryError, InvalidQueryError, OutOfBoundsError

ALLOWED_CELL_SIZES_CM = (10, 25, 50, 100)
GRID_MIN = 1
GRID_MAX = 200


@dataclass(frozen=True)
class GridDimensions:
    """Grid size in cells."""

    width: int
    height: int


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_coordinate(plan: Any, x: Any, y: Any) -> None:
    """
    Raise OutOfBoundsError unless x, y are integers with
    0 <= x < plan.grid_width and 0 <= y < plan.grid_height.
    """
    grid_width = plan.grid_width
    grid_height = plan.grid_height
    if not _is_int(x) or not _is_int(y):
        raise OutOfBoundsError(
            f"Coordinates must be integers, got x={x!r}, y={y!r}",
            field="x" if not _is_int(x) else "y",
            extra={"grid_width": grid_width, "grid_height": grid_height},
        )
    if not (0 <= x < grid_width and 0 <= y < grid_height):
        raise OutOfBoundsError(
            f"Coordinates out of bounds. Grid dimensions: {grid_width}x{grid_height}, provided: x={x}, y={y}",
            field="x" if not 0 <= x < grid_width else "y",
            extra={"grid_width": grid_width, "grid_height": grid_height, "x": x, "y": y},
        )


def validate_rectangle(plan: Any, x1: int, y1: int, x2: int, y2: int) -> None:
    """Check corner order (x1 <= x2, y1 <= y2) then both corners against the grid."""
    validate_rectangle_order(x1, y1, x2, y2)
    validate_coordinate(plan, x1, y1)
    validate_coordinate(plan, x2, y2)


def validate_rectangle_order(x1: int, y1: int, x2: int, y2: int) -> None:
    """Corner order only; usable before the plan is loaded."""
    if x1 > x2 or y1 > y2:
        raise InvalidQueryError(
            f"Invalid coordinate order. x1 ({x1}) must be <= x2 ({x2}) and y1 ({y1}) must be <= y2 ({y2})",
            field="x1" if x1 > x2 else "y1",
        )


def validate_grid_geometry(width_cm: Any, height_cm: Any, cell_size_cm: Any) -> GridDimensions:
    """
    Validate plan geometry and return the derived grid dimensions.
    cell_size_cm in {10, 25, 50, 100}; width/height positive and divisible by cell size;
    both grid dimensions within [1, 200].
    """
    if not _is_int(cell_size_cm) or cell_size_cm not in ALLOWED_CELL_SIZES_CM:
        raise InvalidGeometryError(
            "Cell size must be 10, 25, 50, or 100 cm",
            field="cell_size_cm",
            extra={"allowed_cell_sizes_cm": list(ALLOWED_CELL_SIZES_CM)},
        )
    for field, value in (("width_cm", width_cm), ("height_cm", height_cm)):
        if not _is_int(value) or value <= 0:
            raise InvalidGeometryError(f"{field} must be a positive integer", field=field)
        if value % cell_size_cm != 0:
            raise InvalidGeometryError(
                f"{field} ({value}) must be divisible by cell size ({cell_size_cm})",
                field=field,
                extra={"cell_size_cm": cell_size_cm},
            )

    dims = GridDimensions(width=width_cm // cell_size_cm, height=height_cm // cell_size_cm)
    if not (GRID_MIN <= dims.width <= GRID_MAX and GRID_MIN <= dims.height <= GRID_MAX):
        raise InvalidGeometryError(
            f"Calculated grid dimensions must be between {GRID_MIN} and {GRID_MAX}, "
            f"got {dims.width}x{dims.height}",
            field="width_cm" if not GRID_MIN <= dims.width <= GRID_MAX else "height_cm",
            extra={
                "grid_width": dims.width,
                "grid_height": dims.height,
                "min": GRID_MIN,
                "max": GRID_MAX,
            },
        )
    return dims
