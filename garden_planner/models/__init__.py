"""SQLAlchemy models for the garden planner."""
from garden_planner.models.plan import Plan
from garden_planner.models.grid_cell import GRID_CELL_TYPES, SOIL, GridCell
from garden_planner.models.plant_placement import SCORE_COLUMNS, PlantPlacement
from garden_planner.models.analytics_event import ANALYTICS_EVENT_TYPES, AnalyticsEvent

__all__ = [
    "Plan",
    "GridCell",
    "PlantPlacement",
    "AnalyticsEvent",
    "ANALYTICS_EVENT_TYPES",
    "GRID_CELL_TYPES",
    "SOIL",
    "SCORE_COLUMNS",
]
