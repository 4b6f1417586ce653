"""Pydantic request/response schemas."""
from garden_planner.schemas.common import ErrorResponse, ImpactOut
from garden_planner.schemas.plans import (
    GridMetadataOut,
    PlanCreate,
    PlanListResponse,
    PlanOut,
    PlanUpdate,
)
from garden_planner.schemas.grid import (
    AreaTypeRequest,
    AreaTypeResult,
    GridCellListResponse,
    GridCellOut,
    GridCellUpdate,
)
from garden_planner.schemas.plants import (
    PlantPlacementListResponse,
    PlantPlacementOut,
    PlantPlacementUpsert,
)
from garden_planner.schemas.analytics import AnalyticsEventCreate, AnalyticsEventOut

__all__ = [
    "ErrorResponse",
    "ImpactOut",
    "PlanCreate",
    "PlanUpdate",
    "PlanOut",
    "PlanListResponse",
    "GridMetadataOut",
    "GridCellOut",
    "GridCellListResponse",
    "GridCellUpdate",
    "AreaTypeRequest",
    "AreaTypeResult",
    "PlantPlacementUpsert",
    "PlantPlacementOut",
    "PlantPlacementListResponse",
    "AnalyticsEventCreate",
    "AnalyticsEventOut",
]
