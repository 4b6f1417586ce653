"""API routers."""
from garden_planner.routers.health_router import router as health_router
from garden_planner.routers.plans_router import router as plans_router
from garden_planner.routers.grid_router import router as grid_router
from garden_planner.routers.plants_router import router as plants_router
from garden_planner.routers.analytics_router import router as analytics_router

__all__ = [
    "health_router",
    "plans_router",
    "grid_router",
    "plants_router",
    "analytics_router",
]
