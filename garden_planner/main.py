"""FastAPI application entrypoint."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from garden_planner import __version__
from garden_planner.errors import PlanEditorError
from garden_planner.logging_config import configure_logging, get_logger
from garden_planner.middleware.correlation_id import CorrelationIdMiddleware
from garden_planner.middleware.rate_limit import RateLimitMiddleware
from garden_planner.routers import (
    analytics_router,
    grid_router,
    health_router,
    plans_router,
    plants_router,
)
from garden_planner.schemas.common import ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("app_started", version=__version__)
    yield
    logger.info("app_shutdown")


app = FastAPI(
    title="Garden Planner",
    version=__version__,
    lifespan=lifespan,
)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(health_router)
app.include_router(plans_router)
app.include_router(grid_router)
app.include_router(plants_router)
app.include_router(analytics_router)


@app.exception_handler(PlanEditorError)
async def plan_editor_error_handler(request: Request, exc: PlanEditorError) -> JSONResponse:
    """Domain errors -> ErrorResponse with the error's status and code."""
    extra = dict(exc.extra)
    if exc.field:
        extra.setdefault("field", exc.field)
    log = logger.warning if exc.status_code >= 409 else logger.info
    log("request.rejected", code=exc.code, status=exc.status_code, detail=exc.message, path=request.url.path)
    body = ErrorResponse(detail=exc.message, code=exc.code, extra=extra or None)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint: app name and version."""
    return {"name": "garden_planner", "version": __version__}
