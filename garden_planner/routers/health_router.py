"""Health: /health (liveness), /health/ready (DB and Redis, if configured)."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from garden_planner.config import get_settings
from garden_planner.db import get_db
from garden_planner.logging_config import get_logger

router = APIRouter(tags=["health"])
logger = get_logger(__name__)


@router.get("/health")
def health() -> dict[str, str]:
    """Liveness for load balancer / Docker. Always 200."""
    return {"status": "ok"}


@router.get("/health/ready")
async def ready(db: AsyncSession = Depends(get_db)):
    """Readiness: 200 when the database (and Redis, if configured) answer, else 503."""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("health.db_fail", error=str(e))
        return JSONResponse(status_code=503, content={"status": "unhealthy", "db": "fail"})

    settings = get_settings()
    if settings.redis_url:
        try:
            client = Redis.from_url(settings.redis_url, decode_responses=True)
            await client.ping()
            await client.aclose()
        except Exception as e:
            logger.warning("health.redis_fail", error=str(e))
            return JSONResponse(status_code=503, content={"status": "unhealthy", "redis": "fail"})
        return {"status": "ok", "db": "ok", "redis": "ok"}

    return {"status": "ok", "db": "ok"}
