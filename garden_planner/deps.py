"""Request dependencies shared by routers."""
from uuid import UUID

from fastapi import Header, HTTPException, status

from garden_planner.logging_config import get_logger

logger = get_logger(__name__)

HEADER_USER_ID = "X-User-ID"


async def get_owner_id(x_user_id: str | None = Header(None, alias=HEADER_USER_ID)) -> UUID:
    """
    Owner identity, verified upstream (gateway) and forwarded as X-User-ID.
    Missing or non-UUID value -> 401.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-ID header")
    try:
        return UUID(x_user_id.strip())
    except ValueError:
        logger.info("auth.invalid_user_id")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid X-User-ID header")
