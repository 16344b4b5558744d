"""Health check endpoint shared by both services."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from adapter.mongodb.connection import DATABASE_NAME, get_mongodb_client, ping_mongodb

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


async def _mongodb_status() -> dict:
    if get_mongodb_client() is None:
        return {"status": "unhealthy", "message": "Connection not configured"}
    if not await ping_mongodb():
        return {"status": "unhealthy", "message": "Connection failed"}
    return {"status": "healthy", "message": "Connection successful", "database": DATABASE_NAME}


@router.get("")
async def health():
    """Report MongoDB reachability. 503 when the database cannot be used."""
    mongodb = await _mongodb_status()
    healthy = mongodb["status"] == "healthy"
    if not healthy:
        logger.warning("Health check degraded", extra={"mongodb": mongodb["message"]})

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if healthy else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "services": {"mongodb": mongodb},
        },
    )
