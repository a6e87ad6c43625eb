import logging

from fastapi import APIRouter, Depends, HTTPException
from pymongo.errors import PyMongoError

from connection_cache.database import ConnectionCache
from connection_cache.dependencies import get_connection_cache
from connection_cache.health.models import DatabaseHealthResponse, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(cache: ConnectionCache = Depends(get_connection_cache)):
    connected = cache.get_native_handle() is not None
    return HealthResponse(database="connected" if connected else "not_connected")


@router.get("/db", response_model=DatabaseHealthResponse)
async def database_health_check(cache: ConnectionCache = Depends(get_connection_cache)):
    """Connect on first use, then ping the server.

    The first request after boot performs the handshake; later requests reuse
    the cached client and only pay for the ping.
    """
    try:
        client = await cache.connect()
        await client.admin.command("ping")
    except PyMongoError as exc:
        logger.warning("Database health check failed: %s", exc)
        raise HTTPException(status_code=503, detail="Database unavailable") from exc
    return DatabaseHealthResponse(database=cache.database_name)
