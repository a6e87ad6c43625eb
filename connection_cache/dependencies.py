from fastapi import Request

from connection_cache.database import ConnectionCache


def get_connection_cache(request: Request) -> ConnectionCache:
    """Return the process-wide cache the lifespan stored on app.state."""
    return request.app.state.connection_cache
