from contextlib import asynccontextmanager

from fastapi import FastAPI

from connection_cache.config import settings
from connection_cache.database import ConnectionCache
from connection_cache.health.router import router as health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Built once per process; the handshake itself is deferred to the first connect()
    app.state.connection_cache = ConnectionCache.from_settings(settings)
    yield
    await app.state.connection_cache.close()


app = FastAPI(
    title="Connection Cache",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health_router)
