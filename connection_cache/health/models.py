from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness probe result. Never touches the network."""

    status: str = "ok"
    database: Literal["connected", "not_connected"]  # Whether a handshake has completed


class DatabaseHealthResponse(BaseModel):
    """Readiness probe result, returned only after a successful ping."""

    status: str = "ok"
    database: str  # Name of the database the app reads and writes
