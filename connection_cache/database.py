"""MongoDB connection cache.

One ConnectionCache is built at process startup (via the FastAPI lifespan)
and injected wherever a client is needed. The first connect() performs the
handshake; every later or concurrent caller shares that same handshake and
receives the same AsyncIOMotorClient.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import MongoClient

from connection_cache.config import Settings

logger = logging.getLogger(__name__)


class ConnectionCache:
    def __init__(
        self,
        uri: str,
        database_name: str,
        options: Optional[dict[str, Any]] = None,
        client_factory: Callable[..., AsyncIOMotorClient] = AsyncIOMotorClient,
    ):
        self._uri = uri
        self._database_name = database_name
        self._options = options or {}
        self._client_factory = client_factory

        self.connection: Optional[AsyncIOMotorClient] = None
        self.pending: Optional[asyncio.Task] = None

    @property
    def database_name(self) -> str:
        return self._database_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectionCache":
        return cls(
            settings.MONGO_URI,
            settings.DATABASE_NAME,
            options={"appname": settings.APP_NAME},
        )

    async def connect(self) -> AsyncIOMotorClient:
        """Return the cached client, performing the handshake on first use.

        Concurrent callers arriving while the handshake is in flight all await
        the same task. The await is shielded so cancelling one caller does not
        cancel the handshake the others are waiting on.

        A failed handshake raises the driver's error to every awaiter of that
        attempt, then clears the pending slot so the next call starts over.
        """
        if self.connection is not None:
            return self.connection

        # No await between the check and the assignment below
        if self.pending is None:
            self.pending = asyncio.create_task(self._handshake())
            self.pending.add_done_callback(self._on_handshake_done)

        return await asyncio.shield(self.pending)

    def get_native_handle(self) -> Optional[MongoClient]:
        """Return the pymongo client wrapped by the Motor client, or None before connect()."""
        if self.connection is None:
            return None
        return self.connection.delegate

    def get_database(self) -> AsyncIOMotorDatabase:
        if self.connection is None:
            raise RuntimeError("Database client is not connected. Await connect() first.")
        return self.connection[self._database_name]

    async def close(self) -> None:
        """Close the cached client and empty the cache record."""
        if self.pending is not None and not self.pending.done():
            await asyncio.wait([self.pending])

        client = self.connection
        self.connection = None
        self.pending = None
        if client is not None:
            client.close()
            logger.info("MongoDB connection closed")

    async def _handshake(self) -> AsyncIOMotorClient:
        logger.info("Connecting to MongoDB database '%s'", self._database_name)
        client = self._client_factory(self._uri, **self._options)
        try:
            # Motor connects lazily; ping forces server selection now
            await client.admin.command("ping")
        except Exception as exc:
            logger.warning("MongoDB handshake failed: %s", exc)
            client.close()
            raise
        logger.info("MongoDB connection established")
        return client

    def _on_handshake_done(self, task: asyncio.Task) -> None:
        # A close() may have replaced the record while this task was running
        if task is not self.pending:
            return
        if task.cancelled() or task.exception() is not None:
            self.pending = None
            return
        self.connection = task.result()
