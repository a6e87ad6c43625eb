"""Check that MONGO_URI points at a reachable MongoDB server.

Performs the same handshake the app does on first use, prints the server
version, and exits non-zero if the server can't be reached.

Usage: .venv/bin/python -m scripts.check_connection
"""

import asyncio
import sys

from pymongo.errors import PyMongoError

from connection_cache.config import settings
from connection_cache.database import ConnectionCache


async def check() -> int:
    cache = ConnectionCache.from_settings(settings)
    try:
        client = await cache.connect()
        info = await client.server_info()
    except PyMongoError as exc:
        print(f"Could not connect to MongoDB: {exc}", file=sys.stderr)
        return 1
    finally:
        await cache.close()

    print(f"Connected to MongoDB {info['version']} (database '{settings.DATABASE_NAME}')")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(check()))
