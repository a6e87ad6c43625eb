import asyncio
from unittest.mock import AsyncMock, MagicMock

TEST_URI = "mongodb://db.test:27017"
TEST_DATABASE = "cache_test"


def make_mock_client(ping_side_effect=None):
    """Create a mock AsyncIOMotorClient whose ping is awaitable."""
    mock_client = MagicMock()
    mock_client.admin.command = AsyncMock(return_value={"ok": 1.0}, side_effect=ping_side_effect)
    mock_client.delegate = MagicMock(name="MongoClient")
    return mock_client


def make_gated_ping(gate: asyncio.Event):
    """Ping that stays in flight until the test sets the gate."""

    async def ping(*args, **kwargs):
        await gate.wait()
        return {"ok": 1.0}

    return ping
