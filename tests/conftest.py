import os
from unittest.mock import MagicMock

# Settings are validated at import time, so this must run before the package is imported
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from connection_cache.database import ConnectionCache  # noqa: E402
from connection_cache.dependencies import get_connection_cache  # noqa: E402
from connection_cache.main import app  # noqa: E402
from tests.helpers import TEST_DATABASE, TEST_URI, make_mock_client  # noqa: E402


@pytest.fixture
def mock_client():
    return make_mock_client()


@pytest.fixture
def client_factory(mock_client):
    return MagicMock(return_value=mock_client)


@pytest.fixture
def cache(client_factory):
    return ConnectionCache(
        TEST_URI,
        TEST_DATABASE,
        options={"appname": "tests"},
        client_factory=client_factory,
    )


@pytest.fixture
async def client(cache):
    app.dependency_overrides[get_connection_cache] = lambda: cache
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
