"""API test fixtures — FastAPI test client over an in-memory record store.

Invariants:
    - get_record_store dependency overridden to use the test store
    - Lifespan is not run: no MySQL engine is ever built
"""

import pytest
from httpx import ASGITransport, AsyncClient

from user_service.api.dependencies import get_record_store
from user_service.main import app


@pytest.fixture
async def client(record_store):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_record_store] = lambda: record_store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
