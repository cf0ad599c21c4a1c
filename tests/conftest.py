"""Root conftest — shared test configuration and an in-memory record store.

Invariants:
    - Every test that asks for a store gets a fresh in-memory SQLite database
    - Tables created from Base.metadata; the service itself never creates them
"""

import os

# Tests never reach a real MySQL server
os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_NAME", "users_test")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from user_service.db.base import Base  # noqa: E402
from user_service.infrastructure.record_store import RecordStoreGateway  # noqa: E402
import user_service.models  # noqa: E402,F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def record_store(test_engine):
    return RecordStoreGateway(test_engine)


@pytest.fixture
async def seed_users(record_store):
    """Insert three users and return them as stored, keyed by full_name."""
    rows = [
        ("Ada Lovelace", "engineer", 0.9),
        ("Grace Hopper", "lead", 0.95),
        ("Alan Turing", "engineer", 0.8),
    ]
    for row in rows:
        await record_store.execute(
            "INSERT INTO users (full_name, role, efficiency) VALUES (?, ?, ?)",
            row,
        )
    result = await record_store.execute("SELECT * FROM users ORDER BY id")
    return {r["full_name"]: r for r in result.rows}
