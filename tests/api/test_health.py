"""Health probes — liveness always up, readiness tracks the record store."""

from user_service.api.dependencies import get_record_store
from user_service.main import app


async def test_liveness(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json()["result"]["status"] == "healthy"


async def test_readiness_with_reachable_store(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json() == {"success": True, "result": {"status": "ready"}}


async def test_readiness_with_unreachable_store(client):
    class _DownStore:
        async def health_check(self):
            return False

    app.dependency_overrides[get_record_store] = lambda: _DownStore()
    res = await client.get("/health/ready")
    assert res.status_code == 503
    assert res.json()["result"]["reason"] == "store_unavailable"


async def test_readiness_failure_is_logged(client, caplog):
    class _DownStore:
        async def health_check(self):
            return False

    app.dependency_overrides[get_record_store] = lambda: _DownStore()
    await client.get("/health/ready")
    assert "record store unreachable" in caplog.text
