"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the record store is unreachable (readiness)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from user_service.api.dependencies import get_record_store
from user_service.infrastructure.record_store import RecordStoreGateway

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"success": True, "result": {"status": "healthy"}}


@router.get("/ready")
async def readiness_check(
    store: RecordStoreGateway = Depends(get_record_store),
):
    """Readiness probe, including record store connectivity."""
    if not await store.health_check():
        logger.warning("Readiness check failed: record store unreachable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "success": False,
                "result": {"status": "not_ready", "reason": "store_unavailable"},
            },
        )
    return {"success": True, "result": {"status": "ready"}}
