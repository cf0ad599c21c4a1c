"""Request Dependencies — hand the startup-built record store to route handlers.

Invariants:
    - The store lives on app.state, set by the lifespan in main.py
    - Tests swap it through app.dependency_overrides[get_record_store]
"""

from fastapi import Request

from user_service.infrastructure.record_store import RecordStoreGateway


def get_record_store(request: Request) -> RecordStoreGateway:
    """FastAPI dependency for the record store."""
    store = getattr(request.app.state, "record_store", None)
    if store is None:
        raise RuntimeError("Record store not initialized")
    return store
