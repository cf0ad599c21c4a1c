"""User Routes — create, list/filter, get, update, delete-all, delete-by-id.

Invariants:
    - Paths are fixed: /create, /get, /get/{id}, /update/{id}, /delete, /delete/{id}
    - Bodies validated by Pydantic; query filters validated by the column
      allowlist in the service layer
    - Errors are raised, never caught here; global handlers build the envelope
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from user_service.api.dependencies import get_record_store
from user_service.core.domain_types import UserId
from user_service.core.repository_protocols import RecordStore
from user_service.schemas.user import UserCreate, UserUpdate
from user_service.services import user_records

logger = logging.getLogger(__name__)
router = APIRouter(tags=["users"])


def _ok(result: dict) -> dict:
    return {"success": True, "result": result}


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate, store: RecordStore = Depends(get_record_store),
):
    """Create a user record; the store assigns the id."""
    user_id = await user_records.create_user(store, body.model_dump())
    return _ok({"id": user_id})


@router.get("/get")
async def list_users(
    request: Request, store: RecordStore = Depends(get_record_store),
):
    """List users; every query parameter becomes an equality filter."""
    filters = dict(request.query_params)
    users = await user_records.list_users(store, filters)
    logger.debug(
        f"Listed {len(users)} users filtered on [{', '.join(filters)}]",
    )
    return _ok({"users": users})


@router.get("/get/{user_id}")
async def get_user(
    user_id: int, store: RecordStore = Depends(get_record_store),
):
    user = await user_records.get_user(store, UserId(user_id))
    return _ok({"users": [user]})


@router.patch("/update/{user_id}")
async def update_user(
    user_id: int,
    body: UserUpdate,
    store: RecordStore = Depends(get_record_store),
):
    """Update the sent fields and return the stored record."""
    user = await user_records.update_user(store, UserId(user_id), body.changes())
    return _ok({"users": user})


@router.delete("/delete")
async def delete_all_users(store: RecordStore = Depends(get_record_store)):
    deleted = await user_records.delete_all_users(store)
    return _ok({"deleted": deleted})


@router.delete("/delete/{user_id}")
async def delete_user(
    user_id: int, store: RecordStore = Depends(get_record_store),
):
    """Delete one record and return it as it was before deletion."""
    user = await user_records.delete_user(store, UserId(user_id))
    return _ok(user)
