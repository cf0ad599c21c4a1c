"""User Records — CRUD operations over the users table.

Invariants:
    - Every field name passes require_allowed_fields before a clause is built
    - Values travel only as positional parameters, aligned with field order
    - update re-reads the row in the same transaction as the UPDATE
    - delete reports a row only when its own DELETE removed it: select (row
      locked where the dialect supports it) and delete share one transaction

Design Decisions:
    - delete_all uses DELETE rather than TRUNCATE: TRUNCATE reports zero
      affected rows on MySQL, which would make "empty table" undetectable
    - Functions over a class: no state beyond the injected store
"""

import logging
from typing import Any, Mapping

from user_service.core.domain_types import (
    FILTERABLE_COLUMNS, USERS_TABLE, WRITABLE_COLUMNS, UserId,
)
from user_service.core.errors import (
    EmptyTableError, EmptyUpdateError, UserNotFoundError,
)
from user_service.core.query_fragments import (
    build_assignment_clause, build_condition_clause, require_allowed_fields,
)
from user_service.core.repository_protocols import RecordStore

logger = logging.getLogger(__name__)

_SELECT_BY_ID = f"SELECT * FROM {USERS_TABLE} WHERE id = ?"


async def create_user(store: RecordStore, values: Mapping[str, Any]) -> UserId:
    """Insert a record and return its store-assigned id."""
    fields = require_allowed_fields(values.keys(), WRITABLE_COLUMNS)
    sql = (
        f"INSERT INTO {USERS_TABLE} ({', '.join(fields)}) "
        f"VALUES ({', '.join('?' for _ in fields)})"
    )
    result = await store.execute(sql, [values[f] for f in fields])
    logger.info("User created", extra={"user_id": result.inserted_id})
    return UserId(result.inserted_id)


async def list_users(
    store: RecordStore, filters: Mapping[str, Any],
) -> list[dict[str, Any]]:
    """All records whose columns equal every given filter value."""
    fields = require_allowed_fields(filters.keys(), FILTERABLE_COLUMNS)
    sql = f"SELECT * FROM {USERS_TABLE}{build_condition_clause(fields)}"
    result = await store.execute(sql, [filters[f] for f in fields])
    return result.rows


async def get_user(store: RecordStore, user_id: UserId) -> dict[str, Any]:
    result = await store.execute(_SELECT_BY_ID, [user_id])
    if not result.rows:
        raise UserNotFoundError(user_id)
    return result.rows[0]


async def update_user(
    store: RecordStore, user_id: UserId, changes: Mapping[str, Any],
) -> dict[str, Any]:
    """Apply changes to one record and return the record as stored afterwards."""
    if not changes:
        raise EmptyUpdateError()
    fields = require_allowed_fields(changes.keys(), WRITABLE_COLUMNS)
    sql = (
        f"UPDATE {USERS_TABLE} SET {build_assignment_clause(fields)} "
        f"WHERE id = ?"
    )
    async with store.transaction() as tx:
        updated = await tx.execute(sql, [*(changes[f] for f in fields), user_id])
        if updated.affected_rows == 0:
            raise UserNotFoundError(user_id)
        result = await tx.execute(_SELECT_BY_ID, [user_id])
    logger.info("User updated", extra={"user_id": user_id})
    return result.rows[0]


async def delete_all_users(store: RecordStore) -> int:
    """Remove every record; an already-empty table is a not-found."""
    result = await store.execute(f"DELETE FROM {USERS_TABLE}")
    if result.affected_rows == 0:
        raise EmptyTableError()
    logger.info(
        "All users deleted", extra={"affected_rows": result.affected_rows},
    )
    return result.affected_rows


async def delete_user(store: RecordStore, user_id: UserId) -> dict[str, Any]:
    """Delete one record atomically and return it as it was."""
    async with store.transaction() as tx:
        found = await tx.execute(_SELECT_BY_ID + store.row_lock_clause, [user_id])
        if not found.rows:
            raise UserNotFoundError(user_id)
        deleted = await tx.execute(
            f"DELETE FROM {USERS_TABLE} WHERE id = ?", [user_id],
        )
        if deleted.affected_rows == 0:
            raise UserNotFoundError(user_id)
    logger.info("User deleted", extra={"user_id": user_id})
    return found.rows[0]
