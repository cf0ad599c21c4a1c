"""Record Store Gateway — pooled async engine executing parameterized statements.

Invariants:
    - Every statement runs inside a transaction: its own, or one opened by
      transaction() for multi-statement operations
    - Connections are acquired per statement/transaction and always released
    - All SQLAlchemy exceptions mapped to ExecutionError (core/errors.py)
    - Reads return plain dict rows; writes return affected rows and, for
      INSERT, the store-assigned id

Design Decisions:
    - Constructed explicitly at startup and injected (app.state + Depends),
      no module-level singleton
    - Engine passed in rather than built here: tests hand over an in-memory
      SQLite engine whose StaticPool rejects pool sizing arguments
    - No retry: a failed statement surfaces immediately
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Sequence

from sqlalchemy import text
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from user_service.config import Settings
from user_service.core.errors import ExecutionError
from user_service.core.query_fragments import bind_positional
from user_service.core.repository_protocols import ExecutionResult

logger = logging.getLogger(__name__)


def _to_execution_error(e: SQLAlchemyError) -> ExecutionError:
    """Map a SQLAlchemy failure onto the service's single store error."""
    detail = str(e.orig) if isinstance(e, DBAPIError) and e.orig else str(e)
    if isinstance(e, IntegrityError):
        logger.error(f"DB integrity error: {detail}")
        return ExecutionError(detail, "commit")
    if isinstance(e, OperationalError):
        logger.error(f"DB operational error: {detail}")
        return ExecutionError(detail, "execute")
    if isinstance(e, DBAPIError):
        logger.error(f"DB driver error: {detail}")
        return ExecutionError(detail, "query")
    logger.error(f"SQLAlchemy error: {detail}")
    return ExecutionError(detail, "operation")


def _to_execution_result(sql: str, result: CursorResult) -> ExecutionResult:
    if result.returns_rows:
        return ExecutionResult(rows=[dict(row) for row in result.mappings().all()])
    is_insert = sql.lstrip().upper().startswith("INSERT")
    return ExecutionResult(
        affected_rows=max(result.rowcount, 0),
        inserted_id=result.lastrowid if is_insert else None,
    )


class StoreTransaction:
    """Executes statements on one connection inside an open transaction."""

    def __init__(self, connection: AsyncConnection):
        self._connection = connection

    async def execute(
        self, sql: str, parameters: Sequence[Any] = (),
    ) -> ExecutionResult:
        template, binds = bind_positional(sql, parameters)
        logger.debug(f"Executing: {sql}")
        try:
            result = await self._connection.execute(text(template), binds)
        except SQLAlchemyError as e:
            raise _to_execution_error(e) from e
        return _to_execution_result(sql, result)


class RecordStoreGateway:
    """Pooled record store with single-statement and transactional execution."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @property
    def row_lock_clause(self) -> str:
        """Suffix that locks selected rows until commit; SQLite has no row locks."""
        if self.engine.dialect.name == "sqlite":
            return ""
        return " FOR UPDATE"

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[StoreTransaction]:
        """Open a transaction: commit on success, roll back on any exception."""
        try:
            async with self.engine.begin() as connection:
                yield StoreTransaction(connection)
        except SQLAlchemyError as e:
            raise _to_execution_error(e) from e

    async def execute(
        self, sql: str, parameters: Sequence[Any] = (),
    ) -> ExecutionResult:
        """Run one statement in its own transaction."""
        async with self.transaction() as tx:
            return await tx.execute(sql, parameters)

    async def health_check(self) -> bool:
        """Check store connectivity (for readiness probes)."""
        try:
            await self.execute("SELECT 1")
            return True
        except Exception as e:
            logger.error(f"Record store health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def create_record_store(settings: Settings) -> RecordStoreGateway:
    """Build the pooled gateway from configuration."""
    engine = create_async_engine(
        settings.store_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
    )
    return RecordStoreGateway(engine)
