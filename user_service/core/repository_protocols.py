"""Boundary Protocols — contracts between the service layer and the record store.

Invariants:
    - Services depend on these Protocols, never on the SQLAlchemy-backed gateway
    - Statements use `?` placeholders; parameters are positional
    - Implementations provided by infrastructure via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from dataclasses import dataclass, field
from typing import Any, AsyncContextManager, Protocol, Sequence


@dataclass
class ExecutionResult:
    """Outcome of one statement: rows for reads, counts/ids for writes."""
    rows: list[dict[str, Any]] = field(default_factory=list)
    affected_rows: int = 0
    inserted_id: int | None = None


class StatementExecutor(Protocol):
    """Anything that can run one parameterized statement."""
    async def execute(
        self, sql: str, parameters: Sequence[Any] = (),
    ) -> ExecutionResult: ...


class RecordStore(StatementExecutor, Protocol):
    """Pooled store: single statements plus scoped multi-statement transactions."""
    row_lock_clause: str

    def transaction(self) -> AsyncContextManager[StatementExecutor]: ...
