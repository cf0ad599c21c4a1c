"""Query Fragments — pure builders for WHERE/SET clauses over trusted column names.

Invariants:
    - Empty field list → empty string (no dangling WHERE or SET)
    - Field order in the output equals caller order; placeholder i binds value i
    - Only allowlisted column names reach the builders (require_allowed_fields)
    - Values are never interpolated, only `?` placeholders

Design Decisions:
    - `?` placeholders in fragments, rewritten to named binds by bind_positional
      just before execution: keeps fragments driver-agnostic
    - No deduplication: callers pass mapping keys, which are already unique
"""

from typing import Any, Iterable, Sequence

from user_service.core.errors import UnknownFieldError

PLACEHOLDER = "?"


def require_allowed_fields(
    fields: Iterable[str], allowed: Sequence[str],
) -> list[str]:
    """Return fields as a list, or raise UnknownFieldError naming every stranger."""
    fields = list(fields)
    unknown = [f for f in fields if f not in allowed]
    if unknown:
        raise UnknownFieldError(unknown)
    return fields


def build_condition_clause(fields: Iterable[str]) -> str:
    """`" WHERE f1 = ? AND f2 = ?"`, or "" when there are no fields."""
    fields = list(fields)
    if not fields:
        return ""
    return " WHERE " + " AND ".join(f"{f} = {PLACEHOLDER}" for f in fields)


def build_assignment_clause(fields: Iterable[str]) -> str:
    """`"f1 = ?,f2 = ?"`, or "" when there are no fields."""
    fields = list(fields)
    if not fields:
        return ""
    return ",".join(f"{f} = {PLACEHOLDER}" for f in fields)


def bind_positional(
    sql: str, parameters: Sequence[Any],
) -> tuple[str, dict[str, Any]]:
    """Rewrite `?` placeholders to `:p0, :p1, ...` and pair them with values."""
    pieces = sql.split(PLACEHOLDER)
    if len(pieces) - 1 != len(parameters):
        raise ValueError(
            f"Statement has {len(pieces) - 1} placeholders "
            f"but {len(parameters)} parameters were given",
        )
    names = [f"p{i}" for i in range(len(parameters))]
    template = pieces[0] + "".join(
        f":{name}{piece}" for name, piece in zip(names, pieces[1:])
    )
    return template, dict(zip(names, parameters))
