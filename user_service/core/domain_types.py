"""Domain Types — identity types and column allowlists for user records.

Invariants:
    - UserId wraps int; the store assigns it
    - WRITABLE_COLUMNS is a strict subset of FILTERABLE_COLUMNS
    - Column names are the only identifiers ever interpolated into SQL text

Design Decisions:
    - Tuples over sets: builder output order must follow caller order, and the
      allowlist order is the canonical column order for responses
"""

from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Column Allowlists ───────────────────────────────────────────

USERS_TABLE = "users"

FILTERABLE_COLUMNS: tuple[str, ...] = ("id", "full_name", "role", "efficiency")
WRITABLE_COLUMNS: tuple[str, ...] = ("full_name", "role", "efficiency")
