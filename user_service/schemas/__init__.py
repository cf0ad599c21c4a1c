"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; the column allowlist in
      core/ still gates every field name that reaches SQL
"""
