"""User Records Service — CRUD over a single relational users table.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
