"""Services — orchestrate query fragments and the record store per operation.

Invariants:
    - Services depend on core.repository_protocols, not on infrastructure
    - Services raise typed errors from core.errors; routes never catch them
"""
