"""Database metadata — SQLAlchemy declarative Base.

Invariants:
    - The service never creates or migrates tables; metadata serves tests
      and operators provisioning the store
"""
