"""ORM Models — table metadata for the users table.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete on import
"""

from user_service.models.user import User  # noqa: F401
