"""User ORM — table definition for user records.

Invariants:
    - id is an autoincrement integer primary key assigned by the store
    - Column names match core.domain_types.FILTERABLE_COLUMNS exactly
    - efficiency is double precision: equality filters on values such as 0.9
      must match what was written

Design Decisions:
    - Model describes the table only; queries go through the record store
      gateway as parameterized text
"""

from sqlalchemy import Double, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from user_service.db.base import Base


class User(Base):
    """A single user record."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(255), nullable=False)
    efficiency: Mapped[float] = mapped_column(Double, nullable=False)
