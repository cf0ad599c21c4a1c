"""User Schemas — request bodies for create and partial update.

Invariants:
    - UserCreate: full_name, role, efficiency all required
    - UserUpdate: any subset of writable columns, at least one present
      (checked by the route), none explicitly null, no unknown keys
    - id is never accepted in a body

Design Decisions:
    - extra="forbid" on UserUpdate: unknown keys fail validation with a
      field-level 400 instead of reaching the SQL builder
    - exclude_unset dump: only sent keys reach the SET clause
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class UserCreate(BaseModel):
    """New user record: all columns except the store-assigned id."""
    full_name: str = Field(min_length=1, max_length=255)
    role: str = Field(min_length=1, max_length=255)
    efficiency: float


class UserUpdate(BaseModel):
    """Partial update. Only the keys the client sent are written."""
    model_config = ConfigDict(extra="forbid")

    full_name: str | None = Field(None, min_length=1, max_length=255)
    role: str | None = Field(None, min_length=1, max_length=255)
    efficiency: float | None = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = [name for name in self.model_fields_set if getattr(self, name) is None]
        if nulls:
            raise ValueError(f"fields cannot be null: {', '.join(sorted(nulls))}")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent."""
        return self.model_dump(exclude_unset=True)
