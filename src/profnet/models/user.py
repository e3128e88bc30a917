"""User identity model."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class User(BaseModel):
    """A network member. The handle is opaque to the connection engine."""

    user_id: str
    created_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())

    def to_storage(self) -> dict:
        return self.model_dump()
