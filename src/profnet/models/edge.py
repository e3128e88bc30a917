"""Edge model for connections between users."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EdgeStatus(StrEnum):
    """Approval state of a connection edge."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DENIED = "denied"

    @property
    def code(self) -> int:
        return _STATUS_CODES[self]

    @classmethod
    def from_code(cls, code: int | str) -> EdgeStatus:
        return _CODE_STATUSES[int(code)]


_STATUS_CODES: dict[EdgeStatus, int] = {
    EdgeStatus.PENDING: 0,
    EdgeStatus.ACCEPTED: 1,
    EdgeStatus.DENIED: 2,
}
_CODE_STATUSES: dict[int, EdgeStatus] = {v: k for k, v in _STATUS_CODES.items()}


class Edge(BaseModel):
    """A connection record, directional at creation, symmetric once stored."""

    owner_id: str
    peer_id: str
    status: EdgeStatus = EdgeStatus.PENDING
    created_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    updated_at: str | None = None

    def other(self, user_id: str) -> str:
        """Return the endpoint opposite ``user_id``."""
        if user_id == self.owner_id:
            return self.peer_id
        if user_id == self.peer_id:
            return self.owner_id
        raise ValueError(f"{user_id} is not an endpoint of {self.owner_id} -> {self.peer_id}")

    def to_storage(self) -> dict[str, Any]:
        data = self.model_dump()
        data["status"] = self.status.code
        return data

    @classmethod
    def from_storage(cls, row: dict[str, Any]) -> Edge:
        data = dict(row)
        data["status"] = EdgeStatus.from_code(data["status"])
        return cls(**data)

    def to_response(self) -> dict[str, Any]:
        return {
            "_v": "1.0",
            "owner_id": self.owner_id,
            "peer_id": self.peer_id,
            "status": self.status.value,
        }


class EdgeFilter(BaseModel):
    """Conjunction over owner, peer and status. Unset fields match anything."""

    model_config = ConfigDict(frozen=True)

    owner_id: str | None = None
    peer_id: str | None = None
    status: EdgeStatus | None = None
