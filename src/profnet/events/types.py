"""Event types and payloads for Profnet."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from profnet.errors import RejectReason


class EventType(StrEnum):
    USER_REGISTERED = "user.registered"

    REQUEST_CREATED = "request.created"
    REQUEST_REJECTED = "request.rejected"
    REQUEST_ACCEPTED = "request.accepted"
    REQUEST_DENIED = "request.denied"


class UserEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str


class RequestEvent(BaseModel):
    """A request between two users; ``reason`` is set only for rejections."""

    model_config = ConfigDict(frozen=True)

    owner_id: str
    peer_id: str
    reason: RejectReason | None = None


EventPayload = UserEvent | RequestEvent

PAYLOAD_TYPES: dict[EventType, type[BaseModel]] = {
    EventType.USER_REGISTERED: UserEvent,
    EventType.REQUEST_CREATED: RequestEvent,
    EventType.REQUEST_REJECTED: RequestEvent,
    EventType.REQUEST_ACCEPTED: RequestEvent,
    EventType.REQUEST_DENIED: RequestEvent,
}
