"""Tests for the event bus."""

from __future__ import annotations

import pytest

from profnet.errors import RejectReason
from profnet.events.bus import EventBus
from profnet.events.types import EventPayload, EventType, RequestEvent, UserEvent


async def test_listeners_filtered_by_type():
    bus = EventBus()
    accepted: list[EventPayload] = []
    everything: list[EventType] = []

    async def on_accept(event_type: EventType, payload: EventPayload) -> None:
        accepted.append(payload)

    async def on_any(event_type: EventType, payload: EventPayload) -> None:
        everything.append(event_type)

    bus.on(EventType.REQUEST_ACCEPTED, on_accept)
    bus.on_all(on_any)

    await bus.emit(EventType.USER_REGISTERED, UserEvent(user_id="alice"))
    await bus.emit(EventType.REQUEST_ACCEPTED, RequestEvent(owner_id="alice", peer_id="bob"))

    assert accepted == [RequestEvent(owner_id="alice", peer_id="bob")]
    assert everything == [EventType.USER_REGISTERED, EventType.REQUEST_ACCEPTED]


async def test_emit_counts_successful_deliveries():
    bus = EventBus()

    async def ok(event_type: EventType, payload: EventPayload) -> None:
        pass

    async def broken(event_type: EventType, payload: EventPayload) -> None:
        raise RuntimeError("listener down")

    bus.on(EventType.REQUEST_REJECTED, broken)
    bus.on(EventType.REQUEST_REJECTED, ok)
    payload = RequestEvent(owner_id="a", peer_id="a", reason=RejectReason.INVALID_REQUEST)
    assert await bus.emit(EventType.REQUEST_REJECTED, payload) == 1
    assert await bus.emit(EventType.REQUEST_CREATED, RequestEvent(owner_id="a", peer_id="b")) == 0


async def test_emit_rejects_mismatched_payload():
    bus = EventBus()
    with pytest.raises(TypeError):
        await bus.emit(EventType.REQUEST_CREATED, UserEvent(user_id="alice"))
