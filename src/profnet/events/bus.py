"""In-process delivery of user and request events."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Callable, Coroutine
from typing import Any

from profnet.events.types import PAYLOAD_TYPES, EventPayload, EventType

logger = logging.getLogger(__name__)

Listener = Callable[[EventType, EventPayload], Coroutine[Any, Any, None]]


class EventBus:
    """Async pub/sub keyed by event type.

    Each event type carries one payload model; ``emit`` refuses a payload of
    the wrong model so listeners can rely on its fields.
    """

    def __init__(self) -> None:
        self._listeners: dict[EventType, list[Listener]] = defaultdict(list)
        self._global_listeners: list[Listener] = []

    def on(self, event_type: EventType, listener: Listener) -> None:
        self._listeners[event_type].append(listener)

    def on_all(self, listener: Listener) -> None:
        self._global_listeners.append(listener)

    async def emit(self, event_type: EventType, payload: EventPayload) -> int:
        """Deliver ``payload`` to matching listeners. Returns how many succeeded."""
        expected = PAYLOAD_TYPES[event_type]
        if not isinstance(payload, expected):
            raise TypeError(
                f"{event_type} expects {expected.__name__}, got {type(payload).__name__}"
            )

        delivered = 0
        for listener in self._listeners.get(event_type, []) + self._global_listeners:
            try:
                await listener(event_type, payload)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Error in event listener for %s", event_type)
            else:
                delivered += 1
        return delivered
