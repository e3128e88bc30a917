"""Profnet event system."""

from profnet.events.bus import EventBus
from profnet.events.types import EventType, RequestEvent, UserEvent

__all__ = ["EventBus", "EventType", "RequestEvent", "UserEvent"]
