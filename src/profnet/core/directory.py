"""User directory: registration and lookup of network members."""

from __future__ import annotations

import logging

from profnet.events.bus import EventBus
from profnet.events.types import EventType, UserEvent
from profnet.models.user import User
from profnet.storage.base import EdgeStore

logger = logging.getLogger(__name__)


class UserDirectory:
    def __init__(self, store: EdgeStore, event_bus: EventBus) -> None:
        self.store = store
        self.bus = event_bus

    async def register_user(self, user_id: str) -> bool:
        """Register a handle. Returns False if it is already taken."""
        user_id = user_id.strip()
        if not user_id:
            raise ValueError("user_id must not be empty")
        created = await self.store.insert_user(User(user_id=user_id).to_storage())
        if created:
            logger.info("Registered user %s", user_id)
            await self.bus.emit(EventType.USER_REGISTERED, UserEvent(user_id=user_id))
        return created

    async def user_exists(self, user_id: str) -> bool:
        return await self.store.user_exists(user_id)
