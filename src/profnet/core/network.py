"""Wiring for one store session: every component shares the injected store."""

from __future__ import annotations

from profnet.config import Config
from profnet.core.directory import UserDirectory
from profnet.core.lifecycle import RequestLifecycle
from profnet.core.queries import ConnectionQueries
from profnet.core.reachability import ReachabilityEngine
from profnet.events.bus import EventBus
from profnet.storage.base import EdgeStore
from profnet.storage.sqlite_store import SQLiteStore


class Network:
    """Components of the connection engine bound to a single store handle."""

    def __init__(
        self, store: EdgeStore, event_bus: EventBus | None = None, *, config: Config | None = None
    ) -> None:
        config = config or Config()
        self.store = store
        self.bus = event_bus or EventBus()
        self.hop_bound = config.hop_bound
        self.directory = UserDirectory(store, self.bus)
        self.queries = ConnectionQueries(store)
        self.reachability = ReachabilityEngine(store)
        self.lifecycle = RequestLifecycle(
            store,
            self.bus,
            queries=self.queries,
            reachability=self.reachability,
            hop_bound=config.hop_bound,
            growth_threshold=config.growth_threshold,
            require_known_users=config.require_known_users,
        )

    @classmethod
    async def open(cls, config: Config, event_bus: EventBus | None = None) -> Network:
        """Open the SQLite store described by ``config`` and wire the components."""
        store = SQLiteStore(config.db_path, wal_mode=config.wal_mode)
        await store.initialize()
        return cls(store, event_bus, config=config)

    async def close(self) -> None:
        await self.store.close()
