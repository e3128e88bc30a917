"""Shared test fixtures for Profnet."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path

import pytest

from profnet.config import Config
from profnet.core.network import Network
from profnet.events.bus import EventBus
from profnet.models.edge import Edge, EdgeStatus
from profnet.storage.sqlite_store import SQLiteStore


@pytest.fixture
def tmp_db(tmp_path: Path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture
async def store(tmp_db: Path) -> SQLiteStore:
    s = SQLiteStore(tmp_db)
    await s.initialize()
    yield s
    await s.close()


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(workspace_path=tmp_path)


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def network(store: SQLiteStore, bus: EventBus, config: Config) -> Network:
    return Network(store, bus, config=config)


@pytest.fixture
def add_users(store: SQLiteStore) -> Callable[..., Awaitable[None]]:
    async def _add(*user_ids: str) -> None:
        for user_id in user_ids:
            await store.insert_user(
                {"user_id": user_id, "created_at": "2024-01-01T00:00:00+00:00"}
            )

    return _add


@pytest.fixture
def link(store: SQLiteStore) -> Callable[..., Awaitable[Edge]]:
    """Insert an edge a -> b directly, bypassing the request rules."""

    async def _link(a: str, b: str, status: EdgeStatus = EdgeStatus.ACCEPTED) -> Edge:
        return await store.insert_edge(Edge(owner_id=a, peer_id=b, status=status))

    return _link
