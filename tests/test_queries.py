"""Tests for connection queries."""

from __future__ import annotations

import pytest

from profnet.core.queries import ConnectionQueries
from profnet.errors import StoreUnavailable
from profnet.models.edge import EdgeStatus
from profnet.storage.sqlite_store import SQLiteStore


@pytest.fixture
def queries(store: SQLiteStore) -> ConnectionQueries:
    return ConnectionQueries(store)


@pytest.mark.parametrize("status", list(EdgeStatus))
async def test_connection_exists_any_status(queries: ConnectionQueries, link, status):
    await link("alice", "bob", status)
    assert await queries.connection_exists("alice", "bob") is True


async def test_connection_exists_is_symmetric(queries: ConnectionQueries, link):
    await link("alice", "bob", EdgeStatus.PENDING)
    assert await queries.connection_exists("bob", "alice") is True
    assert await queries.connection_exists("alice", "carol") is False
    assert await queries.connection_exists("carol", "alice") is False


async def test_find_edge_either_direction(queries: ConnectionQueries, link):
    await link("alice", "bob", EdgeStatus.DENIED)
    edge = await queries.find_edge("bob", "alice")
    assert edge is not None
    assert edge.owner_id == "alice"
    assert edge.status is EdgeStatus.DENIED


async def test_direct_connections_both_directions(queries: ConnectionQueries, link):
    await link("alice", "bob")
    await link("carol", "alice")
    await link("alice", "dave", EdgeStatus.PENDING)
    await link("erin", "alice", EdgeStatus.DENIED)

    assert sorted(await queries.direct_connections("alice")) == ["bob", "carol"]
    assert await queries.direct_connections("bob") == ["alice"]
    assert await queries.direct_connections("dave") == []


async def test_direct_connections_of_another_user(queries: ConnectionQueries, link):
    await link("alice", "bob")
    await link("bob", "carol")
    assert sorted(await queries.direct_connections("bob")) == ["alice", "carol"]


async def test_accepted_connection_count(queries: ConnectionQueries, link):
    await link("alice", "bob")
    await link("carol", "alice")
    await link("alice", "dave", EdgeStatus.PENDING)
    await link("alice", "erin", EdgeStatus.DENIED)
    assert await queries.accepted_connection_count("alice") == 2
    assert await queries.accepted_connection_count("dave") == 0


async def test_pending_and_sent_requests(queries: ConnectionQueries, link):
    await link("bob", "alice", EdgeStatus.PENDING)
    await link("carol", "alice", EdgeStatus.PENDING)
    await link("dave", "alice", EdgeStatus.ACCEPTED)
    await link("alice", "erin", EdgeStatus.PENDING)

    assert sorted(await queries.pending_requests("alice")) == ["bob", "carol"]
    assert await queries.sent_requests("alice") == ["erin"]
    assert await queries.sent_requests("bob") == ["alice"]


async def test_reads_are_fresh(queries: ConnectionQueries, store: SQLiteStore, link):
    await link("alice", "bob", EdgeStatus.PENDING)
    assert await queries.direct_connections("alice") == []
    await store.update_edge_status("alice", "bob", EdgeStatus.PENDING, EdgeStatus.ACCEPTED)
    assert await queries.direct_connections("alice") == ["bob"]


async def test_store_failure_surfaces(queries: ConnectionQueries, store: SQLiteStore, link):
    await link("alice", "bob")
    await store.db.execute("DROP TABLE connections")
    with pytest.raises(StoreUnavailable):
        await queries.direct_connections("alice")
    with pytest.raises(StoreUnavailable):
        await queries.connection_exists("alice", "bob")
    with pytest.raises(StoreUnavailable):
        await queries.accepted_connection_count("alice")
