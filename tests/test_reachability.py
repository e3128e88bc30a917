"""Tests for hop-bounded reachability."""

from __future__ import annotations

import pytest

from profnet.core.reachability import ReachabilityEngine
from profnet.errors import StoreUnavailable
from profnet.models.edge import EdgeStatus
from profnet.storage.sqlite_store import SQLiteStore


@pytest.fixture
def engine(store: SQLiteStore) -> ReachabilityEngine:
    return ReachabilityEngine(store)


@pytest.fixture
async def chain(link) -> None:
    """A - B - C - D, accepted, with mixed edge directions."""
    await link("A", "B")
    await link("C", "B")
    await link("C", "D")


async def test_chain_within_three_hops(engine: ReachabilityEngine, chain):
    assert await engine.within_hops("A", "D", 3) is True


async def test_chain_not_within_two_hops(engine: ReachabilityEngine, chain):
    assert await engine.within_hops("A", "D", 2) is False
    assert await engine.within_hops("A", "C", 2) is True


async def test_default_bound_is_three(engine: ReachabilityEngine, chain, link):
    await link("D", "E")
    assert await engine.within_hops("A", "D") is True
    assert await engine.within_hops("A", "E") is False


async def test_direction_is_ignored(engine: ReachabilityEngine, chain):
    assert await engine.within_hops("D", "A", 3) is True


@pytest.mark.parametrize("hops", [0, 1, 3, 10])
async def test_user_reaches_self(engine: ReachabilityEngine, hops):
    assert await engine.within_hops("lonely", "lonely", hops) is True


async def test_zero_hops_reaches_only_self(engine: ReachabilityEngine, chain):
    assert await engine.reachable("A", 0) == {"A"}
    assert await engine.within_hops("A", "B", 0) is False


async def test_negative_hops_rejected(engine: ReachabilityEngine):
    with pytest.raises(ValueError):
        await engine.reachable("A", -1)


async def test_reachable_set(engine: ReachabilityEngine, chain):
    assert await engine.reachable("A", 1) == {"A", "B"}
    assert await engine.reachable("A", 2) == {"A", "B", "C"}
    assert await engine.reachable("B", 3) == {"A", "B", "C", "D"}


@pytest.mark.parametrize("status", [EdgeStatus.PENDING, EdgeStatus.DENIED])
async def test_only_accepted_edges_are_hops(engine: ReachabilityEngine, link, status):
    await link("A", "B")
    await link("B", "C", status)
    assert await engine.within_hops("A", "C", 3) is False
    assert await engine.neighbors("B") == {"A"}


async def test_cycles_terminate(engine: ReachabilityEngine, link):
    await link("A", "B")
    await link("B", "C")
    await link("C", "A")
    await link("C", "D")
    assert await engine.reachable("A", 3) == {"A", "B", "C", "D"}
    assert await engine.within_hops("A", "D", 2) is True


async def test_frontier_queried_once_per_node(store: SQLiteStore, link):
    await link("A", "B")
    await link("A", "C")
    await link("B", "C")
    await link("C", "D")

    engine = ReachabilityEngine(store)
    expanded: list[str] = []
    original = engine.neighbors

    async def counting(user_id: str) -> set[str]:
        expanded.append(user_id)
        return await original(user_id)

    engine.neighbors = counting  # type: ignore[method-assign]
    await engine.reachable("A", 3)
    assert sorted(expanded) == ["A", "B", "C", "D"]


async def test_store_failure_surfaces(engine: ReachabilityEngine, store: SQLiteStore, chain):
    await store.db.execute("DROP TABLE connections")
    with pytest.raises(StoreUnavailable):
        await engine.within_hops("A", "D", 3)
