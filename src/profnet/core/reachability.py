"""Reachability engine: bounded BFS over the accepted-edge graph."""

from __future__ import annotations

import asyncio
import logging

from profnet.models.edge import EdgeFilter, EdgeStatus
from profnet.storage.base import EdgeStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_HOPS = 3


class ReachabilityEngine:
    """Hop-bounded reachability through accepted connections.

    Edge direction is ignored: an accepted edge is an undirected adjacency.
    Pending and denied edges never contribute a hop.
    """

    def __init__(self, store: EdgeStore) -> None:
        self.store = store

    async def neighbors(self, user_id: str) -> set[str]:
        """Users one accepted edge away from ``user_id``."""
        owned = await self.store.query_edges(
            EdgeFilter(owner_id=user_id, status=EdgeStatus.ACCEPTED)
        )
        received = await self.store.query_edges(
            EdgeFilter(peer_id=user_id, status=EdgeStatus.ACCEPTED)
        )
        return {edge.peer_id for edge in owned} | {edge.owner_id for edge in received}

    async def reachable(self, source: str, max_hops: int = DEFAULT_MAX_HOPS) -> set[str]:
        """Every user within ``max_hops`` accepted edges of ``source``, itself included.

        Each level queries its frontier concurrently; a node is expanded only
        at the first level it is discovered.
        """
        if max_hops < 0:
            raise ValueError(f"max_hops must be >= 0, got {max_hops}")

        visited: set[str] = {source}
        frontier: set[str] = {source}

        for level in range(1, max_hops + 1):
            if not frontier:
                break
            ordered = sorted(frontier)
            adjacency = await asyncio.gather(*(self.neighbors(node) for node in ordered))
            discovered: set[str] = set()
            for found in adjacency:
                discovered |= found
            frontier = discovered - visited
            visited |= frontier
            logger.debug(
                "Reachability from %s: level %d added %d user(s)", source, level, len(frontier)
            )

        return visited

    async def within_hops(
        self, source: str, target: str, max_hops: int = DEFAULT_MAX_HOPS
    ) -> bool:
        """Whether ``target`` is reachable from ``source`` in at most ``max_hops`` hops."""
        if source == target and max_hops >= 0:
            return True
        return target in await self.reachable(source, max_hops)
