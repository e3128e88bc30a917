"""Connection queries: existence, direct connections, counts, open requests."""

from __future__ import annotations

from profnet.models.edge import Edge, EdgeFilter, EdgeStatus
from profnet.storage.base import EdgeStore


class ConnectionQueries:
    """Read-only aggregates over the edge store. Every call reads fresh."""

    def __init__(self, store: EdgeStore) -> None:
        self.store = store

    async def find_edge(self, a: str, b: str) -> Edge | None:
        """The edge between ``a`` and ``b`` in either direction, any status."""
        edges = await self.store.query_edges(EdgeFilter(owner_id=a, peer_id=b))
        if not edges and a != b:
            edges = await self.store.query_edges(EdgeFilter(owner_id=b, peer_id=a))
        return edges[0] if edges else None

    async def connection_exists(self, a: str, b: str) -> bool:
        """True if any edge joins ``a`` and ``b``, whatever its status.

        A denied edge still counts, so a denial blocks re-requesting.
        """
        return await self.find_edge(a, b) is not None

    async def direct_connections(self, user_id: str) -> list[str]:
        """Peers joined to ``user_id`` by one accepted edge, either direction."""
        owned = await self.store.query_edges(
            EdgeFilter(owner_id=user_id, status=EdgeStatus.ACCEPTED)
        )
        received = await self.store.query_edges(
            EdgeFilter(peer_id=user_id, status=EdgeStatus.ACCEPTED)
        )
        connections: list[str] = []
        for edge in owned + received:
            peer = edge.other(user_id)
            if peer not in connections:
                connections.append(peer)
        return connections

    async def accepted_connection_count(self, user_id: str) -> int:
        owned = await self.store.count_edges(
            EdgeFilter(owner_id=user_id, status=EdgeStatus.ACCEPTED)
        )
        received = await self.store.count_edges(
            EdgeFilter(peer_id=user_id, status=EdgeStatus.ACCEPTED)
        )
        return owned + received

    async def pending_requests(self, user_id: str) -> list[str]:
        """Users waiting on ``user_id`` to accept or deny their request."""
        edges = await self.store.query_edges(
            EdgeFilter(peer_id=user_id, status=EdgeStatus.PENDING)
        )
        return [edge.owner_id for edge in edges]

    async def sent_requests(self, user_id: str) -> list[str]:
        edges = await self.store.query_edges(
            EdgeFilter(owner_id=user_id, status=EdgeStatus.PENDING)
        )
        return [edge.peer_id for edge in edges]
