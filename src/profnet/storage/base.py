"""Abstract edge store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from profnet.models.edge import Edge, EdgeFilter, EdgeStatus


class EdgeStore(ABC):
    """Persistence boundary for users and connection edges.

    Implementations raise ``StoreUnavailable`` when the backing database fails
    and ``DuplicateEdgeError`` when an insert would create a second edge for
    the same unordered pair.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize database schema and connections."""

    @abstractmethod
    async def close(self) -> None:
        """Close all connections."""

    # --- User operations ---

    @abstractmethod
    async def insert_user(self, user: dict[str, Any]) -> bool:
        """Insert a user. Returns False if the handle is already taken."""

    @abstractmethod
    async def user_exists(self, user_id: str) -> bool:
        """Whether a user with this handle is registered."""

    # --- Edge operations ---

    @abstractmethod
    async def query_edges(self, predicate: EdgeFilter) -> list[Edge]:
        """Return every edge matching all set fields of ``predicate``."""

    @abstractmethod
    async def count_edges(self, predicate: EdgeFilter) -> int:
        """Count edges matching ``predicate``."""

    @abstractmethod
    async def insert_edge(self, edge: Edge) -> Edge:
        """Insert an edge. Returns the inserted edge."""

    @abstractmethod
    async def update_edge_status(
        self,
        owner_id: str,
        peer_id: str,
        old_status: EdgeStatus,
        new_status: EdgeStatus,
    ) -> Edge | None:
        """Move the (owner, peer) edge from ``old_status`` to ``new_status``.

        Returns the updated edge, or None when no edge is in ``old_status``.
        """

    # --- Stats ---

    @abstractmethod
    async def get_stats(self) -> dict[str, Any]:
        """User and edge counts."""
