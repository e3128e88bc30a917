"""SQLite edge store with WAL mode."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import aiosqlite

from profnet.errors import DuplicateEdgeError, StoreUnavailable
from profnet.models.edge import Edge, EdgeFilter, EdgeStatus
from profnet.storage.base import EdgeStore

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Re-raise driver failures as StoreUnavailable."""
    try:
        yield
    except (sqlite3.Error, OSError) as exc:
        logger.error("Store operation %s failed: %s", operation, exc)
        raise StoreUnavailable(f"{operation} failed: {exc}") from exc


class SQLiteStore(EdgeStore):
    """SQLite-backed users and connections tables."""

    def __init__(self, db_path: Path, *, wal_mode: bool = True) -> None:
        self.db_path = db_path
        self.wal_mode = wal_mode
        self._db: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """Create database and apply schema."""
        with _store_errors("initialize"):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            if self._db is None:
                self._db = await aiosqlite.connect(str(self.db_path))
                self._db.row_factory = aiosqlite.Row

            if self.wal_mode:
                await self._db.execute("PRAGMA journal_mode=WAL")

            await self._db.executescript(_load_sql("network.sql"))
            await self._db.commit()
        logger.info("Initialized SQLite store at %s", self.db_path)

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    @property
    def db(self) -> aiosqlite.Connection:
        if self._db is None:
            raise StoreUnavailable("Store not initialized. Call initialize() first.")
        return self._db

    # --- User operations ---

    async def insert_user(self, user: dict[str, Any]) -> bool:
        with _store_errors("insert_user"):
            cursor = await self.db.execute(
                "INSERT OR IGNORE INTO users (user_id, created_at) VALUES (:user_id, :created_at)",
                user,
            )
            await self.db.commit()
        return cursor.rowcount > 0

    async def user_exists(self, user_id: str) -> bool:
        with _store_errors("user_exists"):
            cursor = await self.db.execute(
                "SELECT 1 FROM users WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
        return row is not None

    # --- Edge operations ---

    async def query_edges(self, predicate: EdgeFilter) -> list[Edge]:
        where, params = _where_clause(predicate)
        with _store_errors("query_edges"):
            cursor = await self.db.execute(
                f"SELECT * FROM connections WHERE {where} ORDER BY created_at, owner_id, peer_id",
                params,
            )
            rows = await cursor.fetchall()
        return [Edge.from_storage(dict(row)) for row in rows]

    async def count_edges(self, predicate: EdgeFilter) -> int:
        where, params = _where_clause(predicate)
        with _store_errors("count_edges"):
            cursor = await self.db.execute(
                f"SELECT COUNT(*) FROM connections WHERE {where}", params
            )
            row = await cursor.fetchone()
        return row[0] if row else 0

    async def insert_edge(self, edge: Edge) -> Edge:
        with _store_errors("insert_edge"):
            try:
                await self.db.execute(
                    """INSERT INTO connections (owner_id, peer_id, status, created_at, updated_at)
                       VALUES (:owner_id, :peer_id, :status, :created_at, :updated_at)""",
                    edge.to_storage(),
                )
                await self.db.commit()
            except sqlite3.IntegrityError as exc:
                await self.db.rollback()
                raise DuplicateEdgeError(edge.owner_id, edge.peer_id) from exc
        return edge

    async def update_edge_status(
        self,
        owner_id: str,
        peer_id: str,
        old_status: EdgeStatus,
        new_status: EdgeStatus,
    ) -> Edge | None:
        with _store_errors("update_edge_status"):
            cursor = await self.db.execute(
                """UPDATE connections SET status = ?, updated_at = ?
                   WHERE owner_id = ? AND peer_id = ? AND status = ?""",
                (
                    new_status.code,
                    datetime.now(UTC).isoformat(),
                    owner_id,
                    peer_id,
                    old_status.code,
                ),
            )
            await self.db.commit()
        if cursor.rowcount == 0:
            return None
        edges = await self.query_edges(EdgeFilter(owner_id=owner_id, peer_id=peer_id))
        return edges[0] if edges else None

    # --- Stats ---

    async def get_stats(self) -> dict[str, Any]:
        with _store_errors("get_stats"):
            cursor = await self.db.execute("SELECT COUNT(*) FROM users")
            row = await cursor.fetchone()
            user_count = row[0] if row else 0

            cursor = await self.db.execute(
                "SELECT status, COUNT(*) AS count FROM connections GROUP BY status"
            )
            rows = await cursor.fetchall()

        by_status = {status.value: 0 for status in EdgeStatus}
        for row in rows:
            by_status[EdgeStatus.from_code(row["status"]).value] = row["count"]

        return {
            "users": user_count,
            "connections": by_status,
            "db_path": str(self.db_path),
        }


# --- Helpers ---


def _load_sql(filename: str) -> str:
    """Load SQL file from the schema package."""
    schema_dir = Path(__file__).parent.parent / "schema"
    return (schema_dir / filename).read_text()


def _where_clause(predicate: EdgeFilter) -> tuple[str, list[Any]]:
    """Translate a filter into a parameterized WHERE clause."""
    conditions: list[str] = []
    params: list[Any] = []

    if predicate.owner_id is not None:
        conditions.append("owner_id = ?")
        params.append(predicate.owner_id)
    if predicate.peer_id is not None:
        conditions.append("peer_id = ?")
        params.append(predicate.peer_id)
    if predicate.status is not None:
        conditions.append("status = ?")
        params.append(predicate.status.code)

    where = " AND ".join(conditions) if conditions else "1=1"
    return where, params
