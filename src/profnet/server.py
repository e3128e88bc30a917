"""FastMCP server: one network tool and a status resource."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Annotated, Any, Literal

from fastmcp import FastMCP
from pydantic import Field

from profnet import __version__
from profnet.config import Config
from profnet.core.network import Network
from profnet.errors import StoreUnavailable

logger = logging.getLogger(__name__)


def _json(data: dict[str, Any]) -> str:
    return json.dumps(data, default=str)


def _ok(data: dict[str, Any]) -> str:
    """Return a versioned JSON success response."""
    return _json({**data, "_v": "1.0"})


def _err(msg: str) -> str:
    """Return a versioned JSON error response."""
    return _json({"_v": "1.0", "error": msg})


def create_server(workspace: str | Path, config: Config | None = None) -> FastMCP:
    """Create the FastMCP server over the workspace database."""
    config = config or Config.load(Path(workspace))

    state: dict[str, Any] = {}
    _lock = asyncio.Lock()

    @asynccontextmanager
    async def _lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
        try:
            yield {}
        finally:
            async with _lock:
                network = state.pop("network", None)
                if network is not None:
                    await network.close()
                    logger.info("Closed network store at %s", config.db_path)

    mcp = FastMCP("profnet", version=__version__, lifespan=_lifespan)

    async def _init() -> Network:
        async with _lock:
            if "init_failed" in state:
                raise RuntimeError(f"Profnet init previously failed for {config.db_path}")
            if "network" not in state:
                try:
                    state["network"] = await Network.open(config)
                except StoreUnavailable as e:
                    state["init_failed"] = True
                    logger.error("Failed to initialize database: %s", e)
                    raise RuntimeError(f"Profnet init failed: {config.db_path}") from e
        return state["network"]

    @mcp.tool()
    async def pn_network(
        action: Annotated[
            Literal[
                "register",
                "request",
                "accept",
                "deny",
                "connections",
                "pending",
                "sent",
                "exists",
                "count",
                "reach",
                "status",
            ],
            Field(description="Operation to run"),
        ],
        user: Annotated[
            str | None,
            Field(description="Acting user (all actions except status)"),
        ] = None,
        other: Annotated[
            str | None,
            Field(
                description=(
                    "Target of request/exists/reach, or requester for accept/deny;"
                    " omit for reach to list everyone reachable"
                )
            ),
        ] = None,
        max_hops: Annotated[
            int | None,
            Field(description="Hop bound for reach (default: configured bound)", ge=0),
        ] = None,
    ) -> str:
        """Manage professional connections: send, accept and deny requests, list connections."""
        net = await _init()

        try:
            if action == "status":
                return _ok(await net.store.get_stats())

            if not user or not user.strip():
                return _err(f"user is required for {action}")
            user = user.strip()

            if action == "register":
                created = await net.directory.register_user(user)
                return _ok({"user_id": user, "created": created})

            if action == "connections":
                items = await net.queries.direct_connections(user)
                return _ok({"user_id": user, "count": len(items), "connections": items})

            if action == "pending":
                items = await net.queries.pending_requests(user)
                return _ok({"user_id": user, "count": len(items), "requests": items})

            if action == "sent":
                items = await net.queries.sent_requests(user)
                return _ok({"user_id": user, "count": len(items), "requests": items})

            if action == "count":
                count = await net.queries.accepted_connection_count(user)
                return _ok({"user_id": user, "count": count})

            other = other.strip() if other else None

            if action == "reach":
                hops = net.hop_bound if max_hops is None else max_hops
                if other is None:
                    users = sorted(await net.reachability.reachable(user, hops) - {user})
                    return _ok(
                        {"user_id": user, "max_hops": hops, "count": len(users), "reachable": users}
                    )
                within = await net.reachability.within_hops(user, other, hops)
                return _ok({"user_id": user, "other": other, "max_hops": hops, "within": within})

            if not other:
                return _err(f"other is required for {action}")

            if action == "request":
                result = await net.lifecycle.request_connection(user, other)
                return _json(result.to_response())

            if action == "accept":
                result = await net.lifecycle.accept_request(user, other)
                return _json(result.to_response())

            if action == "deny":
                result = await net.lifecycle.deny_request(user, other)
                return _json(result.to_response())

            if action == "exists":
                exists = await net.queries.connection_exists(user, other)
                return _ok({"user_id": user, "other": other, "exists": exists})
        except StoreUnavailable as e:
            return _err(f"Store unavailable: {e}")

        return _err(f"Unknown action: {action}")

    @mcp.resource("pn://status")
    async def pn_resource_status() -> str:
        """User and connection counts."""
        net = await _init()
        try:
            return _ok(await net.store.get_stats())
        except StoreUnavailable as e:
            return _err(f"Store unavailable: {e}")

    return mcp
