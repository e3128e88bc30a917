"""CLI: init, serve, status, user, request, accept, deny, connections, pending, reach."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from profnet.config import Config
from profnet.core.network import Network
from profnet.errors import StoreUnavailable
from profnet.models.result import RequestResult

T = TypeVar("T")


def _load_config(ctx: click.Context) -> Config:
    return ctx.find_object(Config) or Config.load()


def _run(config: Config, op: Callable[[Network], Awaitable[T]]) -> T:
    """Open the workspace network, run one operation, close it."""
    if not config.db_path.exists():
        click.echo(f"Error: No database at {config.db_path}. Run 'profnet init' first.", err=True)
        sys.exit(1)

    async def _session() -> T:
        net = await Network.open(config)
        try:
            return await op(net)
        finally:
            await net.close()

    try:
        return asyncio.run(_session())
    except StoreUnavailable as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _print_result(result: RequestResult) -> None:
    console = Console()
    if not result.ok:
        console.print(f"[red]✗[/red] {result.message}")
        sys.exit(2)
    if result.action == "request" and result.edge:
        console.print(f"[green]✓[/green] Sent connection request to {result.edge.peer_id}")
    elif result.changed and result.edge:
        console.print(
            f"[green]✓[/green] Request from {result.edge.owner_id} {result.edge.status.value}"
        )
    else:
        console.print("[yellow]No pending request to resolve[/yellow]")


@click.group()
@click.version_option(package_name="profnet")
@click.option(
    "--workspace",
    type=click.Path(file_okay=False),
    default=None,
    help="Workspace directory (default: $PROFNET_WORKSPACE or ~/.profnet)",
)
@click.pass_context
def main(ctx: click.Context, workspace: str | None) -> None:
    """Profnet: professional network connection engine."""
    path = Path(workspace).expanduser().resolve() if workspace else None
    config = Config.load(path)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = config


@main.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Initialize a new profnet workspace."""
    config = _load_config(ctx)

    async def _init() -> None:
        net = await Network.open(config)
        await net.close()

    try:
        asyncio.run(_init())
    except StoreUnavailable as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    config.save()
    click.echo(f"Initialized workspace at {config.workspace_path}")
    click.echo(f"Database: {config.db_path}")


@main.command()
@click.option("--transport", type=click.Choice(["stdio"]), default="stdio")
@click.pass_context
def serve(ctx: click.Context, transport: str) -> None:
    """Start the MCP server."""
    config = _load_config(ctx)
    if not config.db_path.exists():
        click.echo(f"Error: No database at {config.db_path}. Run 'profnet init' first.", err=True)
        sys.exit(1)

    from profnet.server import create_server

    server = create_server(config.workspace_path, config)
    server.run(transport=transport)  # type: ignore[arg-type]


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show user and connection counts."""
    config = _load_config(ctx)

    async def _status(net: Network) -> dict:
        return await net.store.get_stats()

    stats = _run(config, _status)
    click.echo(json.dumps(stats, indent=2))


@main.group()
def user() -> None:
    """Manage users."""


@user.command("add")
@click.argument("user_id")
@click.pass_context
def user_add(ctx: click.Context, user_id: str) -> None:
    """Register a user handle."""
    config = _load_config(ctx)

    async def _add(net: Network) -> bool:
        return await net.directory.register_user(user_id)

    if _run(config, _add):
        click.echo(f"Registered {user_id}")
    else:
        click.echo(f"User {user_id} already exists")


@main.command()
@click.argument("requester")
@click.argument("target")
@click.pass_context
def request(ctx: click.Context, requester: str, target: str) -> None:
    """Send a connection request from REQUESTER to TARGET."""
    config = _load_config(ctx)

    async def _request(net: Network) -> RequestResult:
        return await net.lifecycle.request_connection(requester, target)

    _print_result(_run(config, _request))


@main.command()
@click.argument("user_id")
@click.argument("requester")
@click.pass_context
def accept(ctx: click.Context, user_id: str, requester: str) -> None:
    """Accept the request REQUESTER sent to USER_ID."""
    config = _load_config(ctx)

    async def _accept(net: Network) -> RequestResult:
        return await net.lifecycle.accept_request(user_id, requester)

    _print_result(_run(config, _accept))


@main.command()
@click.argument("user_id")
@click.argument("requester")
@click.pass_context
def deny(ctx: click.Context, user_id: str, requester: str) -> None:
    """Deny the request REQUESTER sent to USER_ID."""
    config = _load_config(ctx)

    async def _deny(net: Network) -> RequestResult:
        return await net.lifecycle.deny_request(user_id, requester)

    _print_result(_run(config, _deny))


@main.command()
@click.argument("user_id")
@click.pass_context
def connections(ctx: click.Context, user_id: str) -> None:
    """List USER_ID's accepted connections."""
    config = _load_config(ctx)

    async def _connections(net: Network) -> list[str]:
        return await net.queries.direct_connections(user_id)

    items = _run(config, _connections)
    table = Table(title=f"{user_id}'s connections")
    table.add_column("#", justify="right")
    table.add_column("User")
    for i, peer in enumerate(items, start=1):
        table.add_row(str(i), peer)
    Console().print(table)


@main.command()
@click.argument("user_id")
@click.pass_context
def pending(ctx: click.Context, user_id: str) -> None:
    """List connection requests waiting on USER_ID."""
    config = _load_config(ctx)

    async def _pending(net: Network) -> list[str]:
        return await net.queries.pending_requests(user_id)

    items = _run(config, _pending)
    if not items:
        click.echo(f"No pending requests for {user_id}")
        return
    table = Table(title="Friend requests")
    table.add_column("#", justify="right")
    table.add_column("From")
    for i, requester in enumerate(items, start=1):
        table.add_row(str(i), requester)
    Console().print(table)


@main.command()
@click.argument("user_id")
@click.argument("target", required=False)
@click.option("--hops", type=click.IntRange(min=0), default=None, help="Hop bound")
@click.pass_context
def reach(ctx: click.Context, user_id: str, target: str | None, hops: int | None) -> None:
    """Show who USER_ID reaches within the hop bound, or test one TARGET."""
    config = _load_config(ctx)
    bound = config.hop_bound if hops is None else hops

    if target:

        async def _within(net: Network) -> bool:
            return await net.reachability.within_hops(user_id, target, bound)

        within = _run(config, _within)
        verdict = "[green]within[/green]" if within else "[red]not within[/red]"
        Console().print(f"{target} is {verdict} {bound} hop(s) of {user_id}")
        return

    async def _reachable(net: Network) -> set[str]:
        return await net.reachability.reachable(user_id, bound)

    users = sorted(_run(config, _reachable) - {user_id})
    Console().print(
        Panel(
            "\n".join(users) if users else "(nobody)",
            title=f"Reachable from {user_id} within {bound} hop(s)",
        )
    )
