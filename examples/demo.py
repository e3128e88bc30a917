"""Walkthrough of the connection workflow on a throwaway database.

Registers a handful of users, builds a small accepted network, then shows the
request rules at work: duplicates, permanent denials and the hop-bounded
growth rule.
"""

import asyncio
import tempfile
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from profnet.config import Config
from profnet.core.network import Network
from profnet.models.result import RequestResult

console = Console()


def step_header(num: int, title: str) -> None:
    console.print()
    console.print(
        Panel(
            f"[bold cyan]Step {num}:[/bold cyan] [yellow]{title}[/yellow]",
            border_style="cyan",
        )
    )


def show(label: str, result: RequestResult) -> None:
    if result.ok:
        status = result.edge.status.value if result.edge else "no change"
        console.print(f"  [green]✓[/green] {label}: {status}")
    else:
        console.print(f"  [red]✗[/red] {label}: {result.reason} ({result.message})")


async def demo() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        net = await Network.open(Config(workspace_path=Path(tmp)))
        try:
            step_header(1, "Register users")
            people = [
                "ada", "grace", "linus", "guido", "barbara",
                "ken", "dennis", "edsger", "margaret",
            ]
            for person in people:
                await net.directory.register_user(person)
            console.print(f"  Registered {len(people)} users")

            step_header(2, "Request, accept, deny")
            show("ada -> grace", await net.lifecycle.request_connection("ada", "grace"))
            show("grace accepts", await net.lifecycle.accept_request("grace", "ada"))
            show("ada -> linus", await net.lifecycle.request_connection("ada", "linus"))
            show("linus denies", await net.lifecycle.deny_request("linus", "ada"))
            show("ada -> linus again", await net.lifecycle.request_connection("ada", "linus"))
            show("ada -> ada", await net.lifecycle.request_connection("ada", "ada"))

            step_header(3, "Grow past the threshold")
            for peer in ["guido", "barbara", "ken", "dennis", "edsger"]:
                await net.lifecycle.request_connection(peer, "ada")
                await net.lifecycle.accept_request("ada", peer)
            await net.lifecycle.request_connection("grace", "margaret")
            await net.lifecycle.accept_request("margaret", "grace")
            await net.directory.register_user("alan")
            await net.directory.register_user("niklaus")
            await net.lifecycle.request_connection("niklaus", "alan")
            await net.lifecycle.accept_request("alan", "niklaus")
            await net.lifecycle.request_connection("alan", "margaret")
            await net.lifecycle.accept_request("margaret", "alan")

            table = Table(title="ada's connections")
            table.add_column("User")
            for peer in sorted(await net.queries.direct_connections("ada")):
                table.add_row(peer)
            console.print(table)
            count = await net.queries.accepted_connection_count("ada")
            console.print(f"  ada has {count} accepted connections")

            step_header(4, "Hop-bounded requests")
            show("ada -> alan (3 hops)", await net.lifecycle.request_connection("ada", "alan"))
            show(
                "ada -> niklaus (4 hops)",
                await net.lifecycle.request_connection("ada", "niklaus"),
            )
            reachable = sorted(await net.reachability.reachable("ada") - {"ada"})
            console.print(f"  Reachable within 3 hops: {', '.join(reachable)}")
        finally:
            await net.close()


if __name__ == "__main__":
    asyncio.run(demo())
