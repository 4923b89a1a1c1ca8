# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""anarchybot command line interface.

``serve`` runs the API; the other commands talk to a running server.
"""

from __future__ import annotations

import asyncio
from typing import Any

import click
import httpx
from rich.console import Console
from rich.table import Table

from anarchybot.defaults import SERVER_URL
from anarchybot.settings import Settings

console = Console()

_LOG_COLORS = {"info": "cyan", "warning": "yellow", "error": "red", "chat": "green"}


def _client(ctx: click.Context) -> httpx.Client:
    headers = {}
    token = ctx.obj.get("token")
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.Client(base_url=ctx.obj["url"], headers=headers, timeout=10)


def _request(ctx: click.Context, method: str, path: str, **kwargs: Any) -> httpx.Response | None:
    try:
        with _client(ctx) as client:
            return client.request(method, path, **kwargs)
    except httpx.HTTPError as e:
        console.print(f"[red]Error: {e}[/red]")
        return None


def _message(response: httpx.Response) -> str:
    try:
        return str(response.json().get("message", ""))
    except ValueError:
        return response.text


def format_position(position: dict[str, float] | None) -> str:
    if not position:
        return "-"
    return f"{position['x']:.1f}, {position['y']:.1f}, {position['z']:.1f}"


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--url", default=SERVER_URL, show_default=True, envvar="ANARCHYBOT_URL", help="Server base URL.")
@click.option("--token", default=None, envvar="ANARCHYBOT_API_TOKEN", help="API token, if the server requires one.")
@click.pass_context
def cli(ctx: click.Context, url: str, token: str | None) -> None:
    """anarchybot command line interface."""
    ctx.ensure_object(dict)
    ctx.obj["url"] = url.rstrip("/")
    ctx.obj["token"] = token


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default from settings).")
@click.option("--port", type=int, default=None, help="Bind port (default from settings).")
@click.option("--log-level", default=None, help="Log level (default from settings).")
def serve(host: str | None, port: int | None, log_level: str | None) -> None:
    """Run the HTTP API server."""
    from anarchybot.app import serve as serve_app
    from anarchybot.logging import configure_logging

    overrides = {k: v for k, v in {"host": host, "port": port, "log_level": log_level}.items() if v is not None}
    settings = Settings(**overrides)
    configure_logging(settings)
    asyncio.run(serve_app(settings))


@cli.command("status")
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show bot status."""
    response = _request(ctx, "GET", "/api/bot/status")
    if response is None:
        return
    if response.status_code != 200:
        console.print(f"[red]Error: {_message(response)}[/red]")
        return
    data = response.json()
    online = "[green]online[/green]" if data["online"] else "[red]offline[/red]"
    console.print(f"\n[cyan]Bot Status[/cyan]  {online}")
    console.print(f"  Health: {data['health']:.0f}/20")
    console.print(f"  Food: {data['food']:.0f}/20")
    console.print(f"  Position: {format_position(data['position'])}")
    console.print(f"  Nearby players: {data['nearbyPlayers']}")
    console.print(f"  Inventory full: {'yes' if data['inventoryFull'] else 'no'}")


@cli.command("start")
@click.option("--profile", "profile_id", type=int, default=None, help="Profile id (default profile if omitted).")
@click.pass_context
def start(ctx: click.Context, profile_id: int | None) -> None:
    """Start the bot."""
    params = {"id": profile_id} if profile_id is not None else None
    response = _request(ctx, "POST", "/api/bot/start", params=params)
    if response is None:
        return
    color = "green" if response.status_code == 200 else "red"
    console.print(f"[{color}]{_message(response)}[/{color}]")


@cli.command("stop")
@click.pass_context
def stop(ctx: click.Context) -> None:
    """Stop the bot."""
    response = _request(ctx, "POST", "/api/bot/stop")
    if response is not None:
        console.print(f"[yellow]{_message(response)}[/yellow]")


@cli.command("chat")
@click.argument("message")
@click.pass_context
def chat(ctx: click.Context, message: str) -> None:
    """Send a chat message as the bot."""
    response = _request(ctx, "POST", "/api/bot/chat", json={"message": message})
    if response is None:
        return
    if response.status_code == 200:
        console.print("[green]Sent[/green]")
    else:
        console.print("[red]Message rejected[/red]")


@cli.command("logs")
@click.option("--clear", is_flag=True, help="Delete all log entries.")
@click.pass_context
def logs(ctx: click.Context, clear: bool) -> None:
    """Show recent bot log entries."""
    if clear:
        response = _request(ctx, "DELETE", "/api/logs")
        if response is not None and response.status_code == 204:
            console.print("[green]Logs cleared[/green]")
        return

    response = _request(ctx, "GET", "/api/logs")
    if response is None:
        return
    if response.status_code != 200:
        console.print(f"[red]Error: {_message(response)}[/red]")
        return

    table = Table(show_header=True)
    table.add_column("Time", style="dim")
    table.add_column("Type")
    table.add_column("Message")
    for entry in reversed(response.json()):
        color = _LOG_COLORS.get(entry["type"], "white")
        table.add_row(entry["timestamp"], f"[{color}]{entry['type']}[/{color}]", entry["message"])
    console.print(table)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
