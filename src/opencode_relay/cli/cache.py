"""CLI: opencode-relay cache list|delete|clear"""

import click
from rich.console import Console
from rich.table import Table

from opencode_relay.cache import SessionCache
from opencode_relay.store import FileSessionStore

console = Console()


def _get_config():
    from opencode_relay.cli.main import _get_config
    return _get_config()


def _local_cache() -> SessionCache:
    return SessionCache(FileSessionStore(_get_config().sessions_dir))


@click.group()
def cache():
    """Locally remembered sessions, one per server."""


@cache.command("list")
def cache_list():
    """List remembered sessions."""
    entries = _local_cache().entries()
    if not entries:
        console.print("[yellow]No sessions saved.[/yellow]")
        return
    table = Table(title=f"Saved sessions ({len(entries)})")
    table.add_column("Server", style="bold")
    table.add_column("Session")
    for e in entries:
        table.add_row(e.server, e.session_id)
    console.print(table)


@cache.command("delete")
def cache_delete():
    """Forget the session remembered for --host/--port."""
    endpoint = _get_config().endpoint
    if _local_cache().forget(endpoint):
        console.print(f"[green]Deleted saved session for {endpoint}[/green]")
    else:
        console.print(f"[yellow]No saved session for {endpoint}[/yellow]")


@cache.command("clear")
def cache_clear():
    """Forget every remembered session."""
    count = _local_cache().clear()
    console.print(f"[green]Deleted {count} saved session(s).[/green]")
