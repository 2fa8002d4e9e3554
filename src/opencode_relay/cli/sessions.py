"""CLI: opencode-relay sessions list|create|rename|delete|messages"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from opencode_relay.errors import ConnectionError

console = Console()
err_console = Console(stderr=True)


def _get_config():
    from opencode_relay.cli.main import _get_config
    return _get_config()


def _get_client(config):
    from opencode_relay.cli.main import _get_client
    return _get_client(config)


def _run(coro):
    from opencode_relay.cli.main import _run
    return _run(coro)


def _run_remote(coro):
    config = _get_config()
    try:
        return _run(coro)
    except ConnectionError:
        err_console.print(f"[red]Cannot connect to server at {config.endpoint.base_url}[/red]")
        err_console.print(f"  cd <project_folder> && opencode serve --port {config.port}")
        raise SystemExit(1)
    except Exception as e:
        err_console.print(f"[red]Error: {escape(str(e) or type(e).__name__)}[/red]")
        raise SystemExit(1)


@click.group()
def sessions():
    """Sessions stored on the server."""


@sessions.command("list")
@click.option("--json-output", "--json", is_flag=True)
def sessions_list(json_output):
    """List server sessions, most recently updated first."""
    config = _get_config()

    async def _list():
        async with _get_client(config) as client:
            return await client.sessions.list(), client.cache.cached(client.endpoint)

    result, cached_id = _run_remote(_list())
    result.sort(key=lambda s: s.updated_at, reverse=True)
    if json_output:
        click.echo(json.dumps([s.model_dump(by_alias=True) for s in result], indent=2))
        return
    table = Table(title=f"Sessions on {config.endpoint} ({len(result)} total)")
    table.add_column("ID", style="bold")
    table.add_column("Title")
    table.add_column("Updated")
    for s in result:
        sid = f"{s.id} *" if s.id == cached_id else s.id
        table.add_row(sid, escape(s.title), s.updated_display())
    console.print(table)
    if cached_id:
        console.print("[dim]* session remembered for this server[/dim]")


@sessions.command("create")
@click.option("--title", default=None)
def sessions_create(title: Optional[str]):
    """Create a new server session (does not touch the local cache)."""
    config = _get_config()

    async def _create():
        async with _get_client(config) as client:
            return await client.sessions.create(title=title)

    with console.status("Creating session..."):
        session = _run_remote(_create())
    console.print(f"[green]Session created: {session.id}[/green]")


@sessions.command("rename")
@click.argument("session_id")
@click.argument("title")
def sessions_rename(session_id, title):
    """Rename a server session."""
    config = _get_config()

    async def _rename():
        async with _get_client(config) as client:
            return await client.rename_session(session_id, title)

    session = _run_remote(_rename())
    if session is None:
        console.print(f"[red]Could not rename session {session_id}.[/red]")
        return
    console.print(f"[green]Session {session.id} renamed to \"{escape(session.title)}\".[/green]")


@sessions.command("delete")
@click.argument("session_id")
def sessions_delete(session_id):
    """Delete a server session."""
    config = _get_config()

    async def _delete():
        async with _get_client(config) as client:
            return await client.delete_session(session_id)

    with console.status("Deleting..."):
        ok = _run_remote(_delete())
    if ok:
        console.print(f"[green]Session {session_id} deleted.[/green]")
    else:
        console.print(f"[red]Could not delete session {session_id}.[/red]")


@sessions.command("messages")
@click.argument("session_id")
@click.option("--limit", default=None, type=int)
@click.option("--json-output", "--json", is_flag=True)
def sessions_messages(session_id, limit, json_output):
    """Show the messages of a server session."""
    config = _get_config()

    async def _messages():
        async with _get_client(config) as client:
            return await client.get_messages(session_id, limit=limit)

    messages = _run_remote(_messages())
    if messages is None:
        console.print(f"[red]Could not fetch messages for {session_id}.[/red]")
        return
    if json_output:
        click.echo(json.dumps([m.model_dump(by_alias=True) for m in messages], indent=2))
        return
    if not messages:
        console.print("[yellow]No messages.[/yellow]")
        return
    for m in messages:
        style = "cyan" if m.info.role == "user" else "green"
        console.print(f"[{style}]{m.info.role or '?'}:[/{style}]")
        console.print(m.text or "[dim](no text)[/dim]", markup=not m.text)
        console.print()
