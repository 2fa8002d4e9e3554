"""CLI: opencode-relay send"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from opencode_relay.errors import ConnectionError

console = Console()
err_console = Console(stderr=True)

PREVIEW_CHARS = 50


def _get_config():
    from opencode_relay.cli.main import _get_config
    return _get_config()


def _get_client(config):
    from opencode_relay.cli.main import _get_client
    return _get_client(config)


def _run(coro):
    from opencode_relay.cli.main import _run
    return _run(coro)


def _preview(text: str) -> str:
    return text[:PREVIEW_CHARS] + ("..." if len(text) > PREVIEW_CHARS else "")


@click.command("send")
@click.argument("prompt", nargs=-1, required=True)
@click.option("--provider", envvar="OPENCODE_PROVIDER", default=None, help="Provider ID")
@click.option("-m", "--model", envvar="OPENCODE_MODEL", default=None, help="Model ID")
@click.option("--new", "new_session", is_flag=True, help="Start a new session instead of reusing the cached one")
@click.option("-s", "--session", "session_id", default=None, help="Use this server session (must exist)")
@click.option("--latest", is_flag=True, help="Use the server's most recently updated session")
@click.option("--json-output", "--json", is_flag=True)
def send_cmd(prompt: tuple, provider: Optional[str], model: Optional[str], new_session: bool,
             session_id: Optional[str], latest: bool, json_output: bool):
    """Send a prompt and print the reply."""
    if session_id and new_session:
        raise click.UsageError("--session and --new cannot be combined")
    if session_id and latest:
        raise click.UsageError("--session and --latest cannot be combined")
    text = " ".join(prompt).strip()
    if not text:
        raise click.UsageError("Prompt is empty")

    config = _get_config().with_overrides(provider=provider, model=model)

    async def _send():
        async with _get_client(config) as client:
            return await client.send(text, new_session=new_session, session_id=session_id, latest=latest)

    if not json_output:
        console.print(f"[dim]Server: {config.endpoint.base_url}[/dim]")
        console.print(f"[dim]Sending: \"{escape(_preview(text))}\"[/dim]")

    try:
        if json_output:
            reply = _run(_send())
        else:
            with console.status("Waiting for reply..."):
                reply = _run(_send())
    except ConnectionError:
        err_console.print(f"[red]Cannot connect to server at {config.endpoint.base_url}[/red]")
        err_console.print("Start the OpenCode server first:")
        err_console.print(f"  cd <project_folder> && opencode serve --port {config.port}")
        raise SystemExit(1)
    except Exception as e:
        err_console.print(f"[red]Error: {escape(str(e) or type(e).__name__)}[/red]")
        raise SystemExit(1)

    if json_output:
        click.echo(json.dumps(reply.model_dump(), indent=2, default=str))
        return
    console.print(f"[bold]Session:[/bold] {reply.session_id}")
    console.print(Rule("Reply"))
    console.print(reply.text or "[dim](no text)[/dim]", markup=not reply.text)
    console.print(Rule())
