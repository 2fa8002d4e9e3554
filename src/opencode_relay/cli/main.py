"""
opencode-relay CLI.

Commands:
  opencode-relay send <prompt>        Prompt the server, reusing its cached session
  opencode-relay cache <cmd>          Local endpoint -> session records
  opencode-relay sessions <cmd>       Sessions stored on the server
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install opencode-relay[cli]")

from opencode_relay.client import AsyncOpenCode
from opencode_relay.config import Config, load_config

err_console = Console(stderr=True)


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=False)],
        force=True,
    )
    if verbosity < 2:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def _get_config() -> Config:
    return click.get_current_context().find_object(Config)


def _get_client(config: Config) -> AsyncOpenCode:
    return AsyncOpenCode(config)


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("--host", envvar="OPENCODE_HOST", default=None, help="Server host (default 127.0.0.1)")
@click.option("-p", "--port", envvar="OPENCODE_PORT", type=int, default=None, help="Server port (default 4096)")
@click.option("--config-file", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="JSON config file (default ~/.opencode-relay/config.json)")
@click.option("--sessions-dir", envvar="OPENCODE_RELAY_SESSIONS_DIR",
              type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Where cached session records live")
@click.option("-v", "--verbose", count=True, help="-v for info, -vv for debug")
@click.pass_context
def main(ctx: click.Context, host: Optional[str], port: Optional[int], config_file: Optional[Path],
         sessions_dir: Optional[Path], verbose: int):
    """Send prompts to a local OpenCode server.

    Each server is served for ONE project directory. To work on several
    projects, run one `opencode serve --port N` per project and pick the
    server with -p.
    """
    _setup_logging(verbose)
    ctx.obj = load_config(config_file, host=host, port=port, sessions_dir=sessions_dir)


# Register subcommands from separate modules
from opencode_relay.cli.send import send_cmd
from opencode_relay.cli.cache import cache
from opencode_relay.cli.sessions import sessions

main.add_command(send_cmd)
main.add_command(cache)
main.add_command(sessions)


if __name__ == "__main__":
    main()
