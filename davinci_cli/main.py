"""
Application Entry Point.

Loads the credentials, acquires the session token and hands it to the
interactive shell. An authentication failure ends the process with exit
code 1 before the menu is ever shown; the exit option ends it with 0.
"""

import asyncio
from collections.abc import Callable

import httpx
import structlog
import typer
from rich.console import Console
from rich.markup import escape

from davinci_cli import __version__
from davinci_cli.client import APIClient
from davinci_cli.core.config import (
    find_project_root,
    get_app_config,
    load_credentials,
    validate_project_root,
)
from davinci_cli.core.exceptions import AuthenticationError
from davinci_cli.core.logging import get_logger, log_with_source, setup_logging
from davinci_cli.services.users import UserService
from davinci_cli.session import acquire
from davinci_cli.shell import InteractiveShell
from davinci_cli.storage.blob import BlobStore

logger = get_logger(__name__)

app = typer.Typer(
    name="davinci-users",
    help="DaVinci user administration - export, import, delete and create users.",
    add_completion=False,
    rich_markup_mode="rich",
)


async def run_session(
    console: Console | None = None,
    prompt: Callable[[str], str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """
    Authenticate, then run the interactive shell.

    Args:
        console: Rich console for output
        prompt: Line input source for the shell
        transport: Optional httpx transport, used to stub the wire in tests

    Returns:
        Process exit code
    """
    console = console or Console()
    config = get_app_config().application

    async with APIClient(
        scheme=config.scheme,
        timeout=config.timeouts.request_seconds,
        transport=transport,
    ) as client:
        try:
            credentials = load_credentials()
            token = await acquire(client, credentials, config.hosts.auth, config.endpoints.auth)
        except AuthenticationError as e:
            log_with_source(logger, "session", "error", "Unable to authenticate", error=e.message)
            console.print("[red]Unable to Authenticate:[/red]")
            console.print(f"[red]{escape(e.message)}[/red]")
            return 1

        console.print("[green]Successfully authenticated.[/green]")

        service = UserService(client, config, BlobStore(), find_project_root())
        shell = InteractiveShell(service, token, console=console, prompt=prompt)
        return await shell.run()


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.command()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """
    Interactive DaVinci user administration.

    Authenticates once with the credentials file, then offers a numbered
    menu to export, import, delete and create users.
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    structlog.contextvars.bind_contextvars(source="cli")

    logger.debug("CLI invoked", log_level=log_level)

    raise typer.Exit(asyncio.run(run_session()))
