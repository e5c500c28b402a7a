"""
sync-admin CLI.

Root Typer application. Global options are parsed here; every command maps
onto one request (two for commands that first resolve the Jira host) against
the integration-management API.

Usage:
    sync-admin --help
    sync-admin info 12345
    sync-admin status 12345
    sync-admin sync 12345 --reset
    sync-admin migrate 12345
    sync-admin jira acme.atlassian.net
    sync-admin jira-uninstall <client-key> --force
    sync-admin resync-failed --limit 5 --offset 20
    sync-admin errors https://acme.atlassian.net
    sync-admin --host http://localhost:8080 --debug info 12345
"""

from typing import Optional

import typer

from sync_admin import __version__
from sync_admin.cli import commands
from sync_admin.cli.context import CliOptions
from sync_admin.core.logging import get_logger, log_with_source, setup_logging

logger = get_logger(__name__)

app = typer.Typer(
    name="sync-admin",
    help="Inspect and repair the sync state of integration installations.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("info")(commands.info)
app.command("status")(commands.status)
app.command("sync")(commands.sync)
app.command("migrate")(commands.migrate)
app.command("jira")(commands.jira)
app.command("jira-uninstall")(commands.jira_uninstall)
app.command("resync-failed")(commands.resync_failed)
app.command("errors")(commands.errors)
app.command("login")(commands.login)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(
        None,
        "--host",
        help="API host (default: SYNC_ADMIN_HOST, then application.yaml)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log full requests and responses (DEBUG level logging)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """
    sync-admin CLI.

    Thin client for the integration-management API. Responses are printed
    as JSON; errors go to stderr with a non-zero exit code.
    """
    if debug:
        setup_logging(level="DEBUG")
    elif verbose:
        setup_logging(level="INFO")
    else:
        setup_logging()

    log_with_source(
        logger, "cli", "debug", "CLI invoked",
        command=ctx.invoked_subcommand, host=host,
    )
    ctx.obj = CliOptions(host=host, debug=debug)


def run() -> None:
    """Console-script entry point."""
    app()
