"""
Invocation Runtime.

Holds everything a command needs for one invocation (host, token, debug flag,
renderer) and runs the command's async body with the shared error handling.

The root callback stores the global options on ctx.obj; each API command
calls get_runtime(ctx), which resolves credentials (running the interactive
setup if needed) before any request is made.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional, TypeVar

import httpx
import typer
from rich.console import Console
from rich.markup import escape

from sync_admin.cli.client import APIClient
from sync_admin.cli.formatter import JsonRenderer
from sync_admin.core.config import Settings, get_api_host, get_app_config, get_credentials_path, get_settings
from sync_admin.core.credentials import CredentialStore, ensure_credentials
from sync_admin.core.exceptions import (
    ApiStatusError,
    ConfigurationError,
    CredentialStoreError,
    InvalidResponseError,
)
from sync_admin.core.logging import get_logger, log_with_source

logger = get_logger(__name__)
err_console = Console(stderr=True)

DEBUG_HINT = "[dim]Re-run with --debug to see the full request and response.[/dim]"

T = TypeVar("T")


@dataclass(frozen=True)
class CliOptions:
    """Global options given before the command name."""

    host: Optional[str] = None
    debug: bool = False


@dataclass(frozen=True)
class Runtime:
    """Per-invocation configuration shared by all API commands."""

    host: str
    token: str
    debug: bool = False
    timeout: float = 30.0
    renderer: JsonRenderer = field(default_factory=JsonRenderer)

    def create_client(self) -> APIClient:
        return APIClient(
            base_url=self.host,
            token=self.token,
            debug=self.debug,
            timeout=self.timeout,
        )


def build_runtime(options: CliOptions, settings: Settings | None = None) -> Runtime:
    """
    Resolve host, token and formatter for this invocation.

    Raises:
        ConfigurationError: If the packaged settings are invalid
        CredentialStoreError: If the token cannot be read or stored
    """
    settings = settings or get_settings()
    application = get_app_config().application

    store = CredentialStore(get_credentials_path(settings))
    token = ensure_credentials(store, settings, application.credentials.token_url)

    return Runtime(
        host=get_api_host(options.host, settings),
        token=token,
        debug=options.debug,
        timeout=application.api.timeout,
        renderer=JsonRenderer(
            command=application.formatter.command,
            use_external=settings.external_formatter,
        ),
    )


def get_runtime(ctx: typer.Context) -> Runtime:
    """Build the Runtime from the global options, exiting 1 on setup failure."""
    options = ctx.find_object(CliOptions) or CliOptions()
    try:
        return build_runtime(options)
    except (ConfigurationError, CredentialStoreError) as e:
        log_with_source(logger, "cli", "debug", "Setup failed", code=e.code)
        err_console.print(f"[red]Error: {escape(e.message)}[/red]", soft_wrap=True)
        raise typer.Exit(1)


def run_api_command(
    runtime: Runtime,
    handler: Callable[[APIClient], Awaitable[T]],
) -> T:
    """
    Run a command body against a fresh client and report API failures.

    Status and response errors print the status, body and a --debug hint to
    stderr and exit 1. Transport errors exit 1 with the underlying message.
    """

    async def _run() -> T:
        async with runtime.create_client() as client:
            return await handler(client)

    try:
        return asyncio.run(_run())
    except ApiStatusError as e:
        log_with_source(logger, "cli", "debug", "Command failed", status_code=e.status_code)
        err_console.print(f"[red]Request failed: {escape(e.status_line)}[/red]", soft_wrap=True)
        if e.body:
            err_console.print(e.body, markup=False, highlight=False, soft_wrap=True)
        err_console.print(DEBUG_HINT)
        raise typer.Exit(1)
    except InvalidResponseError as e:
        err_console.print(f"[red]Error: {escape(e.message)}[/red]", soft_wrap=True)
        err_console.print(DEBUG_HINT)
        raise typer.Exit(1)
    except httpx.TransportError as e:
        err_console.print(
            f"[red]Could not reach {escape(runtime.host)}: {escape(str(e))}[/red]",
            soft_wrap=True,
        )
        raise typer.Exit(1)
