"""
Installation Commands.

Inspect an installation and trigger or repair its repository sync.
status, sync and migrate first look up the installation to learn its Jira
host, then issue the actual request.
"""

import typer

from sync_admin.cli import routes
from sync_admin.cli.client import APIClient
from sync_admin.cli.context import get_runtime, run_api_command
from sync_admin.core.exceptions import InvalidResponseError
from sync_admin.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


async def resolve_jira_host(client: APIClient, installation_id: str) -> str:
    """Look up the installation and return its Jira host."""
    response = await client.execute(routes.installation_info(installation_id))
    payload = response.json()

    host = payload.get("host") if isinstance(payload, dict) else None
    if not host:
        raise InvalidResponseError(
            f"Installation {installation_id} lookup returned no 'host' field"
        )

    log_with_source(
        logger, "cli", "debug", "Resolved Jira host",
        installation_id=installation_id, jira_host=host,
    )
    return host


def info(
    ctx: typer.Context,
    installation_id: str = typer.Argument(..., help="Installation id"),
) -> None:
    """
    Show an installation.

    Examples:
        sync-admin info 12345
    """
    runtime = get_runtime(ctx)

    async def _info(client: APIClient) -> str:
        response = await client.execute(routes.installation_info(installation_id))
        return response.text

    runtime.renderer.render(run_api_command(runtime, _info))


def status(
    ctx: typer.Context,
    installation_id: str = typer.Argument(..., help="Installation id"),
) -> None:
    """
    Show the repository sync state of an installation.

    Examples:
        sync-admin status 12345
    """
    runtime = get_runtime(ctx)

    async def _status(client: APIClient) -> str:
        jira_host = await resolve_jira_host(client, installation_id)
        response = await client.execute(routes.repo_sync_state(installation_id, jira_host))
        return response.text

    runtime.renderer.render(run_api_command(runtime, _status))


def sync(
    ctx: typer.Context,
    installation_id: str = typer.Argument(..., help="Installation id"),
    reset: bool = typer.Option(False, "--reset", help="Full resync from scratch instead of an incremental sync"),
) -> None:
    """
    Start a sync for an installation.

    Examples:
        sync-admin sync 12345
        sync-admin sync 12345 --reset
    """
    runtime = get_runtime(ctx)

    async def _sync(client: APIClient) -> str:
        jira_host = await resolve_jira_host(client, installation_id)
        response = await client.execute(routes.sync(installation_id, jira_host, reset=reset))
        return response.text

    runtime.renderer.render(run_api_command(runtime, _sync))


def migrate(
    ctx: typer.Context,
    installation_id: str = typer.Argument(..., help="Installation id"),
) -> None:
    """
    Migrate an installation to the current sync backend.

    Examples:
        sync-admin migrate 12345
    """
    runtime = get_runtime(ctx)

    async def _migrate(client: APIClient) -> str:
        jira_host = await resolve_jira_host(client, installation_id)
        response = await client.execute(routes.migrate(installation_id, jira_host))
        return response.text

    runtime.renderer.render(run_api_command(runtime, _migrate))


def resync_failed(
    ctx: typer.Context,
    limit: int = typer.Option(routes.DEFAULT_RESYNC_LIMIT, "--limit", min=1, help="Number of installations to resync"),
    offset: int = typer.Option(routes.DEFAULT_RESYNC_OFFSET, "--offset", min=0, help="Skip this many failed installations"),
) -> None:
    """
    Restart syncs that ended in a failed state.

    Examples:
        sync-admin resync-failed
        sync-admin resync-failed --limit 5 --offset 20
    """
    runtime = get_runtime(ctx)

    async def _resync_failed(client: APIClient) -> str:
        response = await client.execute(routes.resync_failed(limit=limit, offset=offset))
        return response.text

    runtime.renderer.render(run_api_command(runtime, _resync_failed))
