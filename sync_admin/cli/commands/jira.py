"""
Jira Commands.

Look up and uninstall Jira-side installations by client key or Jira host.
"""

import json

import httpx
import typer

from sync_admin.cli import routes
from sync_admin.cli.client import APIClient
from sync_admin.cli.context import get_runtime, run_api_command
from sync_admin.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

UNINSTALL_SUCCESS_STATUS = 204


def jira(
    ctx: typer.Context,
    key_or_host: str = typer.Argument(..., help="Jira client key or Jira host URL"),
) -> None:
    """
    Show the Jira installation for a client key or host.

    Examples:
        sync-admin jira acme.atlassian.net
    """
    runtime = get_runtime(ctx)

    async def _jira(client: APIClient) -> str:
        response = await client.execute(routes.jira_lookup(key_or_host))
        return response.text

    runtime.renderer.render(run_api_command(runtime, _jira))


def uninstall_result(response: httpx.Response) -> str:
    """
    Summarise an uninstall response as JSON.

    A failed uninstall is reported, not raised, so the exit code stays 0.
    """
    if response.status_code == UNINSTALL_SUCCESS_STATUS:
        return json.dumps({"message": "Uninstall successful"})
    return json.dumps({
        "status": f"{response.status_code} {response.reason_phrase}",
        "body": response.text,
    })


def jira_uninstall(
    ctx: typer.Context,
    client_key: str = typer.Argument(..., help="Jira client key"),
    force: bool = typer.Option(False, "--force", help="Remove the installation even if Jira cannot be reached"),
) -> None:
    """
    Uninstall the app from a Jira instance.

    Examples:
        sync-admin jira-uninstall 1a2b3c-client-key
        sync-admin jira-uninstall 1a2b3c-client-key --force
    """
    runtime = get_runtime(ctx)

    async def _uninstall(client: APIClient) -> str:
        response = await client.execute(routes.jira_uninstall(client_key, force=force), check=False)
        log_with_source(
            logger, "cli", "info", "Uninstall finished",
            client_key=client_key, status_code=response.status_code,
        )
        return uninstall_result(response)

    runtime.renderer.render(run_api_command(runtime, _uninstall))
