"""
Errors Dashboard Command.

Opens the analytics dashboard filtered to one Jira host. No API call.
"""

import httpx
import typer

from sync_admin.core.config import get_app_config
from sync_admin.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


def dashboard_url(jira_host: str) -> str:
    """Build the dashboard URL showing errors logged for a Jira host."""
    dashboard = get_app_config().application.errors_dashboard
    url = httpx.URL(
        dashboard.url,
        params={
            "query": f'jiraHost:"{jira_host}"',
            "from": dashboard.time_range,
        },
    )
    return str(url)


def errors(
    jira_host: str = typer.Argument(..., help="Jira host, e.g. https://acme.atlassian.net"),
) -> None:
    """
    Open the errors dashboard for a Jira host in a browser.

    Examples:
        sync-admin errors https://acme.atlassian.net
    """
    url = dashboard_url(jira_host)
    log_with_source(logger, "cli", "info", "Opening errors dashboard", url=url)
    typer.echo(url)
    typer.launch(url)
