"""
CLI Commands.

Organized by API area. Each function is registered on the root app in
sync_admin.cli.main under its command name.
"""

from sync_admin.cli.commands.auth import login
from sync_admin.cli.commands.errors import errors
from sync_admin.cli.commands.installations import info, migrate, resync_failed, status, sync
from sync_admin.cli.commands.jira import jira, jira_uninstall

__all__ = [
    "errors",
    "info",
    "jira",
    "jira_uninstall",
    "login",
    "migrate",
    "resync_failed",
    "status",
    "sync",
]
