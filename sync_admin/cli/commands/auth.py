"""
Credential Commands.
"""

import typer
from rich.console import Console
from rich.markup import escape

from sync_admin.core.config import get_app_config, get_credentials_path
from sync_admin.core.credentials import CredentialStore
from sync_admin.core.exceptions import CredentialStoreError

err_console = Console(stderr=True)


def login() -> None:
    """
    Enter a new API token, replacing the stored one.

    Examples:
        sync-admin login
    """
    store = CredentialStore(get_credentials_path())
    try:
        store.setup(get_app_config().application.credentials.token_url)
    except CredentialStoreError as e:
        err_console.print(f"[red]Error: {escape(e.message)}[/red]", soft_wrap=True)
        raise typer.Exit(1)
