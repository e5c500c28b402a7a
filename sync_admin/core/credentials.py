"""
Credential Store.

Keeps the personal bearer token in a small YAML file in the per-user config
directory. The file is a mapping; only the ``token`` key is owned by this
module and any other keys are preserved when the token is rewritten.

The interactive setup runs at most once per invocation, before any command
talks to the API:

    store = CredentialStore(get_credentials_path())
    token = ensure_credentials(store, settings, token_url=...)
"""

import os
from pathlib import Path
from typing import Any

import typer
import yaml
from rich.console import Console

from sync_admin.core.config import Settings
from sync_admin.core.exceptions import CredentialStoreError
from sync_admin.core.logging import get_logger, log_with_source

logger = get_logger(__name__)
console = Console(stderr=True)

TOKEN_FIELD = "token"
FILE_MODE = 0o600


class CredentialStore:
    """
    YAML-backed store for a single bearer token.

    Writes are not atomic: a crash mid-write can leave a truncated file,
    which the next run reports as a CredentialStoreError.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise CredentialStoreError(f"Cannot read {self.path}: {e}") from e
        except yaml.YAMLError as e:
            raise CredentialStoreError(f"Cannot parse {self.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise CredentialStoreError(f"Expected a mapping in {self.path}")
        return data

    def load_token(self) -> str | None:
        """Return the stored token, or None if the file or field is absent."""
        token = self._read().get(TOKEN_FIELD)
        if not token:
            return None
        return str(token)

    def _write(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False)
            # O_CREAT only applies the mode to new files
            os.chmod(self.path, FILE_MODE)
        except OSError as e:
            raise CredentialStoreError(f"Cannot write {self.path}: {e}") from e

        log_with_source(logger, "credentials", "info", "Token saved", path=str(self.path))

    def save_token(self, token: str, replace_unreadable: bool = False) -> None:
        """
        Persist the token, creating parent directories as needed.

        Other keys in the file are kept. With replace_unreadable, a file that
        cannot be parsed is overwritten instead of raising.
        """
        try:
            data = self._read()
        except CredentialStoreError as e:
            if not replace_unreadable:
                raise
            log_with_source(
                logger, "credentials", "warning", "Replacing unreadable credential file",
                path=str(self.path), error=e.message,
            )
            data = {}

        data[TOKEN_FIELD] = token
        self._write(data)

    def ensure_token(self, token_url: str) -> str:
        """Return the stored token, running the setup wizard if there is none."""
        token = self.load_token()
        if token is not None:
            return token
        return self.setup(token_url)

    def setup(self, token_url: str) -> str:
        """
        Interactive token setup.

        Prints instructions, waits for a keypress, then reads the token with
        echo disabled and stores it. An unreadable credential file is replaced.
        """
        console.print("[bold]No API token found.[/bold]")
        console.print(f"Create a personal token at [cyan]{token_url}[/cyan]")
        console.print(f"It will be stored in [dim]{self.path}[/dim]\n")
        typer.echo("Press any key once you have the token ready...", err=True)
        typer.getchar()

        token = typer.prompt("API token", hide_input=True).strip()
        if not token:
            raise CredentialStoreError("Empty token entered")

        self.save_token(token, replace_unreadable=True)
        console.print("[green]Token saved.[/green]")
        return token


def ensure_credentials(store: CredentialStore, settings: Settings, token_url: str) -> str:
    """
    Resolve the bearer token for this invocation.

    SYNC_ADMIN_TOKEN bypasses the store entirely. Otherwise the stored token
    is used, and the interactive setup runs if nothing is stored.
    """
    if settings.token:
        log_with_source(logger, "credentials", "debug", "Using token from environment")
        return settings.token
    return store.ensure_token(token_url)
