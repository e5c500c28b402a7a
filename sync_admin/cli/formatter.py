"""
JSON Output Formatter.

Pretty-prints API responses. Prefers an external formatter (jq by default)
when it is on PATH, otherwise falls back to Rich's JSON highlighting.
"""

import json
import shutil
import subprocess
from functools import cached_property
from typing import Sequence

import typer
from rich.console import Console

from sync_admin.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

DEFAULT_COMMAND = ("jq", "-C", ".")


class JsonRenderer:
    """
    Renders JSON strings to stdout.

    The external formatter is looked up once per renderer. Malformed JSON
    raises json.JSONDecodeError whichever path would have rendered it.

    Usage:
        renderer = JsonRenderer()
        renderer.render('{"host": "acme.atlassian.net"}')
    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_COMMAND,
        use_external: bool = True,
        console: Console | None = None,
    ) -> None:
        self.command = tuple(command)
        self.use_external = use_external
        self.console = console or Console()

    @cached_property
    def external_formatter(self) -> str | None:
        """Absolute path of the external formatter, or None if unavailable."""
        if not self.use_external or not self.command:
            return None
        path = shutil.which(self.command[0])
        log_with_source(
            logger,
            "formatter",
            "debug",
            "External formatter lookup",
            command=self.command[0],
            found=path is not None,
        )
        return path

    def render(self, body: str) -> None:
        """Pretty-print a JSON document. An empty body prints nothing."""
        if not body.strip():
            log_with_source(logger, "formatter", "debug", "Empty response body")
            return

        data = json.loads(body)

        executable = self.external_formatter
        if executable is not None:
            try:
                self.render_external(executable, body)
                return
            except (OSError, subprocess.CalledProcessError) as e:
                log_with_source(
                    logger,
                    "formatter",
                    "warning",
                    "External formatter failed, using built-in",
                    command=executable,
                    error=str(e),
                )

        self.render_builtin(data)

    def render_external(self, executable: str, body: str) -> None:
        result = subprocess.run(
            [executable, *self.command[1:]],
            input=body,
            capture_output=True,
            text=True,
            check=True,
        )
        typer.echo(result.stdout, nl=False)

    def render_builtin(self, data: object) -> None:
        self.console.print_json(data=data, indent=2)
