"""Unit tests for the JSON output formatter."""

import io
import json
import subprocess
from unittest.mock import patch

import pytest
from rich.console import Console

from sync_admin.cli.formatter import JsonRenderer


def _builtin_renderer() -> tuple[JsonRenderer, io.StringIO]:
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False, color_system=None, width=200)
    return JsonRenderer(use_external=False, console=console), buffer


class TestBuiltinRendering:
    """Fallback path: Rich JSON rendering."""

    def test_pretty_prints_with_indentation(self):
        renderer, buffer = _builtin_renderer()

        renderer.render('{"host":"acme.atlassian.net","repos":[1,2]}')

        output = buffer.getvalue()
        assert '  "host": "acme.atlassian.net"' in output
        assert json.loads(output) == {"host": "acme.atlassian.net", "repos": [1, 2]}

    def test_malformed_json_raises(self):
        renderer, _ = _builtin_renderer()
        with pytest.raises(json.JSONDecodeError):
            renderer.render("<html>Bad Gateway</html>")

    def test_empty_body_prints_nothing(self):
        renderer, buffer = _builtin_renderer()
        renderer.render("  \n")
        assert buffer.getvalue() == ""

    def test_disabled_external_is_never_looked_up(self):
        renderer, _ = _builtin_renderer()
        with patch("sync_admin.cli.formatter.shutil.which") as mock_which:
            assert renderer.external_formatter is None
        mock_which.assert_not_called()


class TestExternalRendering:
    """Preferred path: external formatter on PATH."""

    def test_pipes_body_through_formatter(self, capsys):
        renderer = JsonRenderer(command=["jq", "-C", "."])
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout='{\n  "a": 1\n}\n')

        with patch("sync_admin.cli.formatter.shutil.which", return_value="/usr/bin/jq"), \
             patch("sync_admin.cli.formatter.subprocess.run", return_value=completed) as mock_run:
            renderer.render('{"a":1}')

        args, kwargs = mock_run.call_args
        assert args[0] == ["/usr/bin/jq", "-C", "."]
        assert kwargs["input"] == '{"a":1}'
        assert json.loads(capsys.readouterr().out) == {"a": 1}

    def test_detection_is_memoized(self):
        renderer = JsonRenderer()
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="{}\n")

        with patch("sync_admin.cli.formatter.shutil.which", return_value="/usr/bin/jq") as mock_which, \
             patch("sync_admin.cli.formatter.subprocess.run", return_value=completed):
            renderer.render("{}")
            renderer.render("{}")

        mock_which.assert_called_once_with("jq")

    def test_missing_formatter_falls_back(self):
        buffer = io.StringIO()
        renderer = JsonRenderer(console=Console(file=buffer, color_system=None, width=200))

        with patch("sync_admin.cli.formatter.shutil.which", return_value=None), \
             patch("sync_admin.cli.formatter.subprocess.run") as mock_run:
            renderer.render('{"a":1}')

        mock_run.assert_not_called()
        assert json.loads(buffer.getvalue()) == {"a": 1}

    def test_failing_formatter_falls_back(self):
        buffer = io.StringIO()
        renderer = JsonRenderer(console=Console(file=buffer, color_system=None, width=200))
        failure = subprocess.CalledProcessError(returncode=2, cmd=["jq"])

        with patch("sync_admin.cli.formatter.shutil.which", return_value="/usr/bin/jq"), \
             patch("sync_admin.cli.formatter.subprocess.run", side_effect=failure):
            renderer.render('{"a":1}')

        assert json.loads(buffer.getvalue()) == {"a": 1}

    def test_malformed_json_raises_before_running_formatter(self):
        renderer = JsonRenderer()

        with patch("sync_admin.cli.formatter.shutil.which", return_value="/usr/bin/jq"), \
             patch("sync_admin.cli.formatter.subprocess.run") as mock_run:
            with pytest.raises(json.JSONDecodeError):
                renderer.render("not json")

        mock_run.assert_not_called()
