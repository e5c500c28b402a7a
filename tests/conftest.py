"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Every test runs with a clean SYNC_ADMIN_* environment, a credential file
under tmp_path and the external JSON formatter disabled, so nothing touches
the real user config directory or depends on jq being installed.
"""

import logging
import os
from pathlib import Path

import pytest

from sync_admin.core.config import get_app_config


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the credential store at tmp_path and clear env overrides."""
    for key in list(os.environ):
        if key.startswith("SYNC_ADMIN_"):
            monkeypatch.delenv(key)

    credentials_file = tmp_path / "sync-admin" / "config.yaml"
    monkeypatch.setenv("SYNC_ADMIN_CREDENTIALS_FILE", str(credentials_file))
    monkeypatch.setenv("SYNC_ADMIN_EXTERNAL_FORMATTER", "false")
    return credentials_file


@pytest.fixture(autouse=True)
def _clear_config_cache():
    """Clear lru_cache between tests so each test gets a fresh load."""
    get_app_config.cache_clear()
    yield
    get_app_config.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo handlers installed by setup_logging during a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
