"""
Configuration Management.

Loads defaults from the packaged sync_admin/config/settings/*.yaml files and
overrides from SYNC_ADMIN_* environment variables.

Settings (YAML):
    application.yaml   - App identity, API host and timeout, credential file,
                         external formatter, errors dashboard
    logging.yaml       - Logging configuration

Environment (SYNC_ADMIN_*):
    TOKEN, HOST, CREDENTIALS_FILE, EXTERNAL_FORMATTER
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from sync_admin.core.config_schema import ApplicationSchema, LoggingSchema
from sync_admin.core.exceptions import ConfigurationError

SETTINGS_DIR = Path(__file__).resolve().parent.parent / "config" / "settings"


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from sync_admin/config/settings/."""
    config_path = SETTINGS_DIR / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Overrides read from the environment. All optional."""

    token: Optional[str] = None
    host: Optional[str] = None
    credentials_file: Optional[Path] = None
    external_formatter: bool = True

    model_config = SettingsConfigDict(
        env_prefix="SYNC_ADMIN_",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from the packaged YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_settings() -> Settings:
    """Read environment overrides. Not cached so tests can change the environment."""
    return Settings()


def get_app_dir() -> Path:
    """Per-user configuration directory (e.g. ~/.config/sync-admin)."""
    app_name = get_app_config().application.credentials.app_name
    return Path(typer.get_app_dir(app_name))


def get_credentials_path(settings: Settings | None = None) -> Path:
    """
    Resolve the credential file location.

    SYNC_ADMIN_CREDENTIALS_FILE wins over the default file in the app dir.
    """
    settings = settings or get_settings()
    if settings.credentials_file is not None:
        return settings.credentials_file.expanduser()
    filename = get_app_config().application.credentials.filename
    return get_app_dir() / filename


def get_api_host(host: str | None = None, settings: Settings | None = None) -> str:
    """
    Resolve the API base URL.

    Precedence: explicit --host, then SYNC_ADMIN_HOST, then application.yaml.
    """
    if host:
        return host.rstrip("/")
    settings = settings or get_settings()
    if settings.host:
        return settings.host.rstrip("/")
    return get_app_config().application.api.default_host.rstrip("/")
