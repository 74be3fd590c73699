"""
Configuration Management.

Loads secrets from config/.env and settings from config/settings/*.yaml.
Hosts, endpoint paths and blob paths are read from these sources rather than
written into the code.

Secrets (.env / environment, prefix DAVINCI_):
    DAVINCI_CREDENTIALS_FILE - path to the credentials JSON object

Settings (YAML):
    application.yaml   - Hosts, endpoint paths, blob paths, request timeout
    logging.yaml       - Logging configuration
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from davinci_cli.core.config_schema import ApplicationSchema, LoggingSchema
from davinci_cli.core.exceptions import AuthenticationError
from davinci_cli.schemas.user import Credentials


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def validate_project_root() -> Path:
    """
    Validate that the project root can be found.

    Raises SystemExit with a clear message if .project_root is not found.
    Use this in entry scripts before any configuration loading.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def resolve_path(configured_path: str | Path) -> Path:
    """Resolve a configured path relative to the project root."""
    path = Path(configured_path)
    if path.is_absolute():
        return path
    return find_project_root() / path


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets loaded from config/.env or the environment."""

    credentials_file: str = "config.json"

    model_config = SettingsConfigDict(
        env_prefix="DAVINCI_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

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
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def load_credentials(path: str | Path | None = None) -> Credentials:
    """
    Read the credentials JSON object sent to the auth endpoint.

    Args:
        path: Credentials file. Defaults to Settings.credentials_file,
            resolved against the project root.

    Returns:
        Credentials holding the object exactly as read.

    Raises:
        AuthenticationError: If the file is missing, not JSON, or not an object.
    """
    credentials_path = resolve_path(path or get_settings().credentials_file)

    try:
        raw = json.loads(credentials_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise AuthenticationError(f"Credentials file not found: {credentials_path}") from e
    except OSError as e:
        raise AuthenticationError(f"Cannot read credentials file {credentials_path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise AuthenticationError(f"Credentials file is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise AuthenticationError("Credentials file must contain a JSON object")

    return Credentials.model_validate(raw)
