"""
Configuration Management.

Loads overrides from the environment (and an optional config/.env) and
settings from config/settings/*.yaml.
No hardcoded values in code; all configuration comes from these sources.

Environment (.env, prefix NOTEPAD_):
    NOTEPAD_DATABASE_URL - full SQLAlchemy URL replacing database.yaml's path

Settings (YAML):
    application.yaml   - App identity and environment
    database.yaml      - SQLite file location and engine echo
    logging.yaml       - Logging configuration
    notes.yaml         - Title derivation policy and list defaults
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from modules.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    LoggingSchema,
    NotesSchema,
)


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


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Environment overrides loaded from NOTEPAD_* variables and config/.env."""

    database_url: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="NOTEPAD_",
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
    Missing keys, wrong types, or unknown fields raise a clear error
    immediately instead of causing cryptic KeyErrors later.

    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._database = _load_validated(DatabaseSchema, "database.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._notes = _load_validated(NotesSchema, "notes.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def database(self) -> DatabaseSchema:
        """Database settings."""
        return self._database

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def notes(self) -> NotesSchema:
        """Note title and listing settings."""
        return self._notes


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_database_url() -> str:
    """
    Construct the database URL.

    NOTEPAD_DATABASE_URL wins when set; otherwise the SQLite file from
    database.yaml is resolved against the project root.

    Returns:
        SQLAlchemy async connection URL string.
    """
    override = get_settings().database_url
    if override:
        return override
    db_path = find_project_root() / get_app_config().database.path
    return f"sqlite+aiosqlite:///{db_path}"
