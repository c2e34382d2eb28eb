"""
Pydantic-based configuration system for Bookmark Interchange.

Settings are grouped by concern (import, export, storage, logging) and can
be loaded from a TOML or JSON file, with environment variable overrides for
the database path and log level.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import toml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..utils.error_handler import ConfigurationError

ENV_DATABASE_PATH = "BOOKMARK_INTERCHANGE_DB"
ENV_LOG_LEVEL = "BOOKMARK_INTERCHANGE_LOG_LEVEL"


class ImportSettings(BaseModel):
    """Bookmark import settings."""

    duplicate_handling: Literal["skip", "replace", "keep"] = Field(
        default="skip",
        description="How to treat bookmarks whose URL already exists",
        json_schema_extra={
            "error_msg": "Duplicate handling must be 'skip', 'replace' or 'keep'."
        },
    )


class ExportSettings(BaseModel):
    """Export format settings."""

    html_title: str = Field(
        default="Bookmarks",
        min_length=1,
        max_length=200,
        description="Title written into exported HTML files",
    )
    include_folders: bool = Field(
        default=True,
        description="Reproduce the folder hierarchy in HTML exports",
    )
    json_indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Indentation for JSON exports",
    )
    default_format: Literal["html", "json", "csv"] = Field(
        default="html",
        description="Format used when the CLI is not given --format",
    )


class StorageSettings(BaseModel):
    """Record store settings."""

    database_path: Path = Field(
        default=Path("bookmarks.db"),
        description="SQLite database file",
    )

    @field_validator("database_path", mode="before")
    @classmethod
    def validate_database_path(cls, v):
        """Ensure database path is a Path object."""
        if isinstance(v, str):
            if not v.strip():
                raise ValueError("Database path cannot be empty")
            return Path(v)
        return v


class LoggingSettings(BaseModel):
    """Logging settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Root log level"
    )
    log_file: Optional[Path] = Field(default=None, description="Optional log file")
    console_output: bool = Field(default=True, description="Log to stdout")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept log level names in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


class InterchangeConfig(BaseModel):
    """Main configuration model."""

    model_config = ConfigDict(populate_by_name=True)

    import_settings: ImportSettings = Field(
        default_factory=ImportSettings, alias="import"
    )
    export: ExportSettings = Field(default_factory=ExportSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class ConfigurationManager:
    """Manages loading and validation of configuration from multiple sources."""

    DEFAULT_FILE_NAMES = (
        "bookmark_interchange.toml",
        "bookmark_interchange.json",
    )

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Optional path to configuration file (TOML or JSON)

        Raises:
            ConfigurationError: If the file cannot be loaded or is invalid
        """
        self._config: Optional[InterchangeConfig] = None
        self._load_configuration(Path(config_path) if config_path else None)

    def _get_default_config_paths(self) -> List[Path]:
        """Get list of default configuration file paths to try."""
        return [Path.cwd() / name for name in self.DEFAULT_FILE_NAMES]

    def _load_configuration(self, config_path: Optional[Path] = None) -> None:
        """Load configuration from file or use defaults."""
        config_data: Dict[str, Any] = {}

        if config_path:
            config_data = self._load_config_file(config_path)
        else:
            for path in self._get_default_config_paths():
                if path.exists():
                    config_data = self._load_config_file(path)
                    break

        self._apply_env_overrides(config_data)

        try:
            self._config = InterchangeConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(format_config_error(e)) from e

    def _load_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Load configuration from TOML or JSON file."""
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            if config_path.suffix.lower() == ".toml":
                return toml.load(config_path)
            elif config_path.suffix.lower() == ".json":
                with open(config_path, "r", encoding="utf-8") as f:
                    return json.load(f)
        except (toml.TomlDecodeError, json.JSONDecodeError, OSError) as e:
            raise ConfigurationError(
                f"Failed to load configuration from {config_path}: {e}"
            ) from e

        raise ConfigurationError(
            f"Unsupported configuration file format: {config_path.suffix}"
        )

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> None:
        """Apply environment variable overrides."""
        db_path = os.getenv(ENV_DATABASE_PATH)
        if db_path:
            config_data.setdefault("storage", {})["database_path"] = db_path

        log_level = os.getenv(ENV_LOG_LEVEL)
        if log_level:
            config_data.setdefault("logging", {})["level"] = log_level

    @property
    def config(self) -> InterchangeConfig:
        """Get the current configuration."""
        if not self._config:
            raise RuntimeError("Configuration not loaded")
        return self._config

    def update(self, overrides: Dict[str, Dict[str, Any]]) -> None:
        """
        Apply overrides (e.g. from command-line arguments) and revalidate.

        Args:
            overrides: Section name to field values; None values are ignored
        """
        config_dict = self.config.model_dump(by_alias=True)

        for section, values in overrides.items():
            for key, value in values.items():
                if value is not None:
                    config_dict.setdefault(section, {})[key] = value

        try:
            self._config = InterchangeConfig(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(format_config_error(e)) from e

    @staticmethod
    def create_sample_config(output_path: Path, format: str = "toml") -> None:
        """Create a sample configuration file."""
        sample_config = {
            "import": {"duplicate_handling": "skip"},
            "export": {
                "html_title": "Bookmarks",
                "include_folders": True,
                "json_indent": 2,
                "default_format": "html",
            },
            "storage": {"database_path": "bookmarks.db"},
            "logging": {"level": "INFO", "console_output": True},
        }

        if format.lower() == "toml":
            with open(output_path, "w", encoding="utf-8") as f:
                toml.dump(sample_config, f)
        elif format.lower() == "json":
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(sample_config, f, indent=2)
        else:
            raise ValueError(f"Unsupported format: {format}")


def _format_error_location(location: tuple) -> str:
    """Format the error location path."""
    if not location:
        return "configuration"
    return ".".join(str(part) for part in location)


def format_config_error(error: Exception) -> str:
    """
    Format a configuration error into a readable message.

    Args:
        error: Exception that occurred during configuration

    Returns:
        Formatted error message
    """
    if isinstance(error, ValidationError):
        lines = ["Configuration validation failed:"]
        for detail in error.errors():
            location = _format_error_location(detail.get("loc", ()))
            message = detail.get("msg", "Invalid value")
            lines.append(f"  - {location}: {message} (got: {detail.get('input', 'N/A')!r})")
        return "\n".join(lines)

    return f"Configuration error: {error}"
