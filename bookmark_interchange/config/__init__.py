"""
Configuration management for Bookmark Interchange.
"""

from .pydantic_config import (
    ConfigurationManager,
    ExportSettings,
    ImportSettings,
    InterchangeConfig,
    LoggingSettings,
    StorageSettings,
    format_config_error,
)

__all__ = [
    "ConfigurationManager",
    "InterchangeConfig",
    "ImportSettings",
    "ExportSettings",
    "StorageSettings",
    "LoggingSettings",
    "format_config_error",
]
