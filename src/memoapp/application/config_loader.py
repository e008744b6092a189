"""
Config Loader
=============

Loads the optional YAML configuration file and validates it against a
Pydantic schema.

Search order:
1. An explicit path passed with ``--config``
2. ``./memoapp.yaml`` in the current working directory
3. Built-in defaults

Command line options are applied on top of whatever this returns.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from memoapp.core.domain.errors import ConfigError

logger = structlog.get_logger(__name__)

CONFIG_FILENAME = "memoapp.yaml"


class StorageConfig(BaseModel):
    """Where the memo document lives."""

    model_config = ConfigDict(extra="forbid")

    data_dir: Path = Field(Path("data"), description="Directory holding the document")
    file_name: str = Field(
        "memos.json",
        min_length=1,
        description="Document file name inside data_dir",
    )

    @field_validator("file_name")
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        """A file name, not a path."""
        if "/" in v or "\\" in v:
            raise ValueError("file_name must not contain path separators")
        return v


class LoggingConfig(BaseModel):
    """Log level for structlog output."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field(
        "WARNING",
        pattern="(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )


class AppConfig(BaseModel):
    """Top-level memoapp configuration."""

    model_config = ConfigDict(extra="forbid")

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigLoader:
    """Locate, parse and validate the YAML configuration.

    Args:
        search_dir: Directory searched for ``memoapp.yaml`` when no explicit
            path is given. Defaults to the current working directory.
    """

    def __init__(self, search_dir: Optional[Path] = None) -> None:
        self._search_dir = search_dir
        self._logger = logger.bind(component="config_loader")

    def load(self, config_path: Optional[Path] = None) -> AppConfig:
        """Load configuration.

        Args:
            config_path: Explicit file. Must exist when given.

        Returns:
            Validated configuration, or defaults when no file is found.

        Raises:
            ConfigError: If the explicit file is missing, the YAML is invalid,
                or the content does not match the schema.
        """
        if config_path is not None:
            if not config_path.exists():
                raise ConfigError(
                    f"Config file not found: {config_path}",
                    details={"path": str(config_path)},
                )
            return self._load_file(config_path)

        candidate = (self._search_dir or Path.cwd()) / CONFIG_FILENAME
        if candidate.exists():
            return self._load_file(candidate)

        self._logger.debug("config_not_found_using_defaults")
        return AppConfig()

    def _load_file(self, path: Path) -> AppConfig:
        try:
            with open(path, encoding="utf-8") as f:
                data: Any = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(
                f"Failed to read config {path}: {exc}", details={"path": str(path)}
            ) from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config {path} must be a mapping", details={"path": str(path)}
            )

        try:
            config = AppConfig(**data)
        except ValidationError as exc:
            raise ConfigError(
                f"Invalid config {path}: {exc}", details={"path": str(path)}
            ) from exc

        self._logger.debug("config_loaded", path=str(path), config_keys=list(data.keys()))
        return config


def apply_overrides(
    config: AppConfig,
    *,
    data_dir: Optional[Path] = None,
    file_name: Optional[str] = None,
) -> AppConfig:
    """Return a copy of ``config`` with command line values applied.

    Raises:
        ConfigError: If an override fails validation.
    """
    storage = config.storage.model_dump()
    if data_dir is not None:
        storage["data_dir"] = data_dir
    if file_name is not None:
        storage["file_name"] = file_name
    try:
        return config.model_copy(update={"storage": StorageConfig(**storage)})
    except ValidationError as exc:
        raise ConfigError(f"Invalid storage option: {exc}") from exc
