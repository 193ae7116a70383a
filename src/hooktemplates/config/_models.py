# pyright: reportExplicitAny=false, reportAny=false
"""Configuration models.

This module provides the TemplatesConfig Pydantic model that replaces the
process-wide hook prefix and root path settings with an explicit, immutable
object handed to every template engine.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hooktemplates.config._defaults import DEFAULT_CONFIG
from hooktemplates.config._loader import (
    deep_merge,
    discover_config_files,
    parse_env_vars,
    read_toml_file,
)
from hooktemplates.exceptions import ConfigurationError


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.JSON
    file: str = ""


class ThemeConfig(BaseModel):
    """Theme directories searched when folder lookup is enabled.

    Attributes:
        child: Active (child) theme root directory.
        parent: Parent theme root directory.
        child_uri: Public base URI of the child theme, used for stylesheets.
        parent_uri: Public base URI of the parent theme.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    child: Path | None = None
    parent: Path | None = None
    child_uri: str = ""
    parent_uri: str = ""


class TemplatesConfig(BaseModel):
    """Settings shared by every template engine of one project.

    Attributes:
        hook_prefix: Namespace inserted in every extension topic. Must be
            non-empty before anything is rendered.
        root_path: Root directory used by component origins that do not carry
            their own base path.
        origin_base_folder: Folder segments considered the origin's base view
            folder. Segments of an engine folder outside this set are added
            to hook names and theme override paths.
        source_extension: Extension of template source files.
        truthy_strings: Strings accepted as "on" by loosely typed switches.
        theme: Theme directories.
        logging: Logging settings.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    hook_prefix: str = ""
    root_path: Path | None = None
    origin_base_folder: tuple[str, ...] = ("src", "views")
    source_extension: str = ".py"
    truthy_strings: tuple[str, ...] = Field(
        default=("1", "enable", "enabled", "on", "y", "yes", "true")
    )
    theme: ThemeConfig = Field(default_factory=ThemeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("hook_prefix")
    @classmethod
    def _strip_hook_prefix(cls, value: str) -> str:
        return value.strip().strip("/")

    @field_validator("source_extension")
    @classmethod
    def _dot_extension(cls, value: str) -> str:
        if value and not value.startswith("."):
            return f".{value}"
        return value

    @field_validator("truthy_strings")
    @classmethod
    def _lowercase_truthy(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(item.lower() for item in value)

    def get_hook_prefix(self) -> str:
        """Return the hook prefix.

        Raises:
            ConfigurationError: If no hook prefix was configured.
        """
        if self.hook_prefix == "":
            msg = "A hook prefix must be configured before templates are rendered"
            raise ConfigurationError(msg)
        return self.hook_prefix

    def get_path(self) -> Path:
        """Return the configured root path.

        Raises:
            ConfigurationError: If no root path was configured.
        """
        if self.root_path is None or str(self.root_path) == "":
            msg = "A root path must be configured for component origins"
            raise ConfigurationError(msg)
        return self.root_path

    def require(self) -> Self:
        """Fail fast unless the settings every render needs are present."""
        _ = self.get_hook_prefix()
        return self

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigurationError: If a value has the wrong shape.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigurationError(msg) from e

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Create configuration from a TOML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigurationError: If a value has the wrong shape.
        """
        return cls.from_dict(read_toml_file(path))

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        *,
        include_env: bool = True,
        overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load configuration from every source.

        Sources, lowest precedence first: defaults, discovered configuration
        files (or only ``path`` when given), ``HOOKTEMPLATES_*`` environment
        variables, then ``overrides``.

        Args:
            path: Explicit configuration file. Must exist when given.
            include_env: Whether to read environment variables.
            overrides: Values that win over every other source.

        Returns:
            The merged configuration.
        """
        files = [path] if path is not None else discover_config_files()

        data: dict[str, Any] = {}
        for file in files:
            data = deep_merge(data, read_toml_file(file))
        if include_env:
            data = deep_merge(data, parse_env_vars())
        if overrides:
            data = deep_merge(data, overrides)

        return cls.from_dict(data)
