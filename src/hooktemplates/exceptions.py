"""hooktemplates exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class HookTemplatesError(Exception):
    """Base exception for hooktemplates errors."""


class ConfigurationError(HookTemplatesError):
    """Raised when required configuration is missing or invalid.

    Configuration errors are fatal: they are raised as soon as the missing
    value is requested and are never converted into a "not found" result.
    """


class ConfigLoadError(ConfigurationError):
    """Raised when a configuration file cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class InvalidOriginError(ConfigurationError, ValueError):
    """Raised when a template origin is neither a directory nor a component."""

    def __init__(self, message: str, *, origin: object = None) -> None:
        """Initialize with error message and the rejected origin."""
        super().__init__(message)
        self.origin: object = origin
