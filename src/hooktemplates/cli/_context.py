# pyright: reportUnusedCallResult=false
"""CLI context for global state management.

The CLIContext is set once by the global option handler and read by every
command through a context variable.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console
    from structlog.typing import FilteringBoundLogger

    from hooktemplates.config import TemplatesConfig


class OutputFormat(StrEnum):
    """Supported output formats for listing commands."""

    TABLE = "table"
    JSON = "json"


_current_cli_context: contextvars.ContextVar[CLIContext | None] = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and options.

    Attributes:
        config: Loaded configuration object.
        verbose: Enable verbose output with additional details.
        config_path: Explicit configuration file passed with ``--config``.
        logger: Structured logger for CLI commands.
        console: Console for command output.
        error_console: Console for error messages.
    """

    config: TemplatesConfig = field(repr=False)
    verbose: bool = False
    config_path: Path | None = None
    logger: FilteringBoundLogger | None = field(default=None, repr=False)
    console: Console | None = field(default=None, repr=False)
    error_console: Console | None = field(default=None, repr=False)

    @classmethod
    def get_current(cls) -> CLIContext:
        """Get the active CLIContext, or a default one built from the defaults."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx

        from hooktemplates.config import TemplatesConfig  # noqa: PLC0415

        return cls(config=TemplatesConfig.from_dict({}))

    @classmethod
    def set_current(cls, ctx: CLIContext) -> None:
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to the default context."""
        _current_cli_context.set(None)

    def get_console(self) -> Console:
        """Return the output console, creating a stdout console if none is set."""
        if self.console is not None:
            return self.console

        from rich.console import Console  # noqa: PLC0415

        return Console()
