"""Exit codes and console helpers shared by CLI commands."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Never

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "ExitCode",
    "exit_with_error",
    "get_error_console",
    "parse_assignments",
]


class ExitCode(IntEnum):
    """Standard exit codes for hooktemplates commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    INTERNAL_ERROR = 5


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr."""
    from rich.console import Console  # noqa: PLC0415

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to INTERNAL_ERROR).
        console: Optional Rich console for output. A stderr console is
            created when omitted.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(code)


def parse_assignments(values: list[str] | None, *, option: str) -> dict[str, str]:
    """Split ``key=value`` option values into a mapping.

    Raises:
        ValueError: If a value has no ``=`` or an empty key.
    """
    result: dict[str, str] = {}
    for value in values or []:
        key, sep, rest = value.partition("=")
        if not sep or not key:
            msg = f"{option} expects KEY=VALUE, got {value!r}"
            raise ValueError(msg)
        result[key] = rest
    return result
