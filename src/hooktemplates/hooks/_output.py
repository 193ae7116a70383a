"""Output capture for template and hook callbacks.

Captures are tracked per execution context with a context variable, so
renders running in different threads (or asyncio tasks) never collect each
other's output. While any capture is active, ``sys.stdout`` is replaced by a
routing stream that sends writes to the innermost capture of the writing
context and everything else to the original stream.
"""

from __future__ import annotations

import contextvars
import io
import sys
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from collections.abc import Iterator

_current_stream: contextvars.ContextVar[io.StringIO | None] = contextvars.ContextVar(
    "hooktemplates_output", default=None
)


class OutputBuffer:
    """Collects everything written to stdout inside ``capture_output``."""

    __slots__ = ("_stream",)

    def __init__(self) -> None:
        self._stream: io.StringIO = io.StringIO()

    @property
    def stream(self) -> io.StringIO:
        return self._stream

    def getvalue(self) -> str:
        return self._stream.getvalue()


class _RoutingStream:
    """Stand-in for ``sys.stdout`` while captures are active."""

    def __init__(self, fallback: TextIO) -> None:
        self.fallback: TextIO = fallback

    def _target(self) -> TextIO:
        stream = _current_stream.get()
        return stream if stream is not None else self.fallback

    def write(self, text: str) -> int:
        return self._target().write(text)

    def writelines(self, lines: Iterator[str]) -> None:
        self._target().writelines(lines)

    def flush(self) -> None:
        self._target().flush()

    def __getattr__(self, name: str) -> object:
        return getattr(self.fallback, name)


_install_lock = threading.Lock()
_active_captures = 0


def _install() -> None:
    global _active_captures  # noqa: PLW0603
    with _install_lock:
        if _active_captures == 0 and not isinstance(sys.stdout, _RoutingStream):
            sys.stdout = _RoutingStream(sys.stdout)  # pyright: ignore[reportAttributeAccessIssue]
        _active_captures += 1


def _uninstall() -> None:
    global _active_captures  # noqa: PLW0603
    with _install_lock:
        _active_captures -= 1
        stdout = sys.stdout
        if _active_captures == 0 and isinstance(stdout, _RoutingStream):
            sys.stdout = stdout.fallback


@contextmanager
def capture_output() -> Iterator[OutputBuffer]:
    """Capture stdout written by the current context for the block.

    Captures nest: an inner capture collects only what is written while it
    is active. Writes from other threads are not collected.

    Example:
        >>> with capture_output() as buffer:
        ...     echo("<p>hi</p>")
        >>> buffer.getvalue()
        '<p>hi</p>'
    """
    buffer = OutputBuffer()
    _install()
    token = _current_stream.set(buffer.stream)
    try:
        yield buffer
    finally:
        _current_stream.reset(token)
        _uninstall()


def echo(*parts: object) -> None:
    """Write values to the current output without separators or newline."""
    text = "".join(str(part) for part in parts)
    stream = _current_stream.get()
    _ = (stream if stream is not None else sys.stdout).write(text)
