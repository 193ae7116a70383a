"""Isolated execution of template source files."""

from __future__ import annotations

import keyword
import runpy
from typing import TYPE_CHECKING

from hooktemplates.hooks import capture_output, echo

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

TEMPLATE_RUN_NAME = "__template__"


def _is_bindable(name: object) -> bool:
    return (
        isinstance(name, str)
        and name.isidentifier()
        and not keyword.iskeyword(name)
        and not name.startswith("__")
    )


def build_template_namespace(
    engine: object,
    context: Mapping[str, object],
    *,
    extract: bool = False,
) -> dict[str, object]:
    """Build the globals a template file runs with.

    Every template sees ``template`` (the rendering engine), ``context`` (the
    merged local context) and ``echo`` (writes to the captured output).

    With ``extract`` enabled, each context key that is a valid identifier is
    also bound as a name of its own. This ties context keys to names used in
    the template source, so it is opt-in. Extracted keys never replace
    ``template``, ``context`` or ``echo``.

    Args:
        engine: The engine rendering the file.
        context: The merged local context.
        extract: Whether to bind context keys as names.

    Returns:
        The namespace dict.
    """
    namespace: dict[str, object] = {}
    if extract:
        namespace.update(
            {key: value for key, value in context.items() if _is_bindable(key)}
        )
    namespace.update({"template": engine, "context": context, "echo": echo})
    return namespace


def safe_include(file: Path, namespace: Mapping[str, object]) -> str:
    """Execute a template file and return everything it printed.

    The file runs in a fresh module namespace seeded with ``namespace``; it
    cannot see or change the caller's locals. Exceptions raised by the file
    propagate unchanged.

    Args:
        file: The template source file.
        namespace: Globals to seed the file's namespace with.

    Returns:
        The captured output.
    """
    with capture_output() as buffer:
        _ = runpy.run_path(
            str(file),
            init_globals=dict(namespace),
            run_name=TEMPLATE_RUN_NAME,
        )
    return buffer.getvalue()
