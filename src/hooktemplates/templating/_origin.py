"""Template origins.

An origin is the owner of a set of templates. It anchors the search for
template files and supplies the default namespace used in hook names and
theme override folders.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from hooktemplates.exceptions import InvalidOriginError

# Attribute names looked up on arbitrary component objects, in order
_BASE_PATH_ATTRIBUTES = ("base_path", "plugin_path", "pluginPath")


@dataclass(frozen=True, slots=True)
class PathOrigin:
    """An origin given as a plain directory.

    Attributes:
        base_path: The directory templates are searched from.
    """

    base_path: Path

    @property
    def namespace(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class ComponentOrigin:
    """An origin backed by a plugin or component.

    Attributes:
        base_path: The component's root directory. When None, engines fall
            back to the configured root path.
        namespace: Namespace used in hook names and theme override folders.
    """

    base_path: Path | None = None
    namespace: str | None = None


TemplateOrigin = PathOrigin | ComponentOrigin


def _path_attribute(candidate: object) -> Path | None:
    for attribute in _BASE_PATH_ATTRIBUTES:
        value: object = getattr(candidate, attribute, None)
        if isinstance(value, (str, os.PathLike)) and str(value) != "":
            return Path(value)
    return None


def resolve_origin(origin: object) -> TemplateOrigin:
    """Turn a loosely typed origin into a ``PathOrigin`` or ``ComponentOrigin``.

    Accepted inputs:
    - a ``PathOrigin`` or ``ComponentOrigin``, returned unchanged;
    - a string or ``PathLike`` naming an existing directory;
    - any object exposing a non-empty ``base_path``, ``plugin_path`` or
      ``pluginPath`` attribute, optionally with ``template_namespace``.

    Args:
        origin: The origin to resolve.

    Returns:
        The typed origin.

    Raises:
        InvalidOriginError: If the origin is none of the above.
    """
    if isinstance(origin, (PathOrigin, ComponentOrigin)):
        return origin

    if isinstance(origin, (str, os.PathLike)):
        path = Path(origin)
        if str(origin) != "" and path.is_dir():
            return PathOrigin(base_path=path)
        msg = f"Template origin is not a directory: {origin!s}"
        raise InvalidOriginError(msg, origin=origin)

    base_path = _path_attribute(origin)
    if base_path is None:
        msg = f"Invalid origin for template engine: {origin!r}"
        raise InvalidOriginError(msg, origin=origin)

    namespace: object = getattr(origin, "template_namespace", None)
    return ComponentOrigin(
        base_path=base_path,
        namespace=str(namespace) if namespace else None,
    )
