"""Theme directory providers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from hooktemplates.utils import wrap

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hooktemplates.config import ThemeConfig


class ThemeDirectories(Protocol):
    """Provides the active theme's directories."""

    def stylesheet_directory(self) -> Path | None:
        """Return the active (child) theme root directory."""
        ...

    def template_directory(self) -> Path | None:
        """Return the parent theme root directory."""
        ...


@dataclass(frozen=True, slots=True)
class StaticThemeDirectories:
    """Theme directories fixed at construction time.

    Attributes:
        child: Active (child) theme root directory.
        parent: Parent theme root directory. Same as ``child`` when the
            active theme has no parent.
        child_uri: Public base URI of the child theme.
        parent_uri: Public base URI of the parent theme.
    """

    child: Path | None = None
    parent: Path | None = None
    child_uri: str = ""
    parent_uri: str = ""

    @classmethod
    def from_config(cls, config: ThemeConfig) -> StaticThemeDirectories:
        return cls(
            child=config.child,
            parent=config.parent if config.parent is not None else config.child,
            child_uri=config.child_uri,
            parent_uri=config.parent_uri or config.child_uri,
        )

    def stylesheet_directory(self) -> Path | None:
        return self.child

    def template_directory(self) -> Path | None:
        return self.parent

    def stylesheet_directory_uri(self) -> str:
        return self.child_uri

    def template_directory_uri(self) -> str:
        return self.parent_uri


def locate_stylesheet(
    themes: StaticThemeDirectories,
    stylesheets: str | Sequence[str],
    fallback: str = "",
) -> str:
    """Find the first stylesheet provided by the child or parent theme.

    Each file name is looked up in the child theme first, then in the parent
    theme. The first hit is returned as a URI under the matching theme's
    base URI.

    Args:
        themes: Theme directories with their base URIs.
        stylesheets: One file name or a list of file names, in order.
        fallback: Returned when no theme provides any of the files.

    Returns:
        The stylesheet URI or ``fallback``.
    """
    names: list[str] = [str(name) for name in wrap(stylesheets)]

    for filename in names:
        for directory, uri in (
            (themes.stylesheet_directory(), themes.stylesheet_directory_uri()),
            (themes.template_directory(), themes.template_directory_uri()),
        ):
            if directory is None:
                continue
            if (Path(directory) / filename).is_file():
                return f"{uri.rstrip('/')}/{filename}"

    return fallback
