"""Candidate folders searched for template files."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

PLUGIN_FOLDER_ID = "plugin"
PLUGIN_FOLDER_PRIORITY = 20
CHILD_THEME_FOLDER_ID = "child-theme"
CHILD_THEME_FOLDER_PRIORITY = 10
PARENT_THEME_FOLDER_ID = "parent-theme"
PARENT_THEME_FOLDER_PRIORITY = 15


@dataclass(frozen=True, slots=True)
class CandidateFolder:
    """A directory that may contain the requested template.

    Attributes:
        id: Identifier, unique within one candidate list.
        priority: Lower values are searched first. None sorts last.
        path: Directory path. Empty or None entries are skipped.
        namespace: Namespace reported when a template is found here.
    """

    id: str
    priority: int | None = None
    path: str | None = None
    namespace: str | None = None


def coerce_folder(value: object) -> CandidateFolder:
    """Accept a ``CandidateFolder`` or a mapping with the same keys.

    Mappings let filter callbacks add folders without importing this module.

    Raises:
        TypeError: If the value is neither.
    """
    if isinstance(value, CandidateFolder):
        return value
    if isinstance(value, Mapping):
        priority: object = value.get("priority")
        path: object = value.get("path")
        namespace: object = value.get("namespace")
        return CandidateFolder(
            id=str(value.get("id", "")),
            priority=priority if isinstance(priority, int) else None,
            path=str(path) if path else None,
            namespace=str(namespace) if namespace else None,
        )
    msg = f"Expected a candidate folder, got {type(value).__name__}"
    raise TypeError(msg)


def normalize_separators(value: str) -> str:
    """Replace both slash styles with the platform directory separator."""
    return value.replace("\\", os.sep).replace("/", os.sep)


def sort_by_priority(folders: Iterable[CandidateFolder]) -> list[CandidateFolder]:
    """Sort folders by ascending priority.

    Folders without a priority go last. The sort is stable, so folders with
    equal priority keep their relative order.
    """
    return sorted(
        folders,
        key=lambda folder: (folder.priority is None, folder.priority or 0),
    )


def apply_aliases(
    folders: Iterable[CandidateFolder],
    aliases: Mapping[str, str],
) -> list[CandidateFolder]:
    """Derive extra candidate folders from path aliases.

    For every folder and every ``original -> replacement`` pair whose
    normalized ``original`` occurs in the folder path, a copy of the folder is
    produced with the fragment replaced and the priority raised by one.

    Args:
        folders: The folders to derive from.
        aliases: Mapping of original path fragments to replacements.

    Returns:
        Only the derived folders, in derivation order.
    """
    derived: list[CandidateFolder] = []
    if not aliases:
        return derived

    for folder in folders:
        if not folder.path:
            continue
        for original, alias in aliases.items():
            normalized_original = normalize_separators(original)
            normalized_alias = normalize_separators(alias)
            if normalized_original not in folder.path:
                continue
            derived.append(
                replace(
                    folder,
                    id=f"{folder.id}_{alias}",
                    priority=(folder.priority or 0) + 1,
                    path=folder.path.replace(normalized_original, normalized_alias),
                )
            )
    return derived
