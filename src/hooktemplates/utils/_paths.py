"""Path fragment merging."""

import os
import re
from collections.abc import Sequence

# A separator preceded by a backslash is escaped and never splits a segment
_UNESCAPED_SEPARATOR = re.compile(r"(?<!\\)/")

PathFragments = str | os.PathLike[str] | Sequence[str]


def split_path(fragment: PathFragments) -> list[str]:
    """Split a path fragment into its segments.

    Strings are split on unescaped forward slashes. An absolute path keeps a
    leading empty segment so that joining the segments restores the root.
    Sequences are taken as already split.

    Args:
        fragment: A path string, ``PathLike`` or sequence of segments.

    Returns:
        The list of segments.
    """
    if isinstance(fragment, os.PathLike):
        fragment = os.fspath(fragment)
    if isinstance(fragment, str):
        normalized = fragment if os.sep == "/" else fragment.replace(os.sep, "/")
        return _UNESCAPED_SEPARATOR.split(normalized)
    return [str(segment) for segment in fragment]


def _trim(segments: list[str], *, keep_root: bool) -> list[str]:
    start = 0
    if not keep_root:
        while start < len(segments) and segments[start] == "":
            start += 1
    end = len(segments)
    while end > start + 1 and segments[end - 1] == "":
        end -= 1
    trimmed = segments[start:end]
    if not keep_root:
        return [segment for segment in trimmed if segment != ""]
    return trimmed[:1] + [segment for segment in trimmed[1:] if segment != ""]


def _overlap(left: list[str], right: list[str]) -> int:
    """Return the length of the longest suffix of left that prefixes right."""
    for size in range(min(len(left), len(right)), 0, -1):
        if left[-size:] == right[:size]:
            return size
    return 0


def merge_paths(*fragments: PathFragments) -> str:
    """Merge path fragments into one path, collapsing overlapping segments.

    Each fragment is appended to the path built so far. When the end of the
    current path repeats the start of the next fragment the repeated segments
    are written only once.

    Args:
        *fragments: Path strings or sequences of path segments, in order.

    Returns:
        The merged path joined with the platform directory separator.

    Example:
        >>> merge_paths("/app/plugin/templates", "/templates/src/views", "src/views/list.py")
        '/app/plugin/templates/src/views/list.py'
    """  # noqa: E501
    merged: list[str] = []
    for index, fragment in enumerate(fragments):
        segments = _trim(split_path(fragment), keep_root=index == 0)
        if not merged:
            merged = segments
            continue
        merged.extend(segments[_overlap(merged, segments) :])

    if merged == [""]:
        return os.sep
    return os.sep.join(merged)
