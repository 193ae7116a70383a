"""Container entry-point injection.

Rendered markup wrapped in a single top-level element gets two entry points
spliced just inside the wrapper: ``after_container_open`` right after the
opening tag and ``before_container_close`` right before the closing tag.

Tags are found with a regular expression, not an HTML parser. Markup that is
not framed by one opening tag and a closing tag of the same name is left
untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hooktemplates.utils import replace_first, replace_last

if TYPE_CHECKING:
    from collections.abc import Callable

AFTER_CONTAINER_OPEN = "after_container_open"
BEFORE_CONTAINER_CLOSE = "before_container_close"

TAG_PATTERN = re.compile(r"<(?P<is_end>/)*(?P<tag>[A-Z0-9]*)[^>]*>", re.I | re.M)


@dataclass(frozen=True, slots=True)
class TagMatch:
    """One tag-like token found in markup.

    Attributes:
        html: The full matched text, e.g. ``<div class="x">``.
        tag: The tag name as written (may be empty).
        is_end: Whether the token is a closing tag.
    """

    html: str
    tag: str
    is_end: bool


def find_tag_matches(html: str) -> list[TagMatch]:
    """Return every tag-like token in order of appearance."""
    return [
        TagMatch(
            html=match.group(0),
            tag=match.group("tag"),
            is_end=match.group("is_end") == "/",
        )
        for match in TAG_PATTERN.finditer(html)
    ]


def find_container(html: str) -> tuple[TagMatch, TagMatch] | None:
    """Find the opening and closing tags framing the whole markup.

    Returns:
        The first and last tag matches, or None when the markup has no tags,
        the first and last tag names differ, the first tag is a closing tag
        or the last tag is not one.
    """
    matches = find_tag_matches(html)
    if not matches:
        return None

    first, last = matches[0], matches[-1]
    if first.tag != last.tag:
        return None
    if first.is_end:
        return None
    if not last.is_end:
        return None
    return first, last


def inject_container_entry_points(
    html: str,
    fire_entry_point: Callable[[str], str | None],
) -> str:
    """Splice container entry-point output just inside the wrapper element.

    Args:
        html: Rendered markup.
        fire_entry_point: Called with the entry point name, returns the
            markup to insert or None when entry points are disabled.

    Returns:
        The markup with entry-point output inserted, or the markup unchanged
        when it is not framed by a single wrapper element.
    """
    container = find_container(html)
    if container is None:
        return html
    return splice_container_entry_points(html, container, fire_entry_point)


def splice_container_entry_points(
    html: str,
    container: tuple[TagMatch, TagMatch],
    fire_entry_point: Callable[[str], str | None],
) -> str:
    """Insert entry-point output inside a container found by ``find_container``."""
    first, last = container
    open_html = fire_entry_point(AFTER_CONTAINER_OPEN) or ""
    close_html = fire_entry_point(BEFORE_CONTAINER_CLOSE) or ""

    html = replace_first(first.html, first.html + open_html, html)
    return replace_last(last.html, close_html + last.html, html)
