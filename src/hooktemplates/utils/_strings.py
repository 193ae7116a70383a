"""String helpers used when splicing markup and normalizing names."""

import re
import unicodedata

_TAG_PATTERN = re.compile(r"<[^>]*>")
_ENTITY_PATTERN = re.compile(r"&[a-z0-9#]+;", re.IGNORECASE)
_INVALID_SLUG_CHARS = re.compile(r"[^a-z0-9 _-]")
_SLUG_SEPARATORS = re.compile(r"[\s.]+")
_REPEATED_DASHES = re.compile(r"-+")


def replace_first(search: str, replace: str, subject: str) -> str:
    """Replace the first occurrence of ``search`` in ``subject``.

    An empty search string leaves the subject untouched.

    Example:
        >>> replace_first("bacon", "eggs", "bacon, bacon")
        'eggs, bacon'
    """
    if search == "":
        return subject
    return subject.replace(search, replace, 1)


def replace_last(search: str, replace: str, subject: str) -> str:
    """Replace the last occurrence of ``search`` in ``subject``.

    Example:
        >>> replace_last("bacon", "eggs", "bacon, bacon")
        'bacon, eggs'
    """
    if search == "":
        return subject
    position = subject.rfind(search)
    if position == -1:
        return subject
    return subject[:position] + replace + subject[position + len(search) :]


def sanitize_title_with_dashes(title: str) -> str:
    """Turn an arbitrary string into a lowercase, dash separated slug.

    Markup tags and entities are dropped, accents are folded to ASCII,
    whitespace and dots become dashes and anything that is not a letter,
    digit, underscore or dash is removed. Runs of dashes collapse to one and
    leading/trailing dashes are trimmed.

    Args:
        title: The raw string, typically a template name segment.

    Returns:
        The sanitized slug. May be empty.
    """
    value = _TAG_PATTERN.sub("", title)
    value = _ENTITY_PATTERN.sub("", value)
    value = (
        unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    )
    value = value.lower()
    value = _SLUG_SEPARATORS.sub("-", value)
    value = _INVALID_SLUG_CHARS.sub("", value)
    value = value.replace(" ", "-")
    value = _REPEATED_DASHES.sub("-", value)
    return value.strip("-")
