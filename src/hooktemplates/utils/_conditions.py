"""Truthiness parsing for loosely typed switches."""

from collections.abc import Iterable

DEFAULT_TRUTHY_STRINGS: tuple[str, ...] = (
    "1",
    "enable",
    "enabled",
    "on",
    "y",
    "yes",
    "true",
)


def is_truthy(
    value: object,
    truthy_strings: Iterable[str] = DEFAULT_TRUTHY_STRINGS,
) -> bool:
    """Decide whether a loosely typed value means "on".

    Booleans are returned as-is. Strings are compared case-insensitively
    against ``truthy_strings`` and every other string is false. Any other
    value falls back to ``bool()``.

    Args:
        value: The value to interpret.
        truthy_strings: Lowercase strings that count as true.

    Returns:
        True when the value should be treated as enabled.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in set(truthy_strings)
    return bool(value)
