# pyright: reportAny=false, reportExplicitAny=false
"""Nested mapping access helpers."""

from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any

KeyPath = str | int | Sequence[str | int]


def to_key_path(index: KeyPath) -> list[str | int]:
    """Normalize a key path.

    Dotted strings are split on ``.``; sequences are used as-is and any other
    scalar becomes a single-element path.

    Example:
        >>> to_key_path("user.name")
        ['user', 'name']
    """
    if isinstance(index, str):
        return list(index.split("."))
    if isinstance(index, int):
        return [index]
    return list(index)


def get_nested(data: Mapping[Any, Any], index: KeyPath, default: Any = None) -> Any:
    """Read a value at a nested key path.

    Args:
        data: The mapping to read from.
        index: Dotted string or sequence of keys.
        default: Returned when any level of the path is missing.

    Returns:
        The stored value, or ``default``.
    """
    if isinstance(index, (str, int)) and index in data:
        return data[index]

    current: Any = data
    for key in to_key_path(index):
        if isinstance(current, Mapping) and key in current:
            current = current[key]
        else:
            return default
    return current


def set_nested(
    data: MutableMapping[Any, Any],
    index: KeyPath,
    value: Any,
) -> MutableMapping[Any, Any]:
    """Write a value at a nested key path, creating intermediate dicts.

    A non-mapping value found on the way is replaced by a new dict.

    Args:
        data: The mapping to modify in place.
        index: Dotted string or sequence of keys.
        value: The value to store.

    Returns:
        The same (mutated) ``data`` mapping.

    Example:
        >>> set_nested({}, "logging.level", "debug")
        {'logging': {'level': 'debug'}}
    """
    parts = to_key_path(index)
    if not parts:
        return data

    current: MutableMapping[Any, Any] = data
    for part in parts[:-1]:
        child = current.get(part)
        if not isinstance(child, MutableMapping):
            child = {}
            current[part] = child
        current = child

    current[parts[-1]] = value
    return data


def wrap(value: object) -> list[Any]:
    """Wrap a value in a list unless it already is a list or tuple.

    ``None`` becomes an empty list.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def ordered_difference(values: Sequence[str], exclude: Sequence[str]) -> list[str]:
    """Return the values not present in ``exclude``, keeping their order."""
    excluded = set(exclude)
    return [value for value in values if value not in excluded]
