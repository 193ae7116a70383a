from __future__ import annotations

from typing import cast

import orjson


def load_json(json_str: str) -> dict[str, object] | list[object] | None:
    """Load and parse a JSON string.

    Args:
        json_str: The JSON string to parse.

    Returns:
        The parsed JSON data as a dictionary or list, or None if parsing fails.
    """
    try:
        return cast("dict[str, object] | list[object]", orjson.loads(json_str))
    except orjson.JSONDecodeError:
        return None


def dump_json(data: object, *, indent: bool = True) -> str:
    """Serialize data as JSON text.

    Args:
        data: JSON-serializable data.
        indent: Whether to pretty-print with two-space indentation.

    Returns:
        The JSON document.
    """
    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options, default=str).decode("utf-8")
