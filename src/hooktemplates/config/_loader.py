# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""TOML configuration file loading and merging."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from hooktemplates.exceptions import ConfigLoadError
from hooktemplates.utils import load_json, set_nested

ENV_PREFIX = "HOOKTEMPLATES_"
CONFIG_FILE_NAME = "hooktemplates.toml"

# Variables read by the logging factories rather than the config model
_RESERVED_ENV_KEYS = frozenset({"DEBUG", "LOG_LEVEL"})


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse a TOML file.

    A ``pyproject.toml`` style ``[tool.hooktemplates]`` table is unwrapped so
    both layouts are accepted.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(
            msg,
            path=path,
            line=getattr(e, "lineno", None),
            column=getattr(e, "colno", None),
        ) from e

    tool_section = data.get("tool", {})
    if isinstance(tool_section, dict) and isinstance(
        tool_section.get("hooktemplates"), dict
    ):
        return tool_section["hooktemplates"]
    return data


def copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    """Create a deep copy of a configuration value."""
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def deep_merge(
    base: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    override: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Deep merge two configuration dictionaries.

    Merges `override` into `base`, returning a new dictionary. Neither input
    is modified.

    Merge rules:
        - Dictionaries are recursively merged
        - Arrays are replaced entirely (no element-wise merge)
        - Scalars are replaced with override value
        - Missing keys in override preserve base values
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key in base.keys() | override.keys():
        if key not in override:
            result[key] = copy_value(base[key])
        elif key not in base:
            result[key] = copy_value(override[key])
        elif isinstance(base[key], dict) and isinstance(override[key], dict):
            result[key] = deep_merge(base[key], override[key])
        else:
            result[key] = copy_value(override[key])

    return result


def parse_string_value(value: str) -> Any:  # pyright: ignore[reportExplicitAny]
    """Parse a string value with automatic type inference.

    Precedence:
    1. Boolean: true/false (case-insensitive)
    2. Integer: parseable as int (no decimal)
    3. Float: parseable as float (with decimal)
    4. JSON array/object: starts with [ or {
    5. String: fallback

    Examples:
        >>> parse_string_value("true")
        True
        >>> parse_string_value("42")
        42
        >>> parse_string_value('["src", "views"]')
        ['src', 'views']
    """
    lower_value = value.lower()
    if lower_value in ("true", "false"):
        return lower_value == "true"

    if "." not in value:
        try:
            return int(value)
        except ValueError:
            pass
    else:
        try:
            return float(value)
        except ValueError:
            pass

    if (value.startswith("[") and value.endswith("]")) or (
        value.startswith("{") and value.endswith("}")
    ):
        parsed = load_json(value)
        if parsed is not None:
            return parsed

    return value


def parse_env_vars(
    prefix: str = ENV_PREFIX,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse environment variables into config dictionary.

    Environment variable naming:
        - Add prefix (HOOKTEMPLATES_)
        - Convert to uppercase
        - Replace dots with double underscores
        - Example: logging.level -> HOOKTEMPLATES_LOGGING__LEVEL

    Path-like keys (``hook_prefix``, ``root_path`` and theme directories) are
    kept as strings.
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue

        config_key = key[len(prefix) :]
        if not config_key or config_key in _RESERVED_ENV_KEYS:
            continue

        config_path = config_key.replace("__", ".").lower()
        leaf = config_path.rsplit(".", 1)[-1]
        parsed_value = (
            value
            if leaf in {"hook_prefix", "root_path", "child", "parent", "file"}
            else parse_string_value(value)
        )
        set_nested(result, config_path, parsed_value)

    return result


def get_user_config_path() -> Path:
    """Return the per-user configuration file location."""
    import platformdirs  # noqa: PLC0415

    return platformdirs.user_config_path("hooktemplates") / "config.toml"


def discover_config_files(start: Path | None = None) -> list[Path]:
    """Find configuration files, lowest precedence first.

    The user configuration file comes first, then the nearest
    ``hooktemplates.toml`` walking up from ``start`` (the current directory by
    default).

    Args:
        start: Directory to start the upward search from.

    Returns:
        Existing configuration files in merge order.
    """
    found: list[Path] = []

    user_path = get_user_config_path()
    if user_path.is_file():
        found.append(user_path)

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            found.append(candidate)
            break

    return found
