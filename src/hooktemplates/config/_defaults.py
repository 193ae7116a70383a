"""Default configuration values."""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "hook_prefix": "",
    "root_path": None,
    "origin_base_folder": ["src", "views"],
    "source_extension": ".py",
    "truthy_strings": ["1", "enable", "enabled", "on", "y", "yes", "true"],
    "theme": {
        "child": None,
        "parent": None,
        "child_uri": "",
        "parent_uri": "",
    },
    "logging": {
        "level": "warning",
        "format": "json",
        "file": "",
    },
}
