"""Shared helpers for hooktemplates."""

from ._arrays import (
    KeyPath,
    get_nested,
    ordered_difference,
    set_nested,
    to_key_path,
    wrap,
)
from ._conditions import DEFAULT_TRUTHY_STRINGS, is_truthy
from ._json import dump_json, load_json
from ._logging import LogFormatType, create_cli_logger, create_templates_logger
from ._paths import PathFragments, merge_paths, split_path
from ._strings import replace_first, replace_last, sanitize_title_with_dashes
from ._transient import TransientEntry, TransientStore

__all__ = [
    "DEFAULT_TRUTHY_STRINGS",
    "KeyPath",
    "LogFormatType",
    "PathFragments",
    "TransientEntry",
    "TransientStore",
    "create_cli_logger",
    "create_templates_logger",
    "dump_json",
    "get_nested",
    "is_truthy",
    "load_json",
    "merge_paths",
    "ordered_difference",
    "replace_first",
    "replace_last",
    "sanitize_title_with_dashes",
    "set_nested",
    "split_path",
    "to_key_path",
    "wrap",
]
