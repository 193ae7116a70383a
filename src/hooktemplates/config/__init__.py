"""hooktemplates configuration.

Example:
    >>> from hooktemplates.config import TemplatesConfig
    >>> config = TemplatesConfig.from_dict({"hook_prefix": "acme"})
    >>> config.get_hook_prefix()
    'acme'
"""

from hooktemplates.exceptions import ConfigLoadError, ConfigurationError

from ._defaults import DEFAULT_CONFIG
from ._loader import (
    CONFIG_FILE_NAME,
    ENV_PREFIX,
    deep_merge,
    discover_config_files,
    get_user_config_path,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
)
from ._models import LogFormat, LoggingConfig, LogLevel, TemplatesConfig, ThemeConfig

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "ConfigLoadError",
    "ConfigurationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "TemplatesConfig",
    "ThemeConfig",
    "deep_merge",
    "discover_config_files",
    "get_user_config_path",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
]
