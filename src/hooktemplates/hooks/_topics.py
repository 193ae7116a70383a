"""Topic names used by template engines."""

from enum import StrEnum

TOPIC_NAMESPACE = "hooktemplates"


class Topic(StrEnum):
    """Topic suffixes fired by template engines."""

    TEMPLATE_DONE = "template_done"
    TEMPLATE_CONTEXT_GET = "template_context_get"
    TEMPLATE_CONTEXT = "template_context"
    TEMPLATE_ORIGIN_BASE_FOLDER = "template_origin_base_folder"
    TEMPLATE_ORIGIN_NAMESPACE_MAP = "template_origin_namespace_map"
    TEMPLATE_FILE = "template_file"
    TEMPLATE_PLUGIN_PATH = "template_plugin_path"
    TEMPLATE_COMMON_PATH = "template_common_path"
    TEMPLATE_PUBLIC_NAMESPACE = "template_public_namespace"
    TEMPLATE_PUBLIC_PATH = "template_public_path"
    TEMPLATE_PATH_LIST = "template_path_list"
    TEMPLATE_THEME_PATH_LIST = "template_theme_path_list"
    TEMPLATE_PRE_HTML = "template_pre_html"
    TEMPLATE_BEFORE_INCLUDE = "template_before_include"
    TEMPLATE_BEFORE_INCLUDE_HTML = "template_before_include_html"
    TEMPLATE_INCLUDE_HTML = "template_include_html"
    TEMPLATE_AFTER_INCLUDE = "template_after_include"
    TEMPLATE_AFTER_INCLUDE_HTML = "template_after_include_html"
    TEMPLATE_HTML = "template_html"
    TEMPLATE_ENTRY_POINT_IS_ENABLED = "template_entry_point_is_enabled"
    TEMPLATE_ENTRY_POINT = "template_entry_point"
    TEMPLATE_ENTRY_POINT_HTML = "template_entry_point_html"
    IS_TRUTHY_STRINGS = "is_truthy_strings"


def build_topic(hook_prefix: str, suffix: str, *qualifiers: str) -> str:
    """Build a fully qualified topic name.

    Args:
        hook_prefix: The project's hook prefix.
        suffix: Topic suffix, usually a ``Topic`` member.
        *qualifiers: Hook name and entry point name, appended after colons.

    Returns:
        The topic name.

    Example:
        >>> build_topic("acme", Topic.TEMPLATE_HTML, "dummy/card")
        'hooktemplates/acme/template_html:dummy/card'
    """
    name = f"{TOPIC_NAMESPACE}/{hook_prefix}/{suffix}"
    for qualifier in qualifiers:
        name = f"{name}:{qualifier}"
    return name
