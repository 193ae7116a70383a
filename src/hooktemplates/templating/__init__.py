r"""Template resolution and rendering.

Templates are Python source files found below an origin's folder. A render
executes the file with the merged context, wraps its output with hookable
before/after markup and injects container entry points.

Basic usage:
    from hooktemplates.config import TemplatesConfig
    from hooktemplates.templating import Template

    config = TemplatesConfig(hook_prefix="acme")
    engine = Template(config, origin="/srv/acme", folder="src/views")

    # /srv/acme/src/views/product/card.py:
    #     echo(f'<div class="card">{template.get("title")}</div>')
    html = engine.render("product/card", {"title": "Mug"}, echo=False)

Adding content without touching the template:
    engine.bus.add_action(
        engine.topic("template_entry_point", "product/card", "after_container_open"),
        lambda *_: echo("<span>New</span>"),
    )
"""

from ._context import ContextStore, to_context_dict
from ._engine import Template, TemplateLocation, TemplateName, split_template_name
from ._entry_points import (
    AFTER_CONTAINER_OPEN,
    BEFORE_CONTAINER_CLOSE,
    TAG_PATTERN,
    TagMatch,
    find_container,
    find_tag_matches,
    inject_container_entry_points,
    splice_container_entry_points,
)
from ._folders import (
    CHILD_THEME_FOLDER_ID,
    CHILD_THEME_FOLDER_PRIORITY,
    PARENT_THEME_FOLDER_ID,
    PARENT_THEME_FOLDER_PRIORITY,
    PLUGIN_FOLDER_ID,
    PLUGIN_FOLDER_PRIORITY,
    CandidateFolder,
    apply_aliases,
    coerce_folder,
    normalize_separators,
    sort_by_priority,
)
from ._include import build_template_namespace, safe_include
from ._origin import ComponentOrigin, PathOrigin, TemplateOrigin, resolve_origin
from ._part_cache import PartCache
from ._themes import StaticThemeDirectories, ThemeDirectories, locate_stylesheet

__all__ = [
    "AFTER_CONTAINER_OPEN",
    "BEFORE_CONTAINER_CLOSE",
    "CHILD_THEME_FOLDER_ID",
    "CHILD_THEME_FOLDER_PRIORITY",
    "PARENT_THEME_FOLDER_ID",
    "PARENT_THEME_FOLDER_PRIORITY",
    "PLUGIN_FOLDER_ID",
    "PLUGIN_FOLDER_PRIORITY",
    "TAG_PATTERN",
    "CandidateFolder",
    "ComponentOrigin",
    "ContextStore",
    "PartCache",
    "PathOrigin",
    "StaticThemeDirectories",
    "TagMatch",
    "Template",
    "TemplateLocation",
    "TemplateName",
    "TemplateOrigin",
    "ThemeDirectories",
    "apply_aliases",
    "build_template_namespace",
    "coerce_folder",
    "find_container",
    "find_tag_matches",
    "inject_container_entry_points",
    "locate_stylesheet",
    "normalize_separators",
    "resolve_origin",
    "safe_include",
    "sort_by_priority",
    "splice_container_entry_points",
    "split_template_name",
    "to_context_dict",
]
