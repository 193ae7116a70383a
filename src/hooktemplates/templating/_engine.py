"""Template engine: file resolution and the render pipeline."""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Self

from hooktemplates.exceptions import InvalidOriginError
from hooktemplates.hooks import HookBus, Topic, build_topic, capture_output
from hooktemplates.utils import (
    create_templates_logger,
    is_truthy,
    merge_paths,
    ordered_difference,
    sanitize_title_with_dashes,
    wrap,
)

from ._context import ContextStore, to_context_dict
from ._entry_points import find_container, splice_container_entry_points
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
    sort_by_priority,
)
from ._include import build_template_namespace, safe_include
from ._origin import ComponentOrigin, TemplateOrigin, resolve_origin
from ._themes import StaticThemeDirectories, ThemeDirectories

if TYPE_CHECKING:
    from pydantic import BaseModel
    from structlog.typing import FilteringBoundLogger

    from hooktemplates.config import TemplatesConfig
    from hooktemplates.utils import KeyPath

TemplateName = str | Sequence[str]


@dataclass(frozen=True, slots=True)
class TemplateLocation:
    """Where a template was found.

    Attributes:
        path: The template source file.
        namespace: Namespace declared by the candidate folder that held the
            file, if any.
    """

    path: Path
    namespace: str | None = None


def split_template_name(name: TemplateName) -> list[str]:
    """Split a slash separated template name into segments."""
    if isinstance(name, str):
        return name.split("/")
    return [str(segment) for segment in name]


class Template:
    """Locates and renders template files for one origin and folder.

    A template is a Python source file. It runs with ``template`` (this
    engine), ``context`` (the merged local context) and ``echo`` in its
    namespace; whatever it prints becomes the rendered markup.

    Every stage of a render fires filters and actions on the engine's
    ``HookBus`` so external code can change paths, context and markup, or
    add content at named entry points.

    Example:
        >>> config = TemplatesConfig(hook_prefix="acme")
        >>> engine = Template(config, origin="/srv/acme", folder="src/views")
        >>> engine.render("product/card", {"title": "Mug"}, echo=False)
        '<div class="card">Mug</div>'
    """

    def __init__(
        self,
        config: TemplatesConfig,
        *,
        bus: HookBus | None = None,
        origin: object = None,
        folder: str | Sequence[str] | None = None,
        aliases: Mapping[str, str] | None = None,
        folder_lookup: object = False,
        extract_context: object = False,
        themes: ThemeDirectories | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Project settings. The hook prefix must be set.
            bus: Extension bus. A private bus is created when omitted.
            origin: Directory, component object, ``PathOrigin`` or
                ``ComponentOrigin``. May be set later with
                ``set_template_origin``.
            folder: Folder below the origin holding the templates, as a
                slash separated string or a list of segments.
            aliases: Path fragment aliases producing extra candidate folders.
            folder_lookup: Whether theme override folders are searched.
            extract_context: Whether context keys become names in templates.
            themes: Theme directory provider. Built from ``config.theme``
                when omitted.
            logger: Structured logger. Built from ``config.logging`` when
                omitted.

        Raises:
            ConfigurationError: If the hook prefix is not configured or the
                origin is invalid.
        """
        self.config: TemplatesConfig = config.require()
        self.bus: HookBus = bus if bus is not None else HookBus()
        self.themes: ThemeDirectories = (
            themes
            if themes is not None
            else StaticThemeDirectories.from_config(config.theme)
        )
        self.logger: FilteringBoundLogger = (
            logger
            if logger is not None
            else create_templates_logger(
                config.logging.level.value,
                log_format="text" if config.logging.format.value == "text" else "json",
                log_file=config.logging.file,
            )
        )

        self._context: ContextStore = ContextStore()
        self._origin: TemplateOrigin | None = None
        self._base_path: list[str] = []
        self._folder: list[str] = []
        self._aliases: dict[str, str] = {}
        self._folder_lookup: bool = False
        self._extract_context: bool = False
        self._current_hook_name: str = ""
        self._origin_base_folder: list[str] = list(config.origin_base_folder)

        # Memoized per raw template name for the life of the engine
        self._name_parts: dict[str, list[str]] = {}
        self._locations: dict[str, TemplateLocation | None] = {}
        self._cache_lock: threading.Lock = threading.Lock()

        if origin is not None:
            _ = self.set_template_origin(origin)
        _ = self.set_template_folder(folder if folder is not None else [])
        _ = self.set_aliases(aliases or {})
        _ = self.set_template_folder_lookup(folder_lookup)
        _ = self.set_template_context_extract(extract_context)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def topic(self, suffix: str, *qualifiers: str) -> str:
        """Build a topic name under this project's hook prefix."""
        return build_topic(self.config.get_hook_prefix(), suffix, *qualifiers)

    @property
    def origin(self) -> TemplateOrigin | None:
        return self._origin

    def set_template_origin(self, origin: object = None) -> Self:
        """Set the origin templates are searched from.

        Args:
            origin: Directory, component object or typed origin. When None
                the current origin is re-applied.

        Raises:
            InvalidOriginError: If the origin is neither a directory nor a
                component exposing a base path.
            ConfigurationError: If a component origin has no base path and no
                root path is configured.
        """
        if origin is None:
            origin = self._origin
        if origin is None:
            msg = "Invalid origin for template engine: None"
            raise InvalidOriginError(msg, origin=origin)

        resolved = resolve_origin(origin)
        if isinstance(resolved, ComponentOrigin) and resolved.base_path is None:
            base = self.config.get_path()
        else:
            base = resolved.base_path

        self._origin = resolved
        self._base_path = [str(base).rstrip("\\/") or os.sep]
        self._reset_lookup_cache()
        return self

    def get_template_base_path(self) -> list[str]:
        return list(self._base_path)

    def set_template_folder(self, folder: str | Sequence[str] | None = None) -> Self:
        """Set the folder below the origin that holds the templates.

        Args:
            folder: Slash separated string or list of segments. None keeps
                the current folder.
        """
        if folder is None:
            return self
        segments = folder.split("/") if isinstance(folder, str) else list(folder)
        self._folder = [str(segment) for segment in segments if str(segment) != ""]
        self._reset_lookup_cache()
        return self

    def get_template_folder(self) -> list[str]:
        return list(self._folder)

    def set_template_folder_lookup(self, value: object = True) -> Self:
        """Enable or disable searching theme override folders."""
        self._folder_lookup = self._is_truthy(value)
        self._reset_lookup_cache()
        return self

    def get_template_folder_lookup(self) -> bool:
        return self._folder_lookup

    def set_template_context_extract(self, value: object = False) -> Self:
        """Enable or disable binding context keys as names in templates."""
        self._extract_context = self._is_truthy(value)
        return self

    def get_template_context_extract(self) -> bool:
        return self._extract_context

    def set_aliases(self, aliases: Mapping[str, str] | None = None) -> Self:
        """Set path fragment aliases (original fragment -> replacement)."""
        self._aliases = dict(aliases or {})
        self._reset_lookup_cache()
        return self

    def get_aliases(self) -> dict[str, str]:
        return dict(self._aliases)

    def set_template_current_hook_name(self, value: object) -> Self:
        self._current_hook_name = str(value)
        return self

    def get_template_current_hook_name(self) -> str:
        return self._current_hook_name

    def get_template_origin_base_folder(self) -> list[str]:
        value = self.bus.apply_filters(
            self.topic(Topic.TEMPLATE_ORIGIN_BASE_FOLDER),
            list(self._origin_base_folder),
            self,
        )
        return [str(segment) for segment in wrap(value)]

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    def get(
        self,
        index: KeyPath,
        default: object = None,
        *,
        is_local: bool = True,
    ) -> object:
        """Read a context value.

        The ``template_context_get`` filter runs first; any non-None value it
        returns wins over the stored context.

        Args:
            index: Key, dotted path (``"user.name"``) or list of keys.
            default: Returned when the key is missing at any level.
            is_local: Read the local scope (default) or the global one.
        """
        value = self.bus.apply_filters(
            self.topic(Topic.TEMPLATE_CONTEXT_GET),
            None,
            index,
            default,
            is_local,
            self,
        )
        if value is not None:
            return value
        return self._context.get(index, default, is_local=is_local)

    def set(
        self,
        index: KeyPath,
        value: object = None,
        *,
        is_local: bool = True,
    ) -> dict[str, object]:
        """Write a context value, returning the whole mutated scope."""
        return self._context.set(index, value, is_local=is_local)

    def set_values(
        self,
        values: Mapping[str, object],
        *,
        is_local: bool = True,
    ) -> dict[str, object]:
        return self._context.set_many(values, is_local=is_local)

    def add_template_globals(
        self, context: BaseModel | Mapping[str, object] | None = None
    ) -> Self:
        _ = self._context.add_globals(to_context_dict(context))
        return self

    def get_global_values(self) -> dict[str, object]:
        return self._context.global_values()

    def get_local_values(self) -> dict[str, object]:
        return self._context.local_values()

    def get_values(self) -> dict[str, object]:
        return self._context.values()

    def merge_context(
        self,
        context: BaseModel | Mapping[str, object] | None = None,
        file: Path | None = None,
        name: Sequence[str] | None = None,
    ) -> dict[str, object]:
        """Layer render data over the global and previous local context.

        The merged context passes through the ``template_context`` filter and
        then through the one named after the current hook name; either may
        replace it entirely.

        Returns:
            The new local context.
        """
        merged: object = self._context.merge_local(to_context_dict(context))
        merged = self.bus.apply_filters(
            self.topic(Topic.TEMPLATE_CONTEXT), merged, file, name, self
        )
        merged = self.bus.apply_filters(
            self.topic(Topic.TEMPLATE_CONTEXT, self._current_hook_name),
            merged,
            file,
            name,
            self,
        )
        return self._context.replace_local(
            merged if isinstance(merged, Mapping) else {}
        )

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def get_template_plugin_path(self) -> str:
        path = os.sep.join([*self._base_path, *self._folder])
        return str(
            self.bus.apply_filters(self.topic(Topic.TEMPLATE_PLUGIN_PATH), path, self)
        )

    def get_template_common_path(self) -> str:
        """Return the configured root path joined with this engine's folder."""
        root = str(self.config.get_path()).rstrip("\\/") or os.sep
        path = os.sep.join([root, *self._folder])
        return str(
            self.bus.apply_filters(self.topic(Topic.TEMPLATE_COMMON_PATH), path, self)
        )

    def get_template_public_namespace(self, plugin_namespace: str | None) -> list[str]:
        namespace = [self.config.get_hook_prefix()]
        if plugin_namespace:
            namespace.append(plugin_namespace)
        elif self._origin is not None and self._origin.namespace:
            namespace.append(self._origin.namespace)

        value = self.bus.apply_filters(
            self.topic(Topic.TEMPLATE_PUBLIC_NAMESPACE), namespace, self
        )
        return [str(segment) for segment in wrap(value)]

    def get_template_public_path(
        self, base: Path | str | None, namespace: str | None
    ) -> str | None:
        """Return a theme's override folder for this engine.

        The path is the theme root, the public namespace and any folder
        segments outside the origin base folder.
        """
        if base is None or str(base) == "":
            return None

        path = [
            str(base).rstrip("\\/"),
            *self.get_template_public_namespace(namespace),
            *ordered_difference(self._folder, self.get_template_origin_base_folder()),
        ]
        value = self.bus.apply_filters(
            self.topic(Topic.TEMPLATE_PUBLIC_PATH), os.sep.join(path), self
        )
        return str(value) if value else None

    def get_template_path_list(self) -> list[CandidateFolder]:
        """Return the plugin candidate folders, sorted by priority.

        The plugin folder comes first, followed by one folder per matching
        alias. External code may add folders through the
        ``template_path_list`` filter.
        """
        plugin = CandidateFolder(
            id=PLUGIN_FOLDER_ID,
            priority=PLUGIN_FOLDER_PRIORITY,
            path=self.get_template_plugin_path(),
        )
        folders = [plugin, *apply_aliases([plugin], self._aliases)]

        value = self.bus.apply_filters(
            self.topic(Topic.TEMPLATE_PATH_LIST), folders, self
        )
        return sort_by_priority(coerce_folder(item) for item in wrap(value))

    def get_template_theme_path_list(
        self, namespace: str | None = None
    ) -> list[CandidateFolder]:
        """Return the theme override folders, sorted by priority."""
        folders = [
            CandidateFolder(
                id=CHILD_THEME_FOLDER_ID,
                priority=CHILD_THEME_FOLDER_PRIORITY,
                path=self.get_template_public_path(
                    self.themes.stylesheet_directory(), namespace
                ),
            ),
            CandidateFolder(
                id=PARENT_THEME_FOLDER_ID,
                priority=PARENT_THEME_FOLDER_PRIORITY,
                path=self.get_template_public_path(
                    self.themes.template_directory(), namespace
                ),
            ),
        ]
        value = self.bus.apply_filters(
            self.topic(Topic.TEMPLATE_THEME_PATH_LIST), folders, namespace, self
        )
        return sort_by_priority(coerce_folder(item) for item in wrap(value))

    def locate_template(self, name: TemplateName) -> TemplateLocation | None:
        """Find the file for a template name.

        Plugin candidate folders are searched first. When folder lookup is
        enabled, theme override folders are searched too and a theme file
        wins over the plugin file.

        Returns:
            The location, or None when no candidate folder has the file.
        """
        segments = split_template_name(name)
        extension = self.config.source_extension

        found: str | None = None
        namespace: str | None = None
        for folder in self.get_template_path_list():
            if not folder.path:
                continue
            candidate = merge_paths(folder.path, segments) + extension
            if Path(candidate).is_file():
                found = candidate
                namespace = folder.namespace
                break

        if self._folder_lookup:
            for folder in self.get_template_theme_path_list(namespace):
                if not folder.path:
                    continue
                candidate = os.sep.join([folder.path, *segments]) + extension
                if Path(candidate).is_file():
                    found = candidate
                    break

        if found is None:
            return None

        value = self.bus.apply_filters(
            self.topic(Topic.TEMPLATE_FILE), found, segments, self
        )
        if not value:
            return None
        return TemplateLocation(path=Path(str(value)), namespace=namespace)

    def get_template_file(self, name: TemplateName) -> Path | None:
        """Return the template file path, or None when it cannot be found."""
        location = self.locate_template(name)
        return location.path if location is not None else None

    def template_get_origin_namespace(
        self,
        path: Path | str,
        folder_namespace: str | None = None,
    ) -> str | None:
        """Work out the namespace a template file belongs to.

        The ``template_origin_namespace_map`` filter may map namespaces to
        path fragments; the first fragment contained in ``path`` wins. The
        namespace of the candidate folder and then the origin's namespace are
        used otherwise.
        """
        namespace_map = self.bus.apply_filters(
            self.topic(Topic.TEMPLATE_ORIGIN_NAMESPACE_MAP), {}, str(path), self
        )
        if isinstance(namespace_map, Mapping):
            for namespace, contains in namespace_map.items():
                fragment = str(contains).rstrip("\\/") + os.sep
                if fragment in str(path):
                    return str(namespace)

        if folder_namespace:
            return folder_namespace
        if self._origin is not None and self._origin.namespace:
            return self._origin.namespace
        return None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def do_entry_point(self, entry_point_name: str, *, echo: bool = True) -> str | None:
        """Fire an entry point of the template currently rendering.

        Actions on ``template_entry_point:<hook name>`` and
        ``template_entry_point:<hook name>:<entry point>`` are run with their
        output captured, then the captured markup passes through the matching
        ``template_entry_point_html`` filters.

        Args:
            entry_point_name: Entry point name.
            echo: Whether to also write the markup to stdout.

        Returns:
            The entry point markup, or None when entry points are disabled.
        """
        hook_name = self._current_hook_name
        is_enabled = self.bus.apply_filters(
            self.topic(Topic.TEMPLATE_ENTRY_POINT_IS_ENABLED),
            True,  # noqa: FBT003
            hook_name,
            entry_point_name,
            self,
        )
        if not is_enabled:
            return None

        action_topics = (
            self.topic(Topic.TEMPLATE_ENTRY_POINT, hook_name),
            self.topic(Topic.TEMPLATE_ENTRY_POINT, hook_name, entry_point_name),
        )
        with capture_output() as buffer:
            for action_topic in action_topics:
                if self.bus.has_action(action_topic):
                    self.bus.do_action(action_topic, hook_name, entry_point_name, self)
        html: object = buffer.getvalue()

        for filter_topic in (
            self.topic(Topic.TEMPLATE_ENTRY_POINT_HTML, hook_name),
            self.topic(Topic.TEMPLATE_ENTRY_POINT_HTML, hook_name, entry_point_name),
        ):
            if self.bus.has_filter(filter_topic):
                html = self.bus.apply_filters(
                    filter_topic, html, hook_name, entry_point_name, self
                )

        result = "" if html is None else str(html)
        if echo:
            _ = sys.stdout.write(result)
        return result

    def render(
        self,
        name: TemplateName,
        context: BaseModel | Mapping[str, object] | None = None,
        *,
        echo: bool = True,
        extract_context: bool | None = None,
    ) -> str | None:
        """Render a template.

        Args:
            name: Slash separated template name (``"product/card"``) or list
                of segments, relative to the template folder and without
                extension.
            context: Data layered over the global and previous local context.
            echo: Whether to also write the markup to stdout.
            extract_context: Override the engine's context extraction setting
                for this call.

        Returns:
            The rendered markup, or None when the template cannot be found or
            rendering was disabled.
        """
        done = self.bus.apply_filters(
            self.topic(Topic.TEMPLATE_DONE), None, name, context, echo
        )
        if done is not None:
            self.logger.debug("template_render_disabled", name=str(name))
            return None

        cache_key = name if isinstance(name, str) else "/".join(name)
        segments = self._template_name_parts(cache_key, name)
        location = self._template_location(cache_key, segments)
        if location is None:
            self.logger.debug("template_not_found", name=cache_key)
            return None

        file = location.path
        folder_appendix = ordered_difference(
            self._folder, self.get_template_origin_base_folder()
        )
        origin_namespace = self.template_get_origin_namespace(file, location.namespace)
        if origin_namespace:
            legacy_namespace = [origin_namespace, *segments]
            namespace = [origin_namespace, *folder_appendix, *segments]
        else:
            legacy_namespace = segments
            namespace = [*folder_appendix, *segments]

        hook_name = "/".join(namespace)
        previous_hook_name = self._current_hook_name
        _ = self.set_template_current_hook_name(hook_name)
        self.logger.debug(
            "template_resolved",
            name=cache_key,
            file=str(file),
            hook_name=hook_name,
            legacy_hook_name="/".join(legacy_namespace),
        )

        try:
            pre_html = self.bus.apply_filters(
                self.topic(Topic.TEMPLATE_PRE_HTML), None, file, segments, self
            )
            pre_html = self.bus.apply_filters(
                self.topic(Topic.TEMPLATE_PRE_HTML, hook_name),
                pre_html,
                file,
                segments,
                self,
            )
            if pre_html is not None:
                self.logger.debug("template_pre_html_used", hook_name=hook_name)
                return str(pre_html)

            _ = self.merge_context(context, file, segments)

            before_html = self._run_actions(
                Topic.TEMPLATE_BEFORE_INCLUDE, hook_name, file, segments
            )
            before_html = self._filter_html(
                Topic.TEMPLATE_BEFORE_INCLUDE_HTML, before_html, file, segments
            )

            extract = (
                self._extract_context if extract_context is None else extract_context
            )
            include_html = safe_include(
                file,
                build_template_namespace(
                    self, self._context.local_values(), extract=extract
                ),
            )
            include_html = self._filter_html(
                Topic.TEMPLATE_INCLUDE_HTML, include_html, file, segments
            )

            after_html = self._run_actions(
                Topic.TEMPLATE_AFTER_INCLUDE, hook_name, file, segments
            )
            after_html = self._filter_html(
                Topic.TEMPLATE_AFTER_INCLUDE_HTML, after_html, file, segments
            )

            html = self._filter_html(
                Topic.TEMPLATE_HTML, before_html + include_html + after_html, file, segments
            )
            container = find_container(html)
            if container is None:
                self.logger.debug("template_container_not_found", hook_name=hook_name)
            else:
                html = splice_container_entry_points(
                    html,
                    container,
                    lambda entry_point: self.do_entry_point(entry_point, echo=False),
                )

            if echo:
                _ = sys.stdout.write(html)
            return html
        finally:
            _ = self.set_template_current_hook_name(previous_hook_name)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _is_truthy(self, value: object) -> bool:
        truthy_strings = self.bus.apply_filters(
            self.topic(Topic.IS_TRUTHY_STRINGS), list(self.config.truthy_strings)
        )
        return is_truthy(value, [str(item) for item in wrap(truthy_strings)])

    def _reset_lookup_cache(self) -> None:
        with self._cache_lock:
            self._name_parts.clear()
            self._locations.clear()

    def _template_name_parts(self, cache_key: str, name: TemplateName) -> list[str]:
        with self._cache_lock:
            cached = self._name_parts.get(cache_key)
        if cached is not None:
            return list(cached)

        parts = [sanitize_title_with_dashes(part) for part in split_template_name(name)]
        with self._cache_lock:
            self._name_parts[cache_key] = parts
        return list(parts)

    def _template_location(
        self, cache_key: str, segments: list[str]
    ) -> TemplateLocation | None:
        with self._cache_lock:
            if cache_key in self._locations:
                return self._locations[cache_key]

        location = self.locate_template(segments)
        if location is not None and not location.path.is_file():
            location = None
        with self._cache_lock:
            self._locations[cache_key] = location
        return location

    def _run_actions(
        self,
        suffix: Topic,
        hook_name: str,
        file: Path,
        name: list[str],
    ) -> str:
        with capture_output() as buffer:
            self.bus.do_action(self.topic(suffix), file, name, self)
            self.bus.do_action(self.topic(suffix, hook_name), file, name, self)
        return buffer.getvalue()

    def _filter_html(
        self,
        suffix: Topic,
        html: str,
        file: Path,
        name: list[str],
    ) -> str:
        value: object = self.bus.apply_filters(self.topic(suffix), html, file, name, self)
        value = self.bus.apply_filters(
            self.topic(suffix, self._current_hook_name), value, file, name, self
        )
        return "" if value is None else str(value)
