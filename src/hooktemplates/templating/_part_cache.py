"""Fragment caching for individual templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hooktemplates.hooks import Topic
from hooktemplates.utils import TransientStore

if TYPE_CHECKING:
    from pathlib import Path

    from ._engine import Template


class PartCache:
    """Serve a template's markup from a transient store.

    Once attached, a render of ``template`` on ``engine`` returns the stored
    markup (skipping file execution) while it is fresh, and fresh markup is
    stored after every full render.

    The cache key is ``"<template>_<id>|<expiration trigger>"``. Changing
    the trigger name (for example to a content version) invalidates earlier
    entries without deleting them.

    Example:
        >>> cache = PartCache(engine, "dummy/product/card", "42", 3600, "products")
        >>> engine.render("product/card", echo=False)  # renders and stores
        >>> engine.render("product/card", echo=False)  # served from the store
    """

    def __init__(
        self,
        engine: Template,
        template: str,
        id: str,  # noqa: A002
        expiration: int,
        expiration_trigger: str,
        *,
        store: TransientStore | None = None,
    ) -> None:
        """Attach a cache to one template of an engine.

        Args:
            engine: The engine rendering the template.
            template: Hook name of the template (namespace, folder appendix
                and name joined with slashes).
            id: Caller-supplied identifier distinguishing variants.
            expiration: Lifetime in seconds, zero to never expire.
            expiration_trigger: Name of the event that invalidates the entry.
            store: Transient store. A private store is created when omitted.
        """
        self.engine: Template = engine
        self.template: str = template
        self.key: str = f"{template}_{id}"
        self.expiration: int = expiration
        self.expiration_trigger: str = expiration_trigger
        self.store: TransientStore = store if store is not None else TransientStore()
        self.add_hooks()

    @property
    def transient_key(self) -> str:
        return f"{self.key}|{self.expiration_trigger}"

    def add_hooks(self) -> None:
        bus = self.engine.bus
        bus.add_filter(
            self.engine.topic(Topic.TEMPLATE_PRE_HTML, self.template), self.display
        )
        bus.add_filter(self.engine.topic(Topic.TEMPLATE_HTML, self.template), self.set)

    def remove_hooks(self) -> None:
        bus = self.engine.bus
        _ = bus.remove_filter(
            self.engine.topic(Topic.TEMPLATE_PRE_HTML, self.template), self.display
        )
        _ = bus.remove_filter(
            self.engine.topic(Topic.TEMPLATE_HTML, self.template), self.set
        )

    def display(self, pre_html: object, *_args: object) -> object:
        """Return the cached markup, or pass ``pre_html`` through on a miss."""
        if pre_html is not None:
            return pre_html
        return self.get()

    def set(self, html: object, _file: Path | None = None, *_args: object) -> object:
        """Store freshly rendered markup and pass it through unchanged."""
        if isinstance(html, str):
            self.store.set(self.transient_key, html, self.expiration)
        return html

    def get(self) -> str | None:
        """Return the stored markup, or None when missing or expired."""
        value = self.store.get(self.transient_key)
        return value if isinstance(value, str) else None
