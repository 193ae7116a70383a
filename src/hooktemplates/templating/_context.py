"""Two-scope context store for template rendering."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from pydantic import BaseModel

from hooktemplates.utils import get_nested, set_nested

if TYPE_CHECKING:
    from hooktemplates.utils import KeyPath


def to_context_dict(context: BaseModel | Mapping[str, object] | None) -> dict[str, object]:
    """Convert caller-supplied render data into a plain dict.

    ``None`` becomes an empty dict and Pydantic models are dumped.
    """
    if context is None:
        return {}
    if isinstance(context, BaseModel):
        return context.model_dump()
    return dict(context)


class ContextStore:
    """Global and local key/value scopes.

    The global scope holds values shared by every render of an engine. The
    local scope is rebuilt on each render by layering the caller's data over
    the global values and the previous local values; it is cumulative and is
    not restored when a nested render returns.
    """

    __slots__ = ("_global", "_local")

    def __init__(self) -> None:
        self._global: dict[str, object] = {}
        self._local: dict[str, object] = {}

    def scope(self, *, is_local: bool = True) -> dict[str, object]:
        return self._local if is_local else self._global

    def get(
        self,
        index: KeyPath,
        default: object = None,
        *,
        is_local: bool = True,
    ) -> object:
        """Read a nested value, returning ``default`` if any level is missing."""
        return get_nested(self.scope(is_local=is_local), index, default)

    def set(
        self,
        index: KeyPath,
        value: object = None,
        *,
        is_local: bool = True,
    ) -> dict[str, object]:
        """Write a nested value and return the whole mutated scope."""
        scope = self.scope(is_local=is_local)
        _ = set_nested(scope, index, value)
        return scope

    def set_many(
        self,
        values: Mapping[str, object],
        *,
        is_local: bool = True,
    ) -> dict[str, object]:
        for key, value in values.items():
            _ = self.set(key, value, is_local=is_local)
        return self.scope(is_local=is_local)

    def add_globals(self, values: Mapping[str, object]) -> dict[str, object]:
        """Merge values into the global scope, new values winning."""
        self._global = {**self._global, **values}
        return self._global

    def merge_local(self, context: Mapping[str, object]) -> dict[str, object]:
        """Layer caller data over the global and previous local values.

        Precedence, highest first: caller data, previous local values,
        global values.
        """
        self._local = {**self.values(), **context}
        return self._local

    def replace_local(self, values: Mapping[str, object]) -> dict[str, object]:
        self._local = dict(values)
        return self._local

    def global_values(self) -> dict[str, object]:
        return self._global

    def local_values(self) -> dict[str, object]:
        return self._local

    def values(self) -> dict[str, object]:
        """Shallow union of global then local values."""
        return {**self._global, **self._local}
