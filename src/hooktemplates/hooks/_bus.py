"""Filter and action registry.

The bus keeps one ordered chain of callbacks per topic. Filters pass a value
through the chain, each callback returning the (possibly unchanged) value
for the next one. Actions call the chain for side effects only. Filters and
actions share the same registry, so a callback added with ``add_action`` is
also visible to ``apply_filters`` on the same topic.
"""

from __future__ import annotations

import itertools
import threading
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_PRIORITY = 10


@dataclass(frozen=True, slots=True)
class HookRegistration:
    """A callback registered on a topic.

    Attributes:
        callback: The callable to invoke.
        priority: Lower values run first.
        accepted_args: Number of positional arguments passed to the callback,
            or None to pass all of them.
        order: Registration sequence number, breaks priority ties.
    """

    callback: Callable[..., object]
    priority: int
    accepted_args: int | None
    order: int

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.priority, self.order)

    def invoke(self, *args: object) -> object:
        if self.accepted_args is not None:
            args = args[: self.accepted_args]
        return self.callback(*args)


class HookBus:
    """Synchronous publish/subscribe bus for filters and actions.

    Callbacks run by ascending priority, then in registration order.

    Example:
        >>> bus = HookBus()
        >>> bus.add_filter("greeting", lambda value: value.upper())
        >>> bus.apply_filters("greeting", "hello")
        'HELLO'
    """

    __slots__ = ("_action_counts", "_lock", "_registrations", "_sequence")

    def __init__(self) -> None:
        self._registrations: dict[str, list[HookRegistration]] = {}
        self._action_counts: Counter[str] = Counter()
        self._sequence: itertools.count[int] = itertools.count()
        self._lock: threading.Lock = threading.Lock()

    def add_filter(
        self,
        topic: str,
        callback: Callable[..., object],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int | None = None,
    ) -> None:
        """Register a callback on a topic.

        Args:
            topic: Topic name.
            callback: Callable receiving the filtered value first, then the
                topic's extra arguments.
            priority: Lower values run first. Defaults to 10.
            accepted_args: Limit the number of positional arguments passed.
        """
        registration = HookRegistration(
            callback=callback,
            priority=priority,
            accepted_args=accepted_args,
            order=next(self._sequence),
        )
        with self._lock:
            chain = [*self._registrations.get(topic, []), registration]
            chain.sort(key=lambda item: item.sort_key)
            self._registrations[topic] = chain

    def add_action(
        self,
        topic: str,
        callback: Callable[..., object],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int | None = None,
    ) -> None:
        """Register a callback run for its side effects."""
        self.add_filter(topic, callback, priority, accepted_args)

    def remove_filter(
        self,
        topic: str,
        callback: Callable[..., object],
        priority: int | None = None,
    ) -> bool:
        """Remove a callback from a topic.

        Args:
            topic: Topic name.
            callback: The callback to remove.
            priority: Only remove registrations with this priority.

        Returns:
            True when at least one registration was removed.
        """
        with self._lock:
            chain = self._registrations.get(topic, [])
            kept = [
                item
                for item in chain
                if not (
                    item.callback == callback
                    and (priority is None or item.priority == priority)
                )
            ]
            if len(kept) == len(chain):
                return False
            if kept:
                self._registrations[topic] = kept
            else:
                del self._registrations[topic]
            return True

    def remove_action(
        self,
        topic: str,
        callback: Callable[..., object],
        priority: int | None = None,
    ) -> bool:
        return self.remove_filter(topic, callback, priority)

    def remove_all(self, topic: str | None = None) -> None:
        """Remove every callback from a topic, or from all topics."""
        with self._lock:
            if topic is None:
                self._registrations.clear()
                self._action_counts.clear()
            else:
                _ = self._registrations.pop(topic, None)

    def has_filter(
        self,
        topic: str,
        callback: Callable[..., object] | None = None,
    ) -> bool:
        """Check whether a topic has callbacks (or a specific callback)."""
        with self._lock:
            chain = self._registrations.get(topic, [])
        if callback is None:
            return bool(chain)
        return any(item.callback == callback for item in chain)

    def has_action(
        self,
        topic: str,
        callback: Callable[..., object] | None = None,
    ) -> bool:
        return self.has_filter(topic, callback)

    def apply_filters(self, topic: str, value: object, *args: object) -> object:
        """Pass a value through every callback of a topic.

        Args:
            topic: Topic name.
            value: Initial value.
            *args: Extra context passed to every callback after the value.

        Returns:
            The value returned by the last callback, or ``value`` unchanged
            when nothing is registered.
        """
        for registration in self._snapshot(topic):
            value = registration.invoke(value, *args)
        return value

    def do_action(self, topic: str, *args: object) -> None:
        """Run every callback of a topic, discarding return values."""
        with self._lock:
            self._action_counts[topic] += 1
        for registration in self._snapshot(topic):
            _ = registration.invoke(*args)

    def did_action(self, topic: str) -> int:
        """Return how many times an action topic has been fired."""
        with self._lock:
            return self._action_counts[topic]

    def _snapshot(self, topic: str) -> tuple[HookRegistration, ...]:
        # Callbacks may register or remove callbacks while the chain runs
        with self._lock:
            return tuple(self._registrations.get(topic, ()))
