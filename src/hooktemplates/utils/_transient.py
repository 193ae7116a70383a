"""In-memory transient key-value store with expiry."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

import pendulum

if TYPE_CHECKING:
    from pendulum import DateTime


@dataclass(frozen=True, slots=True)
class TransientEntry:
    """A stored value and the moment it stops being valid.

    Attributes:
        value: The stored value.
        expires_at: Expiry timestamp, or None when the entry never expires.
    """

    value: object
    expires_at: DateTime | None = None

    def is_expired(self, now: DateTime) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class TransientStore:
    """Thread-safe expiring key-value store.

    Values are kept in process memory. Expired entries are dropped lazily
    when they are read.

    Example:
        >>> store = TransientStore()
        >>> store.set("greeting", "<p>hi</p>", expiration=60)
        >>> store.get("greeting")
        '<p>hi</p>'
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: dict[str, TransientEntry] = {}
        self._lock: threading.Lock = threading.Lock()

    def set(self, key: str, value: object, expiration: int = 0) -> None:
        """Store a value.

        Args:
            key: Cache key.
            value: Value to store.
            expiration: Lifetime in seconds. Zero or less keeps the value
                until it is deleted.
        """
        expires_at = (
            pendulum.now("UTC").add(seconds=expiration) if expiration > 0 else None
        )
        with self._lock:
            self._entries[key] = TransientEntry(value=value, expires_at=expires_at)

    def get(self, key: str) -> object | None:
        """Return the stored value, or None when missing or expired."""
        now = pendulum.now("UTC")
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(now):
                del self._entries[key]
                return None
            return entry.value

    def delete(self, key: str) -> bool:
        """Remove a key, returning True when it was present."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
