"""In-process TTL cache used to hold the OAuth access token.

Any object exposing ``read``/``write``/``exist``/``fetch``/``delete`` with the
same signatures can be passed to :class:`paypal_client.Client` instead, e.g.
an adapter over a shared cache server.
"""

from __future__ import annotations

from collections.abc import Callable
import threading
import time
from typing import Any, Protocol


class TokenCache(Protocol):
    def read(self, key: str) -> Any: ...

    def write(self, key: str, value: Any, expires_in: float | None = None) -> None: ...

    def exist(self, key: str) -> bool: ...

    def fetch(
        self, key: str, compute: Callable[[], Any], expires_in: float | None = None
    ) -> Any: ...

    def delete(self, key: str) -> None: ...

    def clear(self) -> None: ...


class MemoryCache:
    """Thread-safe key/value store with per-entry expiry."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.RLock()
        # key -> (value, absolute expiry or None)
        self._entries: dict[str, tuple[Any, float | None]] = {}

    def _live_entry(self, key: str) -> tuple[Any, float | None] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at = entry[1]
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return None
        return entry

    def read(self, key: str) -> Any:
        with self._lock:
            entry = self._live_entry(key)
            return entry[0] if entry else None

    def write(self, key: str, value: Any, expires_in: float | None = None) -> None:
        expires_at = None if expires_in is None else self._clock() + expires_in
        with self._lock:
            self._entries[key] = (value, expires_at)

    def exist(self, key: str) -> bool:
        with self._lock:
            return self._live_entry(key) is not None

    def fetch(
        self, key: str, compute: Callable[[], Any], expires_in: float | None = None
    ) -> Any:
        """Return the cached value for ``key``, computing and storing it on a miss."""
        with self._lock:
            entry = self._live_entry(key)
            if entry is not None:
                return entry[0]
            value = compute()
            self.write(key, value, expires_in=expires_in)
            return value

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for key in list(self._entries) if self._live_entry(key))
