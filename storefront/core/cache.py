"""In-memory response cache with a fixed time-to-live per entry"""

import time
from typing import Any, Callable, Optional


class TTLCache:
    """
    Key/value store whose entries expire ``ttl`` seconds after being set.

    Entries are never invalidated early; a stale read is only possible up
    to the TTL. Expired entries are dropped lazily on access or through
    ``evict_expired``.
    """

    def __init__(self, ttl: float = 300, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        """Get a value, or None if missing or expired"""
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        expires_at = self._clock() + (self.ttl if ttl is None else ttl)
        self._entries[key] = (expires_at, value)

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def evict_expired(self) -> int:
        """Remove expired entries, returning how many were dropped"""
        now = self._clock()
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        self.evict_expired()
        return list(self._entries)

    def __len__(self) -> int:
        return len(self.keys())
