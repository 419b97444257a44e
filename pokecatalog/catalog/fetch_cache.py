# ABOUTME: Result cache for remote fetches, keyed by resource kind and request parameters.
# ABOUTME: Only completed fetches are stored; failures and cancellations leave no trace.

import logging
from collections.abc import Awaitable, Callable, Hashable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

CacheKey = tuple[Hashable, ...]
"""``(kind, *params)``, e.g. ``("list", 20, 40)`` or ``("batch", (1, 4, 7))``."""


class FetchCache:
    """Per-key store of fetch results that is never invalidated implicitly."""

    def __init__(self) -> None:
        self._entries: dict[CacheKey, Any] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: CacheKey, default: Any = None) -> Any:
        """Cached value for ``key``, or ``default``."""
        return self._entries.get(key, default)

    def put(self, key: CacheKey, value: Any) -> None:
        """Store ``value`` under ``key``."""
        self._entries[key] = value

    async def get_or_fetch(self, key: CacheKey, fetch: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value for ``key``, fetching and storing it on a miss.

        Args:
            key: Cache key, its first element names the resource kind.
            fetch: Zero-argument coroutine factory producing the value.

        Returns:
            The cached or freshly fetched value. None is a valid cached value.
        """
        if key in self._entries:
            return self._entries[key]
        value = await fetch()
        self._entries[key] = value
        return value

    def invalidate(self, kind: str | None = None) -> int:
        """Drop cached results, all of them or those of one resource kind.

        Args:
            kind: Resource kind (first key element) to drop. None drops everything.

        Returns:
            Number of dropped results.
        """
        if kind is None:
            dropped = len(self._entries)
            self._entries.clear()
        else:
            stale = [key for key in self._entries if key and key[0] == kind]
            for key in stale:
                del self._entries[key]
            dropped = len(stale)
        logger.debug("Invalidated %d cached results (kind=%s)", dropped, kind)
        return dropped
