"""
Collection cache keyed by entity collection name.

Pages read collections through ``fetch(key, loader)``; any mutation against
an entity marks its key stale with ``invalidate(key)`` so the next read
refetches. Pages sharing a key (e.g. "tasks", "plannerSettings") share the
cached list and never issue redundant loads, including concurrent ones.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[Any]]


@dataclass
class CacheEntry:
    """Last-known collection for a key plus its staleness flag."""
    data: Any
    stale: bool = False
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class CollectionCache:
    """
    Mapping of cache key -> CacheEntry.

    Each key carries a generation counter bumped by invalidate(). A load that
    started before an invalidation still stores its result (there is no
    cancellation), but the entry stays stale so the next fetch reloads.
    """

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}
        self._generations: Dict[str, int] = {}
        self._pending: Dict[str, asyncio.Task] = {}

    async def fetch(self, key: str, loader: Loader) -> Any:
        """
        Return the collection for ``key``, loading it if missing or stale.

        Args:
            key: Collection cache key
            loader: Zero-argument coroutine function producing the collection

        Raises:
            Whatever the loader raises; a failed load leaves the cache untouched
        """
        entry = self._entries.get(key)
        if entry is not None and not entry.stale:
            return entry.data

        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key, loader))
            self._pending[key] = task
        return await asyncio.shield(task)

    async def _load(self, key: str, loader: Loader) -> Any:
        generation = self._generations.get(key, 0)
        try:
            data = await loader()
        finally:
            if self._pending.get(key) is asyncio.current_task():
                del self._pending[key]

        stale = self._generations.get(key, 0) != generation
        self._entries[key] = CacheEntry(data=data, stale=stale)
        logger.debug(f"Loaded '{key}' ({'stale' if stale else 'fresh'})")
        return data

    def invalidate(self, key: str) -> None:
        """Mark ``key`` stale; the next fetch reloads it. Idempotent."""
        self._generations[key] = self._generations.get(key, 0) + 1
        entry = self._entries.get(key)
        if entry is not None:
            entry.stale = True
        # A load already in flight must not satisfy reads issued after this point
        self._pending.pop(key, None)
        logger.debug(f"Invalidated '{key}'")

    def invalidate_all(self) -> None:
        for key in list(set(self._entries) | set(self._pending)):
            self.invalidate(key)

    def set(self, key: str, data: Any) -> None:
        """Store a collection directly as fresh."""
        self._entries[key] = CacheEntry(data=data)

    def peek(self, key: str) -> Optional[Any]:
        """Last-known data for ``key`` without loading (None when never loaded)."""
        entry = self._entries.get(key)
        return entry.data if entry is not None else None

    def fetched_at(self, key: str) -> Optional[datetime]:
        """When ``key`` was last stored (None when never loaded)."""
        entry = self._entries.get(key)
        return entry.fetched_at if entry is not None else None

    def is_stale(self, key: str) -> bool:
        """True when ``key`` was never loaded or has been invalidated."""
        entry = self._entries.get(key)
        return entry is None or entry.stale

    def keys(self) -> List[str]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._generations.clear()
        self._pending.clear()
