"""Explicit, caller-owned cache for the entity catalog."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from afriwiki.models.catalog import EntityCatalog


@dataclass(frozen=True)
class CatalogSnapshot:
    """A built catalog and the monotonic time it was built at."""

    catalog: EntityCatalog
    built_at: float


class CatalogCache:
    """Hold one catalog snapshot and rebuild it on demand.

    The snapshot is rebuilt when the cache is empty, after
    :meth:`invalidate`, or when it is older than *ttl_seconds*
    (``None`` disables time-based expiry).  A rebuild swaps in a new
    snapshot; a snapshot already handed to callers is never modified.

    Usage::

        cache = CatalogCache(CatalogBuilder(source).build, ttl_seconds=300)
        html = apply_auto_links(html, cache.get())
        ...
        cache.invalidate()  # a new profile was published
    """

    def __init__(
        self,
        build: Callable[[], EntityCatalog],
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._build = build
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._snapshot: CatalogSnapshot | None = None
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> CatalogSnapshot | None:
        return self._snapshot

    def get(self) -> EntityCatalog:
        """Return the cached catalog, rebuilding it first if stale."""
        snapshot = self._snapshot
        if snapshot is not None and not self._expired(snapshot):
            return snapshot.catalog

        with self._lock:
            snapshot = self._snapshot
            if snapshot is None or self._expired(snapshot):
                snapshot = CatalogSnapshot(catalog=self._build(), built_at=self._clock())
                self._snapshot = snapshot
            return snapshot.catalog

    def refresh(self) -> EntityCatalog:
        """Rebuild unconditionally and return the new catalog."""
        with self._lock:
            snapshot = CatalogSnapshot(catalog=self._build(), built_at=self._clock())
            self._snapshot = snapshot
        return snapshot.catalog

    def invalidate(self) -> None:
        """Drop the snapshot; the next :meth:`get` rebuilds."""
        self._snapshot = None

    def _expired(self, snapshot: CatalogSnapshot) -> bool:
        if self.ttl_seconds is None:
            return False
        return self._clock() - snapshot.built_at >= self.ttl_seconds
