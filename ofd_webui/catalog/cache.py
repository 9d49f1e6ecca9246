"""
Process-wide catalog cache.

The snapshot is rebuilt wholesale after every successful write and swapped in
atomically; readers always get the latest committed snapshot. Rebuilds are
single-flight: callers whose request is already covered by a rebuild that
started after they asked reuse its result instead of rebuilding again.
"""

import logging
import threading
import time
from typing import Callable, Optional

from .models import CatalogSnapshot

logger = logging.getLogger(__name__)

SnapshotLoader = Callable[[int], CatalogSnapshot]


class CatalogCache:
    """Holds the current CatalogSnapshot and serializes refreshes."""

    def __init__(self, loader: SnapshotLoader):
        self._loader = loader
        self._snapshot: Optional[CatalogSnapshot] = None
        self._state_lock = threading.Lock()
        self._build_lock = threading.Lock()
        # Refresh tickets handed out / covered by the last completed build
        self._requested = 0
        self._built_through = -1
        self.builds = 0

    def get(self) -> CatalogSnapshot:
        """Return the latest snapshot, loading it on first use."""
        snapshot = self._snapshot
        if snapshot is None:
            return self.refresh()
        return snapshot

    def refresh(self) -> CatalogSnapshot:
        """Rebuild the snapshot so that every write finished before this call is visible."""
        with self._state_lock:
            self._requested += 1
            ticket = self._requested

        with self._build_lock:
            if self._built_through >= ticket and self._snapshot is not None:
                return self._snapshot

            with self._state_lock:
                target = self._requested

            started = time.perf_counter()
            snapshot = self._loader(target)
            self._snapshot = snapshot
            self._built_through = target
            self.builds += 1

        stats = snapshot.stats()
        logger.info(
            "Catalog refreshed in %.1f ms: %d brands, %d materials, %d filaments, %d variants, %d stores",
            (time.perf_counter() - started) * 1000,
            stats['brands'], stats['materials'], stats['filaments'],
            stats['variants'], stats['stores'],
        )
        return snapshot
